from locallibrary.security.input_validation.sanitizers import sanitize_text, strip_markup

__all__ = ["sanitize_text", "strip_markup"]

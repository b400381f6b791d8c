from locallibrary.middlewares.logging_middleware import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]

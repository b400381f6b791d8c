"""
Form intake: raw request fields in, a candidate entity and field errors out.

``intake`` never raises for bad input. It always returns the candidate built
from the cleaned values, so a form can be re-rendered with what the user typed.
"""

import typing
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from locallibrary.security.input_validation.sanitizers import sanitize_text

FormT = TypeVar("FormT", bound=BaseModel)


class FieldError(BaseModel):
    field: str
    message: str


@dataclass
class FormResult(Generic[FormT]):
    candidate: FormT
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def errors_for(self, name: str) -> List[str]:
        return [error.message for error in self.errors if error.field == name]


def _is_list_field(annotation: Any) -> bool:
    return typing.get_origin(annotation) in (list, List)


def _getlist(raw: Mapping[str, Any], name: str) -> List[Any]:
    if hasattr(raw, "getlist"):
        values = raw.getlist(name)
    else:
        value = raw.get(name)
        if value is None:
            values = []
        elif isinstance(value, (list, tuple)):
            values = list(value)
        else:
            values = [value]
    return values


def sanitize(schema: Type[FormT], raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Clean raw form fields for ``schema``.

    Text is trimmed and stripped of markup. Multi-valued fields are collected
    from repeated keys or a comma separated string. Empty optional fields
    become None. Date coercion is left to the schema.
    """
    clean: Dict[str, Any] = {}
    for name, info in schema.model_fields.items():
        if _is_list_field(info.annotation):
            items: List[str] = []
            for value in _getlist(raw, name):
                for part in str(value).split(","):
                    part = sanitize_text(part)
                    if part:
                        items.append(part)
            clean[name] = items
            continue

        value = sanitize_text(raw.get(name))
        if value == "" and not info.is_required():
            clean[name] = info.get_default(call_default_factory=True)
        else:
            clean[name] = value
    return clean


def validate(schema: Type[FormT], clean: Dict[str, Any]) -> List[FieldError]:
    try:
        schema.model_validate(clean)
    except ValidationError as exc:
        return [
            FieldError(field=str(error["loc"][0]) if error["loc"] else "__all__", message=error["msg"])
            for error in exc.errors()
        ]
    return []


def intake(schema: Type[FormT], raw: Mapping[str, Any]) -> FormResult[FormT]:
    """Sanitize, validate and build the candidate for a submitted form.

    Args:
        schema: Pydantic model describing the form
        raw: Submitted fields (starlette ``FormData`` or a plain mapping)

    Returns:
        FormResult whose candidate is the validated model when the input is
        valid, otherwise an unvalidated model carrying the cleaned values
    """
    clean = sanitize(schema, raw)
    errors = validate(schema, clean)
    if errors:
        return FormResult(candidate=schema.model_construct(**clean), errors=errors)
    return FormResult(candidate=schema.model_validate(clean))

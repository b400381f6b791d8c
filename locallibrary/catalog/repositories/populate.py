"""
Read-time reference resolution.

A model's reference fields are SQLAlchemy relationships that are never loaded
implicitly (``lazy="raise"``). Callers name the references they want filled in
and get back loader options to attach to a select.
"""

from typing import Iterable, List, Type

from sqlalchemy.orm import RelationshipProperty, selectinload
from sqlalchemy.orm.interfaces import LoaderOption


def populate(model: Type, fields: Iterable[str]) -> List[LoaderOption]:
    """Build loader options that resolve the named references of ``model``.

    Both single references (Book.author) and set references (Book.genres) can
    be requested in one call. A single reference whose target row is gone
    resolves to ``None``; a missing member of a set reference is left out.

    Args:
        model: Mapped class holding the references
        fields: Relationship attribute names to resolve

    Returns:
        Loader options for ``select(model).options(...)``

    Raises:
        ValueError: If a name is not a relationship of ``model``
    """
    options = []
    for field in fields:
        attr = getattr(model, field, None)
        prop = getattr(attr, "property", None)
        if not isinstance(prop, RelationshipProperty):
            raise ValueError(f"{model.__name__}.{field} is not a reference field")
        options.append(selectinload(attr))
    return options

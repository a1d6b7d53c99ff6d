"""Required-field checks for incoming entity payloads.

Every entity class declares ``required_fields``: the wire names a creation
request must carry, in declaration order. The registry below is built once at
import and is read-only afterwards.
"""
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from taskboard.core.errors import RequestValidationFailed
from taskboard.db.models import Board, BoardColumn, Ticket

ModelT = TypeVar("ModelT", bound=BaseModel)

REQUIRED_FIELDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {model.__name__: tuple(model.required_fields) for model in (Board, BoardColumn, Ticket)}
)


def is_blank(value: Any) -> bool:
    """None, empty and whitespace-only strings are blank; False and 0 are not."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def required_fields_for(entity_type: type) -> tuple[str, ...]:
    registered = REQUIRED_FIELDS.get(entity_type.__name__)
    if registered is not None:
        return registered
    return tuple(getattr(entity_type, "required_fields", ()))


def missing_required_fields(
    entity_type: type, submitted: Optional[Mapping[str, Any]]
) -> list[str]:
    """Return the required fields of ``entity_type`` absent from ``submitted``.

    A field is present when its key exists and its value is not blank. The
    result keeps the order the fields were declared in.
    """
    required = required_fields_for(entity_type)
    if not submitted:
        return list(required)
    return [name for name in required if name not in submitted or is_blank(submitted[name])]


def cleared_required_fields(
    entity_type: type, submitted: Optional[Mapping[str, Any]]
) -> list[str]:
    """Required fields an update is trying to blank out."""
    if not submitted:
        return []
    return [
        name
        for name in required_fields_for(entity_type)
        if name in submitted and is_blank(submitted[name])
    ]


def parse_payload(schema: Type[ModelT], body: Optional[Mapping[str, Any]]) -> ModelT:
    """Validate ``body`` against ``schema``, reporting bad fields as a 400."""
    try:
        return schema.model_validate(body or {})
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise RequestValidationFailed(f"Invalid value for field(s): {', '.join(fields)}")

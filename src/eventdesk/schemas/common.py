"""
Shared Pydantic schema helpers.
"""

from datetime import datetime, timezone
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from eventdesk.core.exceptions import ValidationException

ModelT = TypeVar("ModelT", bound=BaseModel)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Any) -> Any:
    """Attach UTC to naive datetimes; other values pass through unchanged."""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RecordModel(BaseModel):
    """
    Base for every stored record.

    Attributes use snake_case; the serialized form uses camelCase keys
    (``createdBy``, ``isActive``...) and both spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Flat JSON-compatible dict in the persisted camelCase shape."""
        return self.model_dump(mode="json", by_alias=True)


def parse_model(model_cls: Type[ModelT], data: Any) -> ModelT:
    """
    Validate data into model_cls, translating pydantic errors.

    Args:
        model_cls: Target schema
        data: Mapping or another pydantic model

    Returns:
        Validated model instance

    Raises:
        ValidationException: If data does not fit the schema
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        fields = [".".join(str(part) for part in err["loc"]) for err in errors]
        raise ValidationException(
            f"Invalid {model_cls.__name__}: {', '.join(fields) or 'input'}",
            {"errors": errors},
        ) from e

"""Parsing raw ids з transport layer."""

from typing import Optional
from uuid import UUID

from identity_admin.domain.shared import CommonExceptionCode, ValidationException


def parse_uuid(value: Optional[str | UUID], field: str) -> UUID:
    """Parse UUID або raise ValidationException з ``{"field": field}``.

    >>> parse_uuid("not-a-uuid", "user_id")
    Traceback (most recent call last):
    ValidationException: FIELD_IS_INVALID ...
    """
    if isinstance(value, UUID):
        return value
    if value is None or not str(value).strip():
        raise ValidationException(CommonExceptionCode.FIELD_IS_REQUIRED, field=field)
    try:
        return UUID(str(value).strip())
    except ValueError as e:
        raise ValidationException(CommonExceptionCode.FIELD_IS_INVALID, field=field) from e


def parse_optional_uuid(value: Optional[str | UUID], field: str) -> Optional[UUID]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_uuid(value, field)

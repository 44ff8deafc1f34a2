"""Email value object."""

import re
from dataclasses import dataclass
from typing import Union

from identity_admin.domain.shared import (
    CommonExceptionCode,
    ValidationException,
    ValueObject,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[A-Za-z]{2,}$")


@dataclass(frozen=True)
class Email(ValueObject):
    """Normalized email address (trimmed, lower-cased).

    Email унікальний case-insensitive, тому нормалізація відбувається тут,
    а не в repository.

    Example:
        >>> Email.create("  John@Example.COM ").value
        'john@example.com'
        >>> Email.create("user@ex.c")
        Traceback (most recent call last):
        ValidationException: FIELD_IS_INVALID (field=email)
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_REQUIRED, field="email"
            )
        if not EMAIL_PATTERN.match(normalized):
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_INVALID, field="email"
            )
        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: str) -> "Email":
        return cls(value)

    @classmethod
    def try_create(cls, value: str) -> Union["Email", ValidationException]:
        """Create email або повернути помилку замість raise."""
        try:
            return cls(value)
        except ValidationException as e:
            return e

    def __str__(self) -> str:
        return self.value

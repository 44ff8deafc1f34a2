"""Password value object.

Password ніколи не зберігається в DB - він лише передається в
external identity provider.
"""

import re
from dataclasses import dataclass, field

from identity_admin.domain.shared import (
    CommonExceptionCode,
    ValidationException,
    ValueObject,
)

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20

_RULES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


@dataclass(frozen=True)
class Password(ValueObject):
    """Password policy: 8-20 chars, upper + lower + digit + special."""

    value: str = field(repr=False)

    def __post_init__(self) -> None:
        value = self.value or ""
        if not value:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_REQUIRED, field="password"
            )
        if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH or not all(
            rule.search(value) for rule in _RULES
        ):
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_INVALID,
                field="password",
                constraint="8-20 chars with upper, lower, digit and special character",
            )

    @classmethod
    def create(cls, value: str) -> "Password":
        return cls(value)

    def __str__(self) -> str:
        return "********"

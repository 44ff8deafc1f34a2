"""Username value object."""

import re
from dataclasses import dataclass

from identity_admin.domain.shared import (
    CommonExceptionCode,
    ValidationException,
    ValueObject,
)

USERNAME_MIN_LENGTH = 8
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


@dataclass(frozen=True)
class Username(ValueObject):
    """Username: 8-20 символів ``[A-Za-z0-9_]``, case-sensitive."""

    value: str

    def __post_init__(self) -> None:
        value = self.value or ""
        if not value:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_REQUIRED, field="username"
            )
        if not (
            USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH
            and USERNAME_PATTERN.match(value)
        ):
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_INVALID,
                field="username",
                constraint=f"{USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} chars [A-Za-z0-9_]",
            )

    @classmethod
    def create(cls, value: str) -> "Username":
        return cls(value)

    def __str__(self) -> str:
        return self.value

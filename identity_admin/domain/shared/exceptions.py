"""Base domain exceptions.

Taxonomy:
- ValidationException: malformed input, uniqueness violation, not-found, wrong
  state. Caller може виправити input. Має machine-readable code + data.
- ConcurrencyConflict: stale version або row зник між read та write.
- BusinessException: бізнес-операція не вдалась (e.g. password verification).
- AuthorizationException: unauthenticated / forbidden, terminal для request.

Infrastructure errors (SQLAlchemy, connection) не обгортаються - вони
пропагуються як є.
"""

from enum import Enum
from typing import Any, Optional


class CommonExceptionCode(str, Enum):
    """Codes shared by всі bounded contexts."""

    FIELD_IS_REQUIRED = "FIELD_IS_REQUIRED"
    FIELD_IS_INVALID = "FIELD_IS_INVALID"
    FIELD_IS_TOO_LONG = "FIELD_IS_TOO_LONG"
    VERSION_CONFLICT = "VERSION_CONFLICT"
    AGGREGATE_NOT_FOUND = "AGGREGATE_NOT_FOUND"


class AuthorizationExceptionCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"


class DomainException(Exception):
    """Base exception for all domain errors.

    Example:
        >>> raise DomainException("User cannot be renamed", user_id=uid)
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (user_id, field, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class CodedException(DomainException):
    """Domain exception що несе enumerable code та structured data.

    ``data`` - те, що transport layer форматує у response
    (``field``, ``constraint``, ids).
    """

    def __init__(
        self, code: str | Enum, message: Optional[str] = None, **data: Any
    ) -> None:
        self.code = code
        self.data = data
        super().__init__(message or self.code_value, **data)

    @property
    def code_value(self) -> str:
        """Code як plain string."""
        return self.code.value if isinstance(self.code, Enum) else str(self.code)


class ValidationException(CodedException):
    """Exception raised when input or state validation fails.

    Example:
        >>> raise ValidationException(
        ...     AuthExceptionCode.EMAIL_ALREADY_TAKEN, field="email"
        ... )
    """

    pass


class ConcurrencyConflict(ValidationException):
    """Exception raised when optimistic locking fails.

    Code ``VERSION_CONFLICT`` - row існує, але хтось оновив його першим.
    Code ``AGGREGATE_NOT_FOUND`` - row зник (видалений) до нашого update.

    Example:
        >>> raise ConcurrencyConflict(
        ...     CommonExceptionCode.VERSION_CONFLICT,
        ...     aggregate="UserGroup",
        ...     aggregate_id=group.id,
        ...     expected_version=0,
        ...     actual_version=1,
        ... )
    """

    @property
    def is_stale(self) -> bool:
        return self.code_value == CommonExceptionCode.VERSION_CONFLICT.value

    @property
    def is_deleted(self) -> bool:
        return self.code_value == CommonExceptionCode.AGGREGATE_NOT_FOUND.value


class BusinessException(CodedException):
    """Exception raised when a business operation cannot be completed."""

    pass


class AuthorizationException(CodedException):
    """Exception raised by authorization guards (401 / 403)."""

    pass

"""Base ValueObject class for domain model.

ValueObject - immutable об'єкт, який порівнюється за значенням атрибутів.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    Example:
        >>> @dataclass(frozen=True)
        ... class Email(ValueObject):
        ...     value: str
        ...
        ...     def __post_init__(self):
        ...         if "@" not in self.value:
        ...             raise ValidationException(CommonExceptionCode.FIELD_IS_INVALID, field="email")
    """

    def __post_init__(self) -> None:
        """Hook для валідації після ініціалізації."""
        pass

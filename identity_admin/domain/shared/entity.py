"""Base Entity class for domain model.

Entity - об'єкт з унікальною ідентичністю, який відрізняється від інших
не атрибутами, а ID.
"""

from abc import ABC
from uuid import UUID


class Entity(ABC):
    """Base class for all domain entities.

    Entity порівнюється за ID, а не за значенням атрибутів.

    Example:
        >>> user1 = User(id=uid, email=Email.create("a@example.com"), ...)
        >>> user2 = User(id=uid, email=Email.create("b@example.com"), ...)
        >>> user1 == user2  # True (same ID)
    """

    def __init__(self, id: UUID) -> None:
        """Initialize entity.

        Args:
            id: Unique identifier (immutable після створення).
        """
        self._id = id

    @property
    def id(self) -> UUID:
        """Get entity ID."""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Entities порівнюються за типом та ID, не за атрибутами."""
        if not isinstance(other, Entity):
            return False
        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

"""UserIdGenerator Port."""

from abc import ABC, abstractmethod
from uuid import UUID

from ..value_objects import Email


class UserIdGenerator(ABC):
    @abstractmethod
    def generate_user_id(self, email: Email) -> UUID:
        """Deterministic id для email (одна адреса -> один id)."""
        pass

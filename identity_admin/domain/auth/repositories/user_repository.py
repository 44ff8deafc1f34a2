"""UserRepository Port.

Users ніколи не видаляються фізично цим core: ``delete`` не підтримується,
використовуйте ``User.mark_for_deletion()`` + ``save``.
"""

from abc import abstractmethod
from typing import Any, Optional
from uuid import UUID

from identity_admin.domain.shared import AggregateRepository, PageRequest, PaginatedResult

from ..entities import User
from ..value_objects import Email, Username


class UserRepository(AggregateRepository[User]):
    """Abstract interface для user persistence."""

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        pass

    @abstractmethod
    async def email_exists(self, email: Email) -> bool:
        """Check local table, потім external identity provider.

        Returns:
            True якщо email зайнятий хоча б в одному з них.
        """
        pass

    @abstractmethod
    async def username_exists(
        self, username: Username, exclude_user_id: Optional[UUID] = None
    ) -> bool:
        """Check username uniqueness, optionally ignoring one user (renames)."""
        pass

    @abstractmethod
    async def add_to_group(
        self, user_id: UUID, user_group_id: UUID, tx: Optional[Any] = None
    ) -> None:
        """Insert membership row. ``tx`` - active transaction з post_save."""
        pass

    @abstractmethod
    async def remove_from_group(
        self, user_id: UUID, user_group_id: UUID, tx: Optional[Any] = None
    ) -> None:
        pass

    @abstractmethod
    async def find(
        self, page: PageRequest, user_group_id: Optional[UUID] = None
    ) -> PaginatedResult[User]:
        """Paged search по email / username / display name."""
        pass

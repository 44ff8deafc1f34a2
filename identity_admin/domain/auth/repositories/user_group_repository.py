"""UserGroupRepository Port."""

from abc import abstractmethod
from typing import Any, Optional
from uuid import UUID

from identity_admin.domain.shared import AggregateRepository, PageRequest, PaginatedResult

from ..entities import UserGroup


class UserGroupRepository(AggregateRepository[UserGroup]):
    """Abstract interface для user group persistence та membership checks."""

    @abstractmethod
    async def exists(self, user_group_id: UUID) -> bool:
        pass

    @abstractmethod
    async def name_exists(self, name: str, exclude_id: Optional[UUID] = None) -> bool:
        pass

    @abstractmethod
    async def user_in_group(self, user_group_id: UUID, user_id: UUID) -> bool:
        pass

    @abstractmethod
    async def role_in_group(self, user_group_id: UUID, role_id: UUID) -> bool:
        pass

    @abstractmethod
    async def add_role(
        self, user_group_id: UUID, role_id: UUID, tx: Optional[Any] = None
    ) -> None:
        pass

    @abstractmethod
    async def remove_role(
        self, user_group_id: UUID, role_id: UUID, tx: Optional[Any] = None
    ) -> None:
        pass

    @abstractmethod
    async def get_user_role_codes(self, user_id: UUID) -> list[str]:
        """Distinct role codes через всі групи user."""
        pass

    @abstractmethod
    async def find(self, page: PageRequest) -> PaginatedResult[UserGroup]:
        pass

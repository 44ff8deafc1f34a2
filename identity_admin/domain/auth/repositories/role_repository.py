"""RoleRepository Port."""

from abc import abstractmethod
from typing import Optional
from uuid import UUID

from identity_admin.domain.shared import AggregateRepository, PageRequest, PaginatedResult

from ..entities import Role


class RoleRepository(AggregateRepository[Role]):
    """Roles - reference data: save використовується для seeding."""

    @abstractmethod
    async def exists(self, role_id: UUID) -> bool:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Role]:
        pass

    @abstractmethod
    async def find(
        self, page: PageRequest, user_group_id: Optional[UUID] = None
    ) -> PaginatedResult[Role]:
        pass

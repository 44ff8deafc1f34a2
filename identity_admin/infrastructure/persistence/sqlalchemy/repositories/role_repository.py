"""SQLAlchemy implementation of RoleRepository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_admin.domain.auth.entities import Role
from identity_admin.domain.auth.repositories import RoleRepository as RoleRepositoryPort
from identity_admin.domain.shared import DomainEventRepository, PageRequest, PaginatedResult
from identity_admin.infrastructure.persistence.sqlalchemy.mappers import RoleMapper
from identity_admin.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserGroupRoleModel,
)

from .base_repository import SQLAlchemyAggregateRepository


class SQLAlchemyRoleRepository(
    SQLAlchemyAggregateRepository[Role, RoleModel], RoleRepositoryPort
):
    default_sort_field = "name"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        event_repository: DomainEventRepository,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        super().__init__(
            session_factory,
            RoleMapper(),
            event_repository,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )

    async def find_by_code(self, code: str) -> Optional[Role]:
        return await self._find_one(RoleModel.code == code)

    async def find(
        self, page: PageRequest, user_group_id: Optional[UUID] = None
    ) -> PaginatedResult[Role]:
        stmt = select(RoleModel)
        if user_group_id is not None:
            stmt = stmt.join(
                UserGroupRoleModel, UserGroupRoleModel.role_id == RoleModel.id
            ).where(UserGroupRoleModel.user_group_id == user_group_id)

        return await self._paginate(
            stmt,
            page,
            sortable_fields={
                "code": RoleModel.code,
                "name": RoleModel.name,
                "created_at": RoleModel.created_at,
                "last_modified_at": RoleModel.last_modified_at,
            },
            search_columns=(RoleModel.code, RoleModel.name, RoleModel.description),
        )

"""SQLAlchemy implementation of UserGroupRepository."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_admin.domain.auth.entities import UserGroup
from identity_admin.domain.auth.repositories import (
    UserGroupRepository as UserGroupRepositoryPort,
)
from identity_admin.domain.shared import DomainEventRepository, PageRequest, PaginatedResult
from identity_admin.infrastructure.persistence.sqlalchemy.mappers import UserGroupMapper
from identity_admin.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserGroupModel,
    UserGroupRoleModel,
    UserGroupUserModel,
)

from .base_repository import SQLAlchemyAggregateRepository


class SQLAlchemyUserGroupRepository(
    SQLAlchemyAggregateRepository[UserGroup, UserGroupModel], UserGroupRepositoryPort
):
    """SQLAlchemy implementation of UserGroupRepository port.

    Example:
        >>> repo = SQLAlchemyUserGroupRepository(session_factory, event_repository)
        >>> await repo.save(group, post_save=lambda tx: repo.add_role(group.id, role_id, tx))
    """

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
            UserGroupMapper(),
            event_repository,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )

    async def _before_delete(self, aggregate: UserGroup, session: AsyncSession) -> None:
        # SQLite не enforce-ить ON DELETE CASCADE без PRAGMA, тому чистимо явно
        await session.execute(
            delete(UserGroupRoleModel).where(UserGroupRoleModel.user_group_id == aggregate.id)
        )
        await session.execute(
            delete(UserGroupUserModel).where(UserGroupUserModel.user_group_id == aggregate.id)
        )

    async def name_exists(self, name: str, exclude_id: Optional[UUID] = None) -> bool:
        criteria = [UserGroupModel.name == name]
        if exclude_id is not None:
            criteria.append(UserGroupModel.id != exclude_id)
        return await self._any(*criteria)

    # ==================== Membership ====================

    async def user_in_group(self, user_group_id: UUID, user_id: UUID) -> bool:
        async with self._read_session() as session:
            found = await session.get(UserGroupUserModel, (user_group_id, user_id))
            return found is not None

    async def role_in_group(self, user_group_id: UUID, role_id: UUID) -> bool:
        async with self._read_session() as session:
            found = await session.get(UserGroupRoleModel, (user_group_id, role_id))
            return found is not None

    async def add_role(
        self, user_group_id: UUID, role_id: UUID, tx: Optional[AsyncSession] = None
    ) -> None:
        async def work(session: AsyncSession) -> None:
            session.add(
                UserGroupRoleModel(
                    user_group_id=user_group_id,
                    role_id=role_id,
                    created_at=datetime.now(timezone.utc),
                )
            )
            await session.flush()

        await self._in_transaction(tx, work)

    async def remove_role(
        self, user_group_id: UUID, role_id: UUID, tx: Optional[AsyncSession] = None
    ) -> None:
        async def work(session: AsyncSession) -> None:
            await session.execute(
                delete(UserGroupRoleModel)
                .where(UserGroupRoleModel.user_group_id == user_group_id)
                .where(UserGroupRoleModel.role_id == role_id)
            )

        await self._in_transaction(tx, work)

    async def get_user_role_codes(self, user_id: UUID) -> list[str]:
        stmt = (
            select(RoleModel.code)
            .distinct()
            .join(UserGroupRoleModel, UserGroupRoleModel.role_id == RoleModel.id)
            .join(
                UserGroupUserModel,
                UserGroupUserModel.user_group_id == UserGroupRoleModel.user_group_id,
            )
            .where(UserGroupUserModel.user_id == user_id)
            .order_by(RoleModel.code)
        )
        async with self._read_session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    # ==================== Read side ====================

    async def find(self, page: PageRequest) -> PaginatedResult[UserGroup]:
        return await self._paginate(
            select(UserGroupModel),
            page,
            sortable_fields={
                "name": UserGroupModel.name,
                "created_at": UserGroupModel.created_at,
                "last_modified_at": UserGroupModel.last_modified_at,
            },
            search_columns=(UserGroupModel.name, UserGroupModel.description),
        )

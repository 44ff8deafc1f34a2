"""SQLAlchemy implementation of UserRepository."""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_admin.domain.auth.entities import User
from identity_admin.domain.auth.ports import IdentityProvider
from identity_admin.domain.auth.repositories import UserRepository as UserRepositoryPort
from identity_admin.domain.auth.value_objects import Email, UserStatus, Username
from identity_admin.domain.shared import DomainEventRepository, PageRequest, PaginatedResult
from identity_admin.infrastructure.persistence.sqlalchemy.mappers import UserMapper
from identity_admin.infrastructure.persistence.sqlalchemy.models import (
    UserGroupUserModel,
    UserModel,
    UserPendingDeletionModel,
)

from .base_repository import SQLAlchemyAggregateRepository

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(
    SQLAlchemyAggregateRepository[User, UserModel], UserRepositoryPort
):
    """SQLAlchemy implementation of UserRepository port.

    Special case: коли user переходить у DELETED, в тій самій транзакції
    upsert-иться row в ``users_pending_deletion``.
    """

    default_sort_field = "email"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        event_repository: DomainEventRepository,
        identity_provider: IdentityProvider,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        super().__init__(
            session_factory,
            UserMapper(),
            event_repository,
            default_page_size=default_page_size,
            max_page_size=max_page_size,
        )
        self._identity_provider = identity_provider

    async def delete(self, aggregate: User) -> None:
        raise NotImplementedError(
            "delete() is not supported for UserRepository. "
            "Use mark_for_deletion() on the aggregate instead."
        )

    async def _after_write(self, aggregate: User, session: AsyncSession) -> None:
        if aggregate.status != UserStatus.DELETED:
            return

        existing = await session.get(UserPendingDeletionModel, aggregate.id)
        if existing is None:
            session.add(
                UserPendingDeletionModel(
                    user_id=aggregate.id, created_at=datetime.now(timezone.utc)
                )
            )
            await session.flush()
            logger.info(
                "user_repository.pending_deletion_recorded",
                extra={"user_id": str(aggregate.id)},
            )

    # ==================== Finders ====================

    async def find_by_email(self, email: Email) -> Optional[User]:
        return await self._find_one(UserModel.email == email.value)

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        return await self._find_one(UserModel.external_id == external_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        return await self._find_one(UserModel.username == username.value)

    async def email_exists(self, email: Email) -> bool:
        if await self._any(UserModel.email == email.value):
            return True
        external = await self._identity_provider.find_user_by_email(email.value)
        return external is not None

    async def username_exists(
        self, username: Username, exclude_user_id: Optional[UUID] = None
    ) -> bool:
        criteria = [UserModel.username == username.value]
        if exclude_user_id is not None:
            criteria.append(UserModel.id != exclude_user_id)
        return await self._any(*criteria)

    async def is_pending_deletion(self, user_id: UUID) -> bool:
        async with self._read_session() as session:
            return await session.get(UserPendingDeletionModel, user_id) is not None

    # ==================== Membership ====================

    async def add_to_group(
        self, user_id: UUID, user_group_id: UUID, tx: Optional[AsyncSession] = None
    ) -> None:
        async def work(session: AsyncSession) -> None:
            session.add(
                UserGroupUserModel(
                    user_group_id=user_group_id,
                    user_id=user_id,
                    created_at=datetime.now(timezone.utc),
                )
            )
            await session.flush()

        await self._in_transaction(tx, work)

    async def remove_from_group(
        self, user_id: UUID, user_group_id: UUID, tx: Optional[AsyncSession] = None
    ) -> None:
        async def work(session: AsyncSession) -> None:
            await session.execute(
                delete(UserGroupUserModel)
                .where(UserGroupUserModel.user_group_id == user_group_id)
                .where(UserGroupUserModel.user_id == user_id)
            )

        await self._in_transaction(tx, work)

    # ==================== Read side ====================

    async def find(
        self, page: PageRequest, user_group_id: Optional[UUID] = None
    ) -> PaginatedResult[User]:
        stmt = select(UserModel)
        if user_group_id is not None:
            stmt = stmt.join(
                UserGroupUserModel, UserGroupUserModel.user_id == UserModel.id
            ).where(UserGroupUserModel.user_group_id == user_group_id)

        return await self._paginate(
            stmt,
            page,
            sortable_fields={
                "email": UserModel.email,
                "username": UserModel.username,
                "display_name": UserModel.display_name,
                "status": UserModel.status,
                "created_at": UserModel.created_at,
                "last_modified_at": UserModel.last_modified_at,
            },
            search_columns=(UserModel.email, UserModel.username, UserModel.display_name),
        )

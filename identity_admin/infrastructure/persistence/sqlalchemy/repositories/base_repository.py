"""Generic SQLAlchemy aggregate repository.

Кожен ``save`` / ``delete`` - рівно одна транзакція:

    row write (INSERT або conditional UPDATE)
      -> append pending events (outbox)
      -> ``_after_write`` hook (side tables)
      -> ``post_save(session)`` callback
      -> commit

Будь-яка помилка на будь-якому кроці -> rollback і re-raise без обгортання.
Optimistic locking - один compare-and-swap statement
``UPDATE ... WHERE id = :id AND version = :v`` з перевіркою rowcount,
без окремого read-then-compare.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Mapping, Optional, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from identity_admin.domain.shared import (
    AggregateRoot,
    CommonExceptionCode,
    ConcurrencyConflict,
    DomainEventRepository,
    PageRequest,
    PaginatedResult,
    PostSaveCallback,
    SortOrder,
    ValidationException,
)
from identity_admin.infrastructure.persistence.sqlalchemy.mappers import AggregateMapper
from identity_admin.infrastructure.persistence.sqlalchemy.unit_of_work import (
    SQLAlchemyUnitOfWork,
)

logger = logging.getLogger(__name__)

TAggregate = TypeVar("TAggregate", bound=AggregateRoot)
TModel = TypeVar("TModel")


def _escape_like(term: str) -> str:
    """Search term матчиться буквально: `%` і `_` не є wildcards."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyAggregateRepository(Generic[TAggregate, TModel]):
    """Base class для per-aggregate repositories.

    Subclasses задають ``mapper`` і можуть override:
    - ``_after_write`` - додаткові writes після row (e.g. pending deletion)
    - ``_before_delete`` - cleanup join tables перед DELETE
    - ``sortable_fields`` / ``search_columns`` / ``default_sort_field`` для ``_paginate``

    Example:
        >>> repo = SQLAlchemyUserGroupRepository(session_factory, event_repository)
        >>> group = UserGroup.create(id=uuid4(), name="Admins")
        >>> await repo.save(group)                # INSERT, version 0
        >>> group.set_name("Root Admins")
        >>> await repo.save(group)                # UPDATE ... WHERE version = 0 -> 1
    """

    default_sort_field: str = "created_at"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        mapper: AggregateMapper[TAggregate, TModel],
        event_repository: DomainEventRepository,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ) -> None:
        """Initialize repository.

        Args:
            session_factory: SQLAlchemy async session factory.
            mapper: Aggregate ↔ ORM mapper.
            event_repository: Outbox log для pending events.
            default_page_size: Page size коли ``PageRequest.items_per_page`` None.
            max_page_size: Upper bound для page size.
        """
        self._session_factory = session_factory
        self._mapper = mapper
        self._event_repository = event_repository
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    @property
    def _model(self) -> type[TModel]:
        return self._mapper.model_class

    # ==================== Writes ====================

    async def save(
        self, aggregate: TAggregate, post_save: Optional[PostSaveCallback] = None
    ) -> None:
        """Create або update aggregate, persist events, run callback - atomically.

        Raises:
            ConcurrencyConflict: Stale version або row вже видалений.
            Exception: DB / callback errors, після rollback, без змін.
        """
        events = aggregate.get_domain_events()
        stamped_at = aggregate.last_modified_at

        async with SQLAlchemyUnitOfWork(self._session_factory) as uow:
            session = uow.session

            if aggregate.is_new:
                operation = "create"
                new_version = 0
                session.add(self._mapper.to_model(aggregate))
                # Unique-constraint races (email, external_id) surface here як IntegrityError
                await session.flush()
            else:
                operation = "update"
                stamped_at = datetime.now(timezone.utc)
                new_version = await self._compare_and_swap(session, aggregate, stamped_at)

            await self._event_repository.append(events, session)
            await self._after_write(aggregate, session)

            if post_save is not None:
                await post_save(session)

            await uow.commit()

        aggregate.version = new_version
        aggregate.last_modified_at = stamped_at
        aggregate.mark_persisted()
        aggregate.clear_domain_events()

        logger.info(
            "aggregate_repository.saved",
            extra={
                "aggregate": aggregate.aggregate_name,
                "aggregate_id": str(aggregate.id),
                "operation": operation,
                "version": new_version,
                "events_count": len(events),
            },
        )

    async def delete(self, aggregate: TAggregate) -> None:
        """Delete row (version-guarded) та persist pending events в одній транзакції."""
        events = aggregate.get_domain_events()

        async with SQLAlchemyUnitOfWork(self._session_factory) as uow:
            session = uow.session

            await self._before_delete(aggregate, session)

            stmt = (
                delete(self._model)
                .where(self._model.id == aggregate.id)
                .where(self._model.version == aggregate.version)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
            if result.rowcount == 0:
                await self._raise_conflict(session, aggregate)

            await self._event_repository.append(events, session)
            await uow.commit()

        aggregate.clear_domain_events()

        logger.info(
            "aggregate_repository.deleted",
            extra={
                "aggregate": aggregate.aggregate_name,
                "aggregate_id": str(aggregate.id),
                "events_count": len(events),
            },
        )

    async def _compare_and_swap(
        self, session: AsyncSession, aggregate: TAggregate, stamped_at: datetime
    ) -> int:
        expected_version = aggregate.version
        values = self._mapper.to_update_values(aggregate)
        values["last_modified_at"] = stamped_at

        stmt = (
            update(self._model)
            .where(self._model.id == aggregate.id)
            .where(self._model.version == expected_version)
            .values(version=expected_version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)

        if result.rowcount == 0:
            await self._raise_conflict(session, aggregate)

        return expected_version + 1

    async def _raise_conflict(self, session: AsyncSession, aggregate: TAggregate) -> None:
        """Classify zero-rows-affected: row видалений чи version застарів."""
        actual_version = await session.scalar(
            select(self._model.version).where(self._model.id == aggregate.id)
        )
        code = (
            CommonExceptionCode.AGGREGATE_NOT_FOUND
            if actual_version is None
            else CommonExceptionCode.VERSION_CONFLICT
        )

        logger.warning(
            "aggregate_repository.conflict",
            extra={
                "aggregate": aggregate.aggregate_name,
                "aggregate_id": str(aggregate.id),
                "expected_version": aggregate.version,
                "actual_version": actual_version,
                "code": code.value,
            },
        )

        raise ConcurrencyConflict(
            code,
            aggregate=aggregate.aggregate_name,
            aggregate_id=str(aggregate.id),
            expected_version=aggregate.version,
            actual_version=actual_version,
        )

    async def _after_write(self, aggregate: TAggregate, session: AsyncSession) -> None:
        pass

    async def _before_delete(self, aggregate: TAggregate, session: AsyncSession) -> None:
        pass

    # ==================== Reads ====================

    async def find_by_id(self, id: UUID) -> Optional[TAggregate]:
        model = await self._get_model(id)
        return self._mapper.to_entity(model) if model is not None else None

    async def _get_model(self, id: UUID) -> Optional[TModel]:
        async with self._read_session() as session:
            return await session.get(self._model, id)

    async def exists(self, id: UUID) -> bool:
        async with self._read_session() as session:
            return await self._row_exists(session, id)

    async def _find_one(self, *criteria: Any) -> Optional[TAggregate]:
        async with self._read_session() as session:
            model = await session.scalar(select(self._model).where(*criteria))
            return self._mapper.to_entity(model) if model is not None else None

    async def _any(self, *criteria: Any) -> bool:
        async with self._read_session() as session:
            found = await session.scalar(
                select(func.count()).select_from(self._model).where(*criteria)
            )
            return bool(found)

    async def _row_exists(self, session: AsyncSession, id: UUID) -> bool:
        found = await session.scalar(select(self._model.id).where(self._model.id == id))
        return found is not None

    @asynccontextmanager
    async def _read_session(self) -> AsyncIterator[AsyncSession]:
        """Read-only session (без явної транзакції)."""
        async with self._session_factory() as session:
            yield session

    async def _in_transaction(
        self,
        tx: Optional[AsyncSession],
        work: Callable[[AsyncSession], Awaitable[None]],
    ) -> None:
        """Run ``work`` в переданій транзакції або у власній."""
        if tx is not None:
            await work(tx)
            return

        async with SQLAlchemyUnitOfWork(self._session_factory) as uow:
            await work(uow.session)
            await uow.commit()

    # ==================== Pagination ====================

    async def _paginate(
        self,
        stmt: Select,
        page: PageRequest,
        sortable_fields: Mapping[str, InstrumentedAttribute],
        search_columns: tuple[InstrumentedAttribute, ...] = (),
    ) -> PaginatedResult[TAggregate]:
        """Apply search, sorting та limit/offset, повернути page + total count."""
        if page.search_term and page.search_term.strip():
            pattern = f"%{_escape_like(page.search_term.strip().lower())}%"
            stmt = stmt.where(
                or_(*(func.lower(col).like(pattern, escape="\\") for col in search_columns))
            )

        sort_field = page.sort_field or self.default_sort_field
        if sort_field not in sortable_fields:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_INVALID,
                field="sort_field",
                constraint=f"one of {sorted(sortable_fields)}",
            )
        column = sortable_fields[sort_field]
        order_by = column.desc() if page.sort_order == SortOrder.DESC else column.asc()

        limit = min(page.items_per_page or self._default_page_size, self._max_page_size)
        offset = page.offset(limit)

        async with self._read_session() as session:
            count = await session.scalar(select(func.count()).select_from(stmt.subquery()))
            result = await session.execute(
                stmt.order_by(order_by, self._model.id).limit(limit).offset(offset)
            )
            models = result.scalars().all()

        return PaginatedResult(
            data=[self._mapper.to_entity(model) for model in models],
            count=count or 0,
            page_index=page.page_index,
        )

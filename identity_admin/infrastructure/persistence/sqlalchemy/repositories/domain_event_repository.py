"""SQLAlchemy implementation of DomainEventRepository (outbox log)."""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_admin.domain.shared import DomainEvent, DomainEventRepository
from identity_admin.infrastructure.persistence.sqlalchemy.mappers import DomainEventMapper
from identity_admin.infrastructure.persistence.sqlalchemy.models import DomainEventModel

logger = logging.getLogger(__name__)


class SQLAlchemyDomainEventRepository(DomainEventRepository):
    """Append-only writer для таблиці ``domain_events``.

    ``append`` завжди виконується в транзакції owning aggregate; events
    ніколи не оновлюються і не використовуються для відновлення стану.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._mapper = DomainEventMapper()

    async def append(self, events: Sequence[DomainEvent], tx: AsyncSession) -> None:
        if not events:
            return

        # Flush по одному, щоб sequence відповідав порядку запису
        for event in events:
            tx.add(self._mapper.to_model(event))
            await tx.flush()

        logger.debug(
            "domain_event_repository.appended",
            extra={"events_count": len(events), "aggregate_id": str(events[0].aggregate_id)},
        )

    async def list_for_aggregate(self, aggregate_id: UUID) -> list[DomainEvent]:
        """Audit view: events одного aggregate в порядку запису."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(DomainEventModel)
                .where(DomainEventModel.aggregate_id == aggregate_id)
                .order_by(DomainEventModel.sequence)
            )
            return [self._mapper.to_entity(model) for model in result.scalars().all()]

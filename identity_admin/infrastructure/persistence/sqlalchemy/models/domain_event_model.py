"""DomainEvent ORM Model - append-only outbox log.

Rows лише додаються (ніколи не оновлюються і не replay-яться). ``sequence``
фіксує порядок запису; окремий delivery процес може читати log по ньому.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, BigInteger, DateTime, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DomainEventModel(Base):
    __tablename__ = "domain_events"

    # SQLite autoincrement працює лише з INTEGER PRIMARY KEY
    sequence: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    event_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True)

    aggregate_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    aggregate_name: Mapped[str] = mapped_column(String(64), nullable=False)
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        # Query: history одного aggregate в порядку запису
        Index("ix_domain_events_aggregate", "aggregate_name", "aggregate_id", "sequence"),
    )

    def __repr__(self) -> str:
        return (
            f"<DomainEventModel(sequence={self.sequence}, "
            f"{self.aggregate_name}.{self.event_type}, aggregate_id={self.aggregate_id})>"
        )

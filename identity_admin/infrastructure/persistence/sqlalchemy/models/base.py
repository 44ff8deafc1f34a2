"""SQLAlchemy Base model та спільні колонки aggregates."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class для всіх ORM models (declarative mapping, SQLAlchemy 2.0+)."""

    pass


class AggregateColumnsMixin:
    """Identity, optimistic locking та audit колонки, спільні для всіх aggregates.

    ``version`` починається з 0 і збільшується рівно на 1 кожним успішним
    conditional UPDATE.
    """

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    last_modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    last_modified_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)

"""User ORM Models - users та users_pending_deletion."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import AggregateColumnsMixin, Base


class UserModel(AggregateColumnsMixin, Base):
    """ORM model для User aggregate.

    Це ТІЛЬКИ для персистенції - БЕЗ business logic!
    Business logic в domain.auth.entities.User.
    """

    __tablename__ = "users"

    # Natural keys (email зберігається вже normalized - lower case)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    external_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    username: Mapped[str | None] = mapped_column(String(20), nullable=True, unique=True)

    sign_in_type: Mapped[str] = mapped_column(String(20), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(
        String(20), nullable=True, index=True
    )  # "ACTIVE", "DISABLED", "DELETED"

    __table_args__ = (Index("ix_users_status_created", "status", "created_at"),)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, status={self.status}, version={self.version})>"


class UserPendingDeletionModel(Base):
    """Side table: users в DELETED, які чекають purge / anonymization.

    Row upsert-иться в тій же транзакції, що й status = DELETED.
    """

    __tablename__ = "users_pending_deletion"

    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<UserPendingDeletionModel(user_id={self.user_id})>"

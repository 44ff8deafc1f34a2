"""UserGroup ORM Models - user_groups та join tables."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import AggregateColumnsMixin, Base


class UserGroupModel(AggregateColumnsMixin, Base):
    """ORM model для UserGroup aggregate."""

    __tablename__ = "user_groups"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<UserGroupModel(id={self.id}, name={self.name}, version={self.version})>"


class UserGroupRoleModel(Base):
    """Membership: role у групі."""

    __tablename__ = "user_group_roles"

    user_group_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("user_groups.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class UserGroupUserModel(Base):
    """Membership: user у групі."""

    __tablename__ = "user_group_users"

    user_group_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("user_groups.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

"""Role ORM Model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import AggregateColumnsMixin, Base


class RoleModel(AggregateColumnsMixin, Base):
    __tablename__ = "roles"

    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, code={self.code})>"

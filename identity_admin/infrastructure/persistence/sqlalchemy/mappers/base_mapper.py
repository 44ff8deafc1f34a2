"""Base Mapper - спільна логіка Domain ↔ ORM conversion."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from identity_admin.domain.shared import AggregateRoot

TEntity = TypeVar("TEntity", bound=AggregateRoot)
TModel = TypeVar("TModel")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite повертає naive datetimes - трактуємо їх як UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class AggregateMapper(ABC, Generic[TEntity, TModel]):
    """Mapper для aggregate ↔ ORM model.

    ``to_entity`` завжди повертає aggregate з порожнім буфером events -
    events з DB ніколи не replay-яться.
    """

    @abstractmethod
    def to_entity(self, model: TModel) -> TEntity:
        pass

    @abstractmethod
    def to_row(self, entity: TEntity) -> dict[str, Any]:
        """Business колонки (без id / version / created_*)."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[TModel]:
        pass

    def to_model(self, entity: TEntity) -> TModel:
        """Convert new aggregate → ORM model для INSERT (version 0)."""
        return self.model_class(
            id=entity.id,
            version=0,
            created_at=entity.created_at,
            created_by=entity.created_by,
            last_modified_at=entity.last_modified_at,
            last_modified_by=entity.last_modified_by,
            **self.to_row(entity),
        )

    def to_update_values(self, entity: TEntity) -> dict[str, Any]:
        """Values для conditional UPDATE (version виставляє repository)."""
        return {
            "last_modified_at": entity.last_modified_at,
            "last_modified_by": entity.last_modified_by,
            **self.to_row(entity),
        }

    @staticmethod
    def reconstructed(entity: TEntity) -> TEntity:
        """Aggregate з DB: без pending events, позначений як persisted."""
        entity.clear_domain_events()
        entity.mark_persisted()
        return entity

    @staticmethod
    def audit_kwargs(model: Any) -> dict[str, Any]:
        return {
            "version": model.version if model.version is not None else 0,
            "created_at": as_utc(model.created_at),
            "created_by": model.created_by,
            "last_modified_at": as_utc(model.last_modified_at),
            "last_modified_by": model.last_modified_by,
        }

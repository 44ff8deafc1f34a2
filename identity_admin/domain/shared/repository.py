"""Generic repository contract для aggregates.

Кожен mutating use case відкриває рівно одну транзакцію всередині
``save`` / ``delete``. ``post_save`` callback отримує handle активної
транзакції (opaque для domain) і виконується перед commit, тому
додаткові writes (join tables) атомарні з row aggregate та його events.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, Optional, Sequence, TypeVar
from uuid import UUID

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent

TAggregate = TypeVar("TAggregate", bound=AggregateRoot)

# Callback отримує active transaction handle (AsyncSession в SQLAlchemy adapter)
PostSaveCallback = Callable[[Any], Awaitable[None]]


class AggregateRepository(ABC, Generic[TAggregate]):
    """Abstract persistence port for one aggregate type."""

    @abstractmethod
    async def save(
        self, aggregate: TAggregate, post_save: Optional[PostSaveCallback] = None
    ) -> None:
        """Create або update aggregate в одній транзакції.

        - новий aggregate (ще не збережений і не завантажений) -> INSERT з version 0
        - інакше conditional UPDATE ``WHERE id = :id AND version = :v``,
          version стає v + 1
        - pending events пишуться в тій же транзакції, потім буфер очищується

        Raises:
            ConcurrencyConflict: Version mismatch або row видалений.
            Exception: Будь-яка помилка з callback / DB - після rollback, як є.
        """
        pass

    @abstractmethod
    async def delete(self, aggregate: TAggregate) -> None:
        """Delete row та persist pending events в одній транзакції."""
        pass

    @abstractmethod
    async def find_by_id(self, id: UUID) -> Optional[TAggregate]:
        """Return aggregate або None якщо row не існує."""
        pass


class DomainEventRepository(ABC):
    """Append-only outbox log для domain events."""

    @abstractmethod
    async def append(self, events: Sequence[DomainEvent], tx: Any) -> None:
        """Append events в порядку запису всередині транзакції ``tx``."""
        pass

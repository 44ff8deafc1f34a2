"""Base DomainEvent class for event-driven architecture.

DomainEvent - факт про те, що сталося з aggregate. Events записуються в
таблицю domain_events в тій самій транзакції, що й зміна aggregate, і
передаються EventDispatcher після commit. Events ніколи не replay-яться:
поточний стан завжди читається з row aggregate.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Immutable record of something that happened to an aggregate.

    Events створюються ТІЛЬКИ через ``AggregateRoot.record_event`` -
    handlers ніколи не конструюють їх напряму.

    Example:
        >>> group = UserGroup.create(id=uuid4(), name="Admins")
        >>> event = group.get_domain_events()[0]
        >>> event.aggregate_name, event.event_type
        ('UserGroup', 'CREATED')
        >>> event.data["name"]
        'Admins'
    """

    aggregate_id: UUID
    """ID aggregate, який згенерував подію."""

    aggregate_name: str
    """Логічна назва типу aggregate ("User", "UserGroup")."""

    event_type: str
    """Тип події в межах aggregate (CREATED, UPDATED, ROLE_ADDED, ...)."""

    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    """Event-specific payload (read-only)."""

    event_id: UUID = field(default_factory=uuid4)
    """Унікальний ID події."""

    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    """Час коли подія сталась (UTC)."""

    def __post_init__(self) -> None:
        # Payload копіюється, щоб зміни в оригінальному dict не протікали в event
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def event_name(self) -> str:
        """Qualified event name, e.g. ``"UserGroup.CREATED"``."""
        return f"{self.aggregate_name}.{self.event_type}"

    def __repr__(self) -> str:
        return (
            f"DomainEvent({self.event_name}, aggregate_id={self.aggregate_id}, "
            f"event_id={self.event_id})"
        )

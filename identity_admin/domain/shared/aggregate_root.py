"""Base AggregateRoot class for domain model.

AggregateRoot - одиниця consistency та persistence для одного business entity.
Він тримає version (optimistic concurrency token), audit metadata та буфер
pending domain events.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, List, Mapping, Optional
from uuid import UUID

from .domain_event import DomainEvent
from .entity import Entity


class AggregateRoot(Entity):
    """Base class for aggregate roots in DDD.

    Правила роботи з Aggregates:
    1. Events записуються ТІЛЬКИ через ``record_event`` з mutation методів
    2. ``record_event`` ніколи не змінює ``version`` чи timestamps -
       ними володіє repository
    3. Кожен handler отримує власний instance, реконструйований з storage
    4. Membership (roles, users у групі) живе в join tables, не в aggregate

    Example:
        >>> class UserGroup(AggregateRoot):
        ...     aggregate_name = "UserGroup"
        ...
        ...     def set_name(self, name: str) -> None:
        ...         self.name = name
        ...         self.record_event(UserGroupEventType.UPDATED, {"field": "name", "value": name})

        >>> group.set_name("Root Admins")
        >>> await user_group_repository.save(group)  # version 0 -> 1, events cleared
    """

    aggregate_name: ClassVar[str] = "Aggregate"

    def __init__(
        self,
        id: UUID,
        version: int = 0,
        created_at: Optional[datetime] = None,
        created_by: Optional[UUID] = None,
        last_modified_at: Optional[datetime] = None,
        last_modified_by: Optional[UUID] = None,
    ) -> None:
        """Initialize aggregate root.

        Args:
            id: Globally unique identifier.
            version: Optimistic concurrency token (0 для нових aggregates).
            created_at: Час створення (default: now UTC).
            created_by: Хто створив (None для system-created / self-registered).
            last_modified_at: Час останньої зміни (default: created_at).
            last_modified_by: Хто змінив останнім.
        """
        super().__init__(id)
        if version < 0:
            raise ValueError(f"version must be non-negative, got {version}")

        now = datetime.now(timezone.utc)
        self.version = version
        self.created_at = created_at or now
        self.created_by = created_by
        self.last_modified_at = last_modified_at or self.created_at
        self.last_modified_by = last_modified_by
        self._domain_events: List[DomainEvent] = []
        self._persisted = False

    @property
    def is_new(self) -> bool:
        """True поки aggregate не має row в storage (ще не збережений і не завантажений)."""
        return not self._persisted

    def mark_persisted(self) -> None:
        """Викликає repository / mapper: instance відповідає існуючому row.

        Persisted aggregate ніколи не йде через INSERT, навіть з version 0:
        якщо його row зник, save повертає AGGREGATE_NOT_FOUND.
        """
        self._persisted = True

    def record_event(
        self, event_type: str | Enum, data: Optional[Mapping[str, Any]] = None
    ) -> DomainEvent:
        """Append a domain event to the pending buffer.

        Args:
            event_type: Event kind (string enum member або str).
            data: Event-specific payload.

        Returns:
            The recorded event.
        """
        kind = event_type.value if isinstance(event_type, Enum) else event_type
        event = DomainEvent(
            aggregate_id=self.id,
            aggregate_name=self.aggregate_name,
            event_type=kind,
            data=dict(data or {}),
        )
        self._domain_events.append(event)
        return event

    def get_domain_events(self) -> List[DomainEvent]:
        """Get a copy of the pending events, in recording order."""
        return self._domain_events.copy()

    def clear_domain_events(self) -> None:
        """Clear all pending domain events.

        Repository викликає це після успішного commit. Можна викликати вручну.
        """
        self._domain_events.clear()

    @property
    def has_domain_events(self) -> bool:
        return len(self._domain_events) > 0

    def prepare_update(
        self, operator_id: Optional[UUID], at: Optional[datetime] = None
    ) -> None:
        """Stamp ``last_modified_by`` / ``last_modified_at`` before an update-save.

        Repository update path теж ставить ``last_modified_at``, тому виклик
        потрібен лише щоб зафіксувати operator.

        Args:
            operator_id: Хто виконує зміну (None для system / self-service без id).
            at: Explicit timestamp (default: now UTC).
        """
        if operator_id is not None:
            self.last_modified_by = operator_id
        self.last_modified_at = at or datetime.now(timezone.utc)

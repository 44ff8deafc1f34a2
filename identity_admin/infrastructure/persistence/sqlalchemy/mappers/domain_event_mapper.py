"""DomainEvent Mapper - event → outbox row."""

from identity_admin.domain.shared import DomainEvent
from identity_admin.infrastructure.persistence.sqlalchemy.models import DomainEventModel

from .base_mapper import as_utc


class DomainEventMapper:
    def to_model(self, event: DomainEvent) -> DomainEventModel:
        return DomainEventModel(
            event_id=event.event_id,
            aggregate_id=event.aggregate_id,
            aggregate_name=event.aggregate_name,
            event_type=event.event_type,
            data=dict(event.data),
            occurred_at=event.occurred_at,
        )

    def to_entity(self, model: DomainEventModel) -> DomainEvent:
        """Read-only reconstruction (audit views, tests) - не для replay."""
        return DomainEvent(
            aggregate_id=model.aggregate_id,
            aggregate_name=model.aggregate_name,
            event_type=model.event_type,
            data=model.data or {},
            event_id=model.event_id,
            occurred_at=as_utc(model.occurred_at),
        )

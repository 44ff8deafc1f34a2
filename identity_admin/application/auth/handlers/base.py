"""Shared persist-then-dispatch step для command handlers."""

from typing import Optional

from identity_admin.domain.shared import AggregateRepository, AggregateRoot, PostSaveCallback
from identity_admin.infrastructure.messaging import EventDispatcher


async def save_and_dispatch(
    repository: AggregateRepository,
    aggregate: AggregateRoot,
    dispatcher: EventDispatcher,
    post_save: Optional[PostSaveCallback] = None,
) -> None:
    """Persist aggregate (+events, +callback) atomically, then dispatch.

    Events знімаються ДО save, бо успішний save очищає buffer. Якщо save
    впав, dispatch не відбувається і events лишаються на aggregate.
    """
    events = aggregate.get_domain_events()
    await repository.save(aggregate, post_save=post_save)
    await dispatcher.dispatch(events)


async def delete_and_dispatch(
    repository: AggregateRepository,
    aggregate: AggregateRoot,
    dispatcher: EventDispatcher,
) -> None:
    events = aggregate.get_domain_events()
    await repository.delete(aggregate)
    await dispatcher.dispatch(events)

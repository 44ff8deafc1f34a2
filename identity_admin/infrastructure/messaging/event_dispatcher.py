"""Event dispatcher - post-commit delivery of domain events.

Lifecycle:
    1. Initialization phase: composition root реєструє handlers в
       ``EventHandlerRegistry``.
    2. ``registry.freeze()`` повертає immutable dispatch table.
    3. Serving phase: ``EventDispatcher`` тільки читає table; нові
       registrations неможливі.

Delivery sequential і fail-fast: перша помилка handler-а propagates до
caller-а, решта events не доставляються. Дані на цей момент вже committed.
"""

import logging
from collections import defaultdict
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterable, Mapping, Protocol, Sequence, Union

from identity_admin.domain.shared import DomainEvent

logger = logging.getLogger(__name__)

# Plain async callable: async def handler(event: DomainEvent) -> None
EventCallable = Callable[[DomainEvent], Awaitable[None]]


class EventHandlerObject(Protocol):
    """Handler object (non-callable): декларує ``event_types`` і має ``async handle(event)``."""

    event_types: Iterable[str]

    async def handle(self, event: DomainEvent) -> None: ...


EventHandler = Union[EventCallable, EventHandlerObject]
DispatchTable = Mapping[str, tuple[EventHandler, ...]]


class RegistryFrozenError(RuntimeError):
    """Registration attempted after the dispatch table was frozen."""


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__name__", type(handler).__name__)


class EventHandlerRegistry:
    """Mutable registry, що існує тільки на етапі ініціалізації.

    Example:
        >>> registry = EventHandlerRegistry()
        >>> registry.register_handler(UserRegisteredHandler())
        >>> registry.register("UserGroup.CREATED", audit_callback)
        >>> table = registry.freeze()
        >>> registry.register("User.DELETED", other)   # RegistryFrozenError
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def register(self, event_name: str, handler: EventHandler) -> None:
        """Register handler for qualified event name (``"User.REGISTERED"``).

        Raises:
            RegistryFrozenError: If ``freeze()`` already called.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register handler for {event_name!r}: registry is frozen"
            )

        self._handlers[event_name].append(handler)
        logger.info(
            "event_registry.handler_registered",
            extra={"event_name": event_name, "handler": _handler_name(handler)},
        )

    def register_handler(self, handler: EventHandlerObject) -> None:
        """Register handler object under every name in its ``event_types``."""
        for event_name in handler.event_types:
            self.register(event_name, handler)

    def freeze(self) -> DispatchTable:
        """Close registration and return read-only dispatch table."""
        self._frozen = True
        table = MappingProxyType(
            {name: tuple(handlers) for name, handlers in self._handlers.items()}
        )
        logger.info(
            "event_registry.frozen",
            extra={"event_names": sorted(table), "handlers_count": sum(map(len, table.values()))},
        )
        return table


class EventDispatcher:
    """Delivers committed events to handlers from a frozen dispatch table.

    Example:
        >>> dispatcher = EventDispatcher(registry.freeze())
        >>> await user_repository.save(user)
        >>> await dispatcher.dispatch(events)
    """

    def __init__(self, table: DispatchTable) -> None:
        if not isinstance(table, MappingProxyType):
            table = MappingProxyType(dict(table))
        self._table = table

    @property
    def table(self) -> DispatchTable:
        return self._table

    def handlers_for(self, event_name: str) -> tuple[EventHandler, ...]:
        return self._table.get(event_name, ())

    async def dispatch(self, events: Sequence[DomainEvent]) -> None:
        """Deliver events in order, each handler in registration order.

        Raises:
            Exception: First handler failure, unchanged.
        """
        for event in events:
            await self._dispatch_one(event)

    async def _dispatch_one(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(event.event_name)
        if not handlers:
            logger.debug(
                "event_dispatcher.no_handlers",
                extra={"event_name": event.event_name},
            )
            return

        logger.info(
            "event_dispatcher.dispatching",
            extra={
                "event_name": event.event_name,
                "event_id": str(event.event_id),
                "handlers_count": len(handlers),
            },
        )

        for handler in handlers:
            try:
                if callable(handler):
                    await handler(event)
                else:
                    await handler.handle(event)
            except Exception:
                logger.error(
                    "event_dispatcher.handler_failed",
                    extra={
                        "event_name": event.event_name,
                        "event_id": str(event.event_id),
                        "handler": _handler_name(handler),
                    },
                    exc_info=True,
                )
                raise

"""Messaging infrastructure - post-commit domain event dispatch."""

from .event_dispatcher import (
    DispatchTable,
    EventDispatcher,
    EventHandler,
    EventHandlerRegistry,
    RegistryFrozenError,
)

__all__ = [
    "DispatchTable",
    "EventDispatcher",
    "EventHandler",
    "EventHandlerRegistry",
    "RegistryFrozenError",
]

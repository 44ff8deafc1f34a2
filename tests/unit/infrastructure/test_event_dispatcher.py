"""Unit tests для EventHandlerRegistry / EventDispatcher."""

from types import MappingProxyType
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from identity_admin.application.auth.event_handlers import UserRegisteredHandler
from identity_admin.domain.auth.entities import UserGroup
from identity_admin.infrastructure.messaging import (
    EventDispatcher,
    EventHandlerRegistry,
    RegistryFrozenError,
)


def _group_events():
    group = UserGroup.create(id=uuid4(), name="Admins")
    group.set_name("Root Admins")
    return group.get_domain_events()


class TestEventHandlerRegistry:
    def test_freeze_returns_read_only_table(self):
        registry = EventHandlerRegistry()
        handler = AsyncMock()
        registry.register("UserGroup.CREATED", handler)

        table = registry.freeze()

        assert isinstance(table, MappingProxyType)
        assert table["UserGroup.CREATED"] == (handler,)
        with pytest.raises(TypeError):
            table["UserGroup.UPDATED"] = (handler,)

    def test_register_after_freeze_fails(self):
        """Test: Після freeze нові registrations неможливі."""
        registry = EventHandlerRegistry()
        registry.freeze()

        with pytest.raises(RegistryFrozenError):
            registry.register("UserGroup.CREATED", AsyncMock())

        assert registry.is_frozen is True

    def test_register_handler_object_uses_event_types(self):
        registry = EventHandlerRegistry()
        handler = UserRegisteredHandler()

        registry.register_handler(handler)

        assert registry.freeze()["User.REGISTERED"] == (handler,)


class TestEventDispatcher:
    @pytest.mark.asyncio
    async def test_dispatch_in_order(self):
        """Test: Events доставляються в порядку запису, handlers - в порядку реєстрації."""
        # Arrange
        calls = []

        async def first(event):
            calls.append(("first", event.event_type))

        async def second(event):
            calls.append(("second", event.event_type))

        registry = EventHandlerRegistry()
        registry.register("UserGroup.CREATED", first)
        registry.register("UserGroup.CREATED", second)
        registry.register("UserGroup.UPDATED", first)
        dispatcher = EventDispatcher(registry.freeze())

        # Act
        await dispatcher.dispatch(_group_events())

        # Assert
        assert calls == [
            ("first", "CREATED"),
            ("second", "CREATED"),
            ("first", "UPDATED"),
        ]

    @pytest.mark.asyncio
    async def test_first_failure_propagates_and_stops_delivery(self):
        # Arrange
        failing = AsyncMock(side_effect=RuntimeError("handler down"))
        later = AsyncMock()
        registry = EventHandlerRegistry()
        registry.register("UserGroup.CREATED", failing)
        registry.register("UserGroup.UPDATED", later)
        dispatcher = EventDispatcher(registry.freeze())

        # Act & Assert
        with pytest.raises(RuntimeError, match="handler down"):
            await dispatcher.dispatch(_group_events())

        later.assert_not_called()

    @pytest.mark.asyncio
    async def test_events_without_handlers_are_ignored(self):
        dispatcher = EventDispatcher(EventHandlerRegistry().freeze())

        await dispatcher.dispatch(_group_events())

        assert dispatcher.handlers_for("UserGroup.CREATED") == ()

    def test_plain_dict_table_is_wrapped(self):
        dispatcher = EventDispatcher({"UserGroup.CREATED": ()})

        assert isinstance(dispatcher.table, MappingProxyType)

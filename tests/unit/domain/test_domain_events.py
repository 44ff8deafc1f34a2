"""Unit tests для AggregateRoot event buffer та DomainEvent."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from identity_admin.domain.auth.entities import UserGroup


class TestDomainEvents:
    def test_events_are_buffered_in_order(self):
        group = UserGroup.create(id=uuid4(), name="Admins")
        group.set_name("Root Admins")
        group.set_description("All access")

        events = group.get_domain_events()

        assert [e.event_type for e in events] == ["CREATED", "UPDATED", "UPDATED"]
        assert all(e.aggregate_id == group.id for e in events)
        assert all(e.aggregate_name == "UserGroup" for e in events)

    def test_get_domain_events_returns_copy(self):
        """Test: Зовнішні зміни списку не впливають на buffer."""
        group = UserGroup.create(id=uuid4(), name="Admins")

        group.get_domain_events().clear()

        assert group.has_domain_events is True

    def test_clear_domain_events(self):
        group = UserGroup.create(id=uuid4(), name="Admins")

        group.clear_domain_events()

        assert group.get_domain_events() == []

    def test_event_is_immutable(self):
        group = UserGroup.create(id=uuid4(), name="Admins")
        event = group.get_domain_events()[0]

        with pytest.raises(AttributeError):
            event.event_type = "DELETED"
        with pytest.raises(TypeError):
            event.data["name"] = "Other"

    def test_event_ids_are_unique(self):
        group = UserGroup.create(id=uuid4(), name="Admins")
        group.set_name("Other")

        first, second = group.get_domain_events()

        assert first.event_id != second.event_id


class TestPrepareUpdate:
    def test_prepare_update_stamps_operator_and_time(self):
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")
        operator_id = uuid4()
        at = datetime(2030, 1, 1, tzinfo=timezone.utc)

        # Act
        group.prepare_update(operator_id, at=at)

        # Assert
        assert group.last_modified_by == operator_id
        assert group.last_modified_at == at

    def test_prepare_update_without_operator_keeps_previous(self):
        operator_id = uuid4()
        group = UserGroup(id=uuid4(), name="Admins", last_modified_by=operator_id)

        group.prepare_update(None)

        assert group.last_modified_by == operator_id

    def test_negative_version_rejected(self):
        with pytest.raises(ValueError):
            UserGroup(id=uuid4(), name="Admins", version=-1)

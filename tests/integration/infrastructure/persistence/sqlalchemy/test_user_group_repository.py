"""Integration tests for UserGroupRepository (optimistic locking + outbox)."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from identity_admin.domain.auth.entities import Role, UserGroup
from identity_admin.domain.shared import CommonExceptionCode, ConcurrencyConflict
from identity_admin.infrastructure.persistence.sqlalchemy.models import (
    DomainEventModel,
    UserGroupModel,
    UserGroupRoleModel,
)


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


class TestUserGroupRepository:
    """Integration tests для UserGroupRepository."""

    @pytest.mark.asyncio
    async def test_create_then_update_increments_version(
        self, user_group_repository, event_repository
    ):
        """Test: create -> version 0, update -> version 1, events у порядку."""
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")

        # Act
        await user_group_repository.save(group)
        assert group.version == 0
        assert not group.has_domain_events

        group.prepare_update(uuid4())
        group.set_name("Root Admins")
        await user_group_repository.save(group)

        # Assert
        assert group.version == 1
        saved = await user_group_repository.find_by_id(group.id)
        assert saved.name == "Root Admins"
        assert saved.version == 1
        assert saved.last_modified_by == group.last_modified_by

        events = await event_repository.list_for_aggregate(group.id)
        assert [e.event_type for e in events] == ["CREATED", "UPDATED"]
        assert events[1].data["value"] == "Root Admins"

    @pytest.mark.asyncio
    async def test_stale_copy_conflicts_without_partial_write(
        self, user_group_repository, session_factory
    ):
        """Test: stale version-0 copy -> VERSION_CONFLICT, ні row ні event не записані."""
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)

        fresh = await user_group_repository.find_by_id(group.id)
        stale = await user_group_repository.find_by_id(group.id)

        fresh.set_name("Root Admins")
        await user_group_repository.save(fresh)
        events_before = await _count(session_factory, DomainEventModel)

        # Act
        stale.set_name("Other")
        with pytest.raises(ConcurrencyConflict) as exc_info:
            await user_group_repository.save(stale)

        # Assert
        assert exc_info.value.code == CommonExceptionCode.VERSION_CONFLICT
        assert exc_info.value.data["expected_version"] == 0
        assert exc_info.value.data["actual_version"] == 1
        assert exc_info.value.is_stale

        current = await user_group_repository.find_by_id(group.id)
        assert current.name == "Root Admins"
        assert current.version == 1
        assert await _count(session_factory, DomainEventModel) == events_before
        # Events залишаються на aggregate для retry
        assert stale.has_domain_events

    @pytest.mark.asyncio
    async def test_update_of_deleted_row_reports_not_found(self, user_group_repository):
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)
        group.set_description("v1")
        await user_group_repository.save(group)

        deleter = await user_group_repository.find_by_id(group.id)
        deleter.mark_for_deletion()
        await user_group_repository.delete(deleter)

        # Act
        group.set_description("v2")
        with pytest.raises(ConcurrencyConflict) as exc_info:
            await user_group_repository.save(group)

        # Assert
        assert exc_info.value.code == CommonExceptionCode.AGGREGATE_NOT_FOUND
        assert exc_info.value.is_deleted
        assert exc_info.value.data["actual_version"] is None

    @pytest.mark.asyncio
    async def test_loaded_version_zero_copy_of_deleted_row_is_not_reinserted(
        self, user_group_repository, event_repository, session_factory
    ):
        """Test: version-0 copy з DB після delete -> AGGREGATE_NOT_FOUND, row не відновлюється."""
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)

        copy_a = await user_group_repository.find_by_id(group.id)
        copy_b = await user_group_repository.find_by_id(group.id)
        assert copy_a.version == 0
        assert not copy_a.is_new

        copy_b.mark_for_deletion()
        await user_group_repository.delete(copy_b)

        # Act
        copy_a.add_role(uuid4())
        with pytest.raises(ConcurrencyConflict) as exc_info:
            await user_group_repository.save(copy_a)

        # Assert
        assert exc_info.value.code == CommonExceptionCode.AGGREGATE_NOT_FOUND
        assert await user_group_repository.find_by_id(group.id) is None
        assert await _count(session_factory, UserGroupModel) == 0

        events = await event_repository.list_for_aggregate(group.id)
        assert [e.event_type for e in events] == ["CREATED", "DELETED"]

    @pytest.mark.asyncio
    async def test_post_save_failure_rolls_back_everything(
        self, user_group_repository, session_factory
    ):
        """Test: exception з callback -> row, version та events не змінені."""
        # Arrange
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)
        events_before = await _count(session_factory, DomainEventModel)

        async def failing_callback(tx) -> None:
            raise RuntimeError("callback failed")

        # Act
        group.set_name("Renamed")
        with pytest.raises(RuntimeError, match="callback failed"):
            await user_group_repository.save(group, post_save=failing_callback)

        # Assert
        stored = await user_group_repository.find_by_id(group.id)
        assert stored.name == "Admins"
        assert stored.version == 0
        assert group.version == 0
        assert await _count(session_factory, DomainEventModel) == events_before

    @pytest.mark.asyncio
    async def test_post_save_writes_in_same_transaction(
        self, user_group_repository, role_repository
    ):
        # Arrange
        role = Role(id=uuid4(), code="AUTH_VIEWER", name="Auth viewer")
        await role_repository.save(role)
        group = UserGroup.create(id=uuid4(), name="Viewers")
        await user_group_repository.save(group)

        # Act
        group.add_role(role.id)

        async def add_group_role(tx) -> None:
            await user_group_repository.add_role(group.id, role.id, tx)

        await user_group_repository.save(group, post_save=add_group_role)

        # Assert
        assert await user_group_repository.role_in_group(group.id, role.id)
        assert group.version == 1

    @pytest.mark.asyncio
    async def test_delete_removes_join_rows_and_records_event(
        self, user_group_repository, role_repository, event_repository, session_factory
    ):
        # Arrange
        role = Role(id=uuid4(), code="AUTH_VIEWER", name="Auth viewer")
        await role_repository.save(role)
        group = UserGroup.create(id=uuid4(), name="Viewers")
        await user_group_repository.save(group)
        await user_group_repository.add_role(group.id, role.id)

        # Act
        group.mark_for_deletion()
        await user_group_repository.delete(group)

        # Assert
        assert await user_group_repository.find_by_id(group.id) is None
        assert await _count(session_factory, UserGroupRoleModel) == 0
        assert await role_repository.find_by_id(role.id) is not None

        events = await event_repository.list_for_aggregate(group.id)
        assert [e.event_type for e in events] == ["CREATED", "DELETED"]

    @pytest.mark.asyncio
    async def test_stale_delete_keeps_row(self, user_group_repository, session_factory):
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)
        stale = await user_group_repository.find_by_id(group.id)
        group.set_name("Renamed")
        await user_group_repository.save(group)

        stale.mark_for_deletion()
        with pytest.raises(ConcurrencyConflict):
            await user_group_repository.delete(stale)

        assert await _count(session_factory, UserGroupModel) == 1

    @pytest.mark.asyncio
    async def test_name_exists_with_exclusion(self, user_group_repository):
        group = UserGroup.create(id=uuid4(), name="Admins")
        await user_group_repository.save(group)

        assert await user_group_repository.name_exists("Admins")
        assert not await user_group_repository.name_exists("Admins", exclude_id=group.id)
        assert not await user_group_repository.name_exists("Other")

"""Unit tests для user group handlers."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from identity_admin.application.auth.commands import (
    AddRoleToUserGroupCommand,
    AddUserToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteUserGroupCommand,
    UpdateUserGroupCommand,
)
from identity_admin.application.auth.handlers import (
    AddRoleToUserGroupHandler,
    AddUserToUserGroupHandler,
    CreateUserGroupHandler,
    DeleteUserGroupHandler,
    UpdateUserGroupHandler,
)
from identity_admin.application.shared import AuthorizationService
from identity_admin.domain.auth.entities import Role, User, UserGroup
from identity_admin.domain.auth.exceptions import AuthExceptionCode
from identity_admin.domain.auth.services import (
    RoleValidatorService,
    UserGroupValidatorService,
    UserValidatorService,
)
from identity_admin.domain.shared import (
    AuthorizationException,
    CommonExceptionCode,
    ValidationException,
)


@pytest.fixture
def group_repository():
    repository = AsyncMock()
    repository.name_exists.return_value = False
    repository.user_in_group.return_value = False
    repository.role_in_group.return_value = False
    return repository


@pytest.fixture
def user_repository():
    return AsyncMock()


@pytest.fixture
def role_repository():
    return AsyncMock()


@pytest.fixture
def dispatcher():
    return AsyncMock()


@pytest.fixture
def existing_group():
    group = UserGroup.create(id=uuid4(), name="Admins")
    group.clear_domain_events()
    return group


class TestCreateUserGroupHandler:
    @pytest.mark.asyncio
    async def test_create_group(self, group_repository, dispatcher, manager_context):
        handler = CreateUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

        group_id = await handler.handle(
            CreateUserGroupCommand(name="  Admins  ", description="Admin team"),
            manager_context,
        )

        saved = group_repository.save.await_args.args[0]
        assert saved.id == group_id
        assert saved.name == "Admins"
        assert saved.created_by == manager_context.user.user_id
        (events,) = dispatcher.dispatch.await_args.args
        assert [e.event_name for e in events] == ["UserGroup.CREATED"]

    @pytest.mark.asyncio
    async def test_viewer_is_forbidden(self, group_repository, dispatcher, viewer_context):
        handler = CreateUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

        with pytest.raises(AuthorizationException) as exc_info:
            await handler.handle(CreateUserGroupCommand(name="Admins"), viewer_context)

        assert exc_info.value.code_value == "FORBIDDEN"
        group_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_taken_name(self, group_repository, dispatcher, manager_context):
        group_repository.name_exists.return_value = True
        handler = CreateUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

        with pytest.raises(ValidationException) as exc_info:
            await handler.handle(CreateUserGroupCommand(name="Admins"), manager_context)

        assert exc_info.value.code == AuthExceptionCode.USER_GROUP_NAME_ALREADY_TAKEN


class TestUpdateUserGroupHandler:
    def _handler(self, group_repository, dispatcher):
        return UpdateUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

    @pytest.mark.asyncio
    async def test_no_changes_skips_save(
        self, group_repository, dispatcher, manager_context, existing_group
    ):
        group_repository.find_by_id.return_value = existing_group

        await self._handler(group_repository, dispatcher).handle(
            UpdateUserGroupCommand(user_group_id=str(existing_group.id), name="Admins"),
            manager_context,
        )

        group_repository.save.assert_not_called()
        dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_rename_excludes_self_from_uniqueness(
        self, group_repository, dispatcher, manager_context, existing_group
    ):
        group_repository.find_by_id.return_value = existing_group

        result = await self._handler(group_repository, dispatcher).handle(
            UpdateUserGroupCommand(user_group_id=str(existing_group.id), name="Root"),
            manager_context,
        )

        assert result.name == "Root"
        group_repository.name_exists.assert_awaited_once_with("Root", existing_group.id)
        group_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_malformed_id(self, group_repository, dispatcher, manager_context):
        with pytest.raises(ValidationException) as exc_info:
            await self._handler(group_repository, dispatcher).handle(
                UpdateUserGroupCommand(user_group_id="not-a-uuid", name="Root"),
                manager_context,
            )

        assert exc_info.value.code == CommonExceptionCode.FIELD_IS_INVALID
        assert exc_info.value.data["field"] == "user_group_id"


class TestDeleteUserGroupHandler:
    @pytest.mark.asyncio
    async def test_delete_dispatches_deleted(
        self, group_repository, dispatcher, manager_context, existing_group
    ):
        group_repository.find_by_id.return_value = existing_group
        handler = DeleteUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

        await handler.handle(
            DeleteUserGroupCommand(user_group_id=str(existing_group.id)), manager_context
        )

        group_repository.delete.assert_awaited_once_with(existing_group)
        (events,) = dispatcher.dispatch.await_args.args
        assert [e.event_name for e in events] == ["UserGroup.DELETED"]

    @pytest.mark.asyncio
    async def test_missing_group(self, group_repository, dispatcher, manager_context):
        group_repository.find_by_id.return_value = None
        handler = DeleteUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

        with pytest.raises(ValidationException) as exc_info:
            await handler.handle(
                DeleteUserGroupCommand(user_group_id=str(uuid4())), manager_context
            )

        assert exc_info.value.code == AuthExceptionCode.USER_GROUP_NOT_FOUND


class TestMembershipHandlers:
    def _handler(self, user_repository, group_repository, dispatcher):
        return AddUserToUserGroupHandler(
            AuthorizationService(),
            user_repository,
            group_repository,
            UserValidatorService(user_repository),
            UserGroupValidatorService(group_repository),
            dispatcher,
        )

    @pytest.mark.asyncio
    async def test_add_user_writes_join_row_in_save_transaction(
        self,
        user_repository,
        group_repository,
        dispatcher,
        manager_context,
        existing_group,
        sample_user_data,
    ):
        # Arrange
        user = User.register(**sample_user_data)
        user.clear_domain_events()
        user_repository.find_by_id.return_value = user
        group_repository.find_by_id.return_value = existing_group
        handler = self._handler(user_repository, group_repository, dispatcher)

        # Act
        await handler.handle(
            AddUserToUserGroupCommand(
                user_group_id=str(existing_group.id), user_id=str(user.id)
            ),
            manager_context,
        )

        # Assert - join row пишеться тільки callback-ом всередині save
        user_repository.add_to_group.assert_not_called()
        post_save = user_repository.save.await_args.kwargs["post_save"]
        tx = object()
        await post_save(tx)
        user_repository.add_to_group.assert_awaited_once_with(user.id, existing_group.id, tx)

        (events,) = dispatcher.dispatch.await_args.args
        assert [e.event_name for e in events] == ["User.ADDED_TO_USER_GROUP"]
        assert dict(events[0].data) == {"user_group_id": str(existing_group.id)}

    @pytest.mark.asyncio
    async def test_add_user_already_member(
        self,
        user_repository,
        group_repository,
        dispatcher,
        manager_context,
        existing_group,
        sample_user_data,
    ):
        user = User.register(**sample_user_data)
        user_repository.find_by_id.return_value = user
        group_repository.find_by_id.return_value = existing_group
        group_repository.user_in_group.return_value = True

        with pytest.raises(ValidationException) as exc_info:
            await self._handler(user_repository, group_repository, dispatcher).handle(
                AddUserToUserGroupCommand(
                    user_group_id=str(existing_group.id), user_id=str(user.id)
                ),
                manager_context,
            )

        assert exc_info.value.code == AuthExceptionCode.USER_ALREADY_IN_GROUP
        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure_skips_dispatch(
        self,
        user_repository,
        group_repository,
        dispatcher,
        manager_context,
        existing_group,
        sample_user_data,
    ):
        user = User.register(**sample_user_data)
        user.clear_domain_events()
        user_repository.find_by_id.return_value = user
        user_repository.save.side_effect = RuntimeError("db down")
        group_repository.find_by_id.return_value = existing_group

        with pytest.raises(RuntimeError):
            await self._handler(user_repository, group_repository, dispatcher).handle(
                AddUserToUserGroupCommand(
                    user_group_id=str(existing_group.id), user_id=str(user.id)
                ),
                manager_context,
            )

        dispatcher.dispatch.assert_not_called()
        assert user.has_domain_events


class TestAddRoleToUserGroupHandler:
    @pytest.mark.asyncio
    async def test_add_role(
        self, group_repository, role_repository, dispatcher, manager_context, existing_group
    ):
        role = Role(id=uuid4(), code="AUTH_VIEWER", name="Auth viewer")
        group_repository.find_by_id.return_value = existing_group
        role_repository.find_by_id.return_value = role
        handler = AddRoleToUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            RoleValidatorService(role_repository),
            dispatcher,
        )

        await handler.handle(
            AddRoleToUserGroupCommand(user_group_id=str(existing_group.id), role_id=str(role.id)),
            manager_context,
        )

        post_save = group_repository.save.await_args.kwargs["post_save"]
        await post_save("tx")
        group_repository.add_role.assert_awaited_once_with(existing_group.id, role.id, "tx")
        assert existing_group.last_modified_by == manager_context.user.user_id

    @pytest.mark.asyncio
    async def test_unknown_role(
        self, group_repository, role_repository, dispatcher, manager_context, existing_group
    ):
        group_repository.find_by_id.return_value = existing_group
        role_repository.find_by_id.return_value = None
        handler = AddRoleToUserGroupHandler(
            AuthorizationService(),
            group_repository,
            UserGroupValidatorService(group_repository),
            RoleValidatorService(role_repository),
            dispatcher,
        )

        with pytest.raises(ValidationException) as exc_info:
            await handler.handle(
                AddRoleToUserGroupCommand(
                    user_group_id=str(existing_group.id), role_id=str(uuid4())
                ),
                manager_context,
            )

        assert exc_info.value.code == AuthExceptionCode.ROLE_NOT_FOUND

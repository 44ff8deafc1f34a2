"""User group handlers (AUTH_MANAGER).

Membership changes записуються як event на aggregate + join row через
``post_save`` callback, тому обидва потрапляють в одну транзакцію.
"""

import logging
from uuid import UUID, uuid4

from identity_admin.application.auth.commands import (
    AddRoleToUserGroupCommand,
    AddUserToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteUserGroupCommand,
    RemoveRoleFromUserGroupCommand,
    RemoveUserFromUserGroupCommand,
    UpdateUserGroupCommand,
)
from identity_admin.application.auth.dtos import UserGroupDTO
from identity_admin.application.shared import (
    AppContext,
    AuthorizationService,
    CommandHandler,
    parse_uuid,
)
from identity_admin.domain.auth.entities import UserGroup
from identity_admin.domain.auth.exceptions import AuthExceptionCode
from identity_admin.domain.auth.repositories import UserGroupRepository, UserRepository
from identity_admin.domain.auth.services import (
    RoleValidatorService,
    UserGroupValidatorService,
    UserValidatorService,
)
from identity_admin.domain.auth.value_objects import AuthRole
from identity_admin.domain.shared import ValidationException
from identity_admin.infrastructure.messaging import EventDispatcher

from .base import delete_and_dispatch, save_and_dispatch

logger = logging.getLogger(__name__)


class CreateUserGroupHandler(CommandHandler[CreateUserGroupCommand, UUID]):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_repository: UserGroupRepository,
        user_group_validator: UserGroupValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_group_repository = user_group_repository
        self.user_group_validator = user_group_validator
        self.dispatcher = dispatcher

    async def handle(self, command: CreateUserGroupCommand, context: AppContext) -> UUID:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        await self.user_group_validator.validate_name_uniqueness(command.name)

        group = UserGroup.create(
            id=uuid4(),
            name=command.name,
            description=command.description,
            created_by=operator.user_id,
        )
        await save_and_dispatch(self.user_group_repository, group, self.dispatcher)

        logger.info(
            "user_group.created",
            extra={"user_group_id": str(group.id), "operator_id": str(operator.user_id)},
        )
        return group.id


class UpdateUserGroupHandler(CommandHandler[UpdateUserGroupCommand, UserGroupDTO]):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_repository: UserGroupRepository,
        user_group_validator: UserGroupValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_group_repository = user_group_repository
        self.user_group_validator = user_group_validator
        self.dispatcher = dispatcher

    async def handle(self, command: UpdateUserGroupCommand, context: AppContext) -> UserGroupDTO:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        if command.name is None and command.description is None:
            raise ValidationException(AuthExceptionCode.NO_UPDATES_PROVIDED)

        group_id = parse_uuid(command.user_group_id, "user_group_id")
        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)

        group.prepare_update(operator.user_id)
        if command.name is not None:
            await self.user_group_validator.validate_name_uniqueness(
                command.name, exclude_id=group.id
            )
            group.set_name(command.name)
        if command.description is not None:
            group.set_description(command.description)

        if group.has_domain_events:
            await save_and_dispatch(self.user_group_repository, group, self.dispatcher)
        return UserGroupDTO.from_entity(group)


class DeleteUserGroupHandler(CommandHandler[DeleteUserGroupCommand, None]):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_repository: UserGroupRepository,
        user_group_validator: UserGroupValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_group_repository = user_group_repository
        self.user_group_validator = user_group_validator
        self.dispatcher = dispatcher

    async def handle(self, command: DeleteUserGroupCommand, context: AppContext) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        group_id = parse_uuid(command.user_group_id, "user_group_id")
        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)

        group.mark_for_deletion()
        await delete_and_dispatch(self.user_group_repository, group, self.dispatcher)

        logger.info(
            "user_group.deleted",
            extra={"user_group_id": str(group.id), "operator_id": str(operator.user_id)},
        )


class _MembershipHandler:
    def __init__(
        self,
        authorization: AuthorizationService,
        user_repository: UserRepository,
        user_group_repository: UserGroupRepository,
        user_validator: UserValidatorService,
        user_group_validator: UserGroupValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_repository = user_repository
        self.user_group_repository = user_group_repository
        self.user_validator = user_validator
        self.user_group_validator = user_group_validator
        self.dispatcher = dispatcher


class AddUserToUserGroupHandler(
    _MembershipHandler, CommandHandler[AddUserToUserGroupCommand, None]
):
    async def handle(self, command: AddUserToUserGroupCommand, context: AppContext) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        group_id = parse_uuid(command.user_group_id, "user_group_id")
        user_id = parse_uuid(command.user_id, "user_id")

        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)
        user = await self.user_validator.validate_user_not_deleted_by_id(user_id)

        if await self.user_group_repository.user_in_group(group.id, user.id):
            raise ValidationException(
                AuthExceptionCode.USER_ALREADY_IN_GROUP,
                user_id=str(user.id),
                user_group_id=str(group.id),
            )

        user.prepare_update(operator.user_id)
        user.added_to_user_group(group.id)

        async def add_membership(tx) -> None:
            await self.user_repository.add_to_group(user.id, group.id, tx)

        await save_and_dispatch(
            self.user_repository, user, self.dispatcher, post_save=add_membership
        )


class RemoveUserFromUserGroupHandler(
    _MembershipHandler, CommandHandler[RemoveUserFromUserGroupCommand, None]
):
    async def handle(
        self, command: RemoveUserFromUserGroupCommand, context: AppContext
    ) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        group_id = parse_uuid(command.user_group_id, "user_group_id")
        user_id = parse_uuid(command.user_id, "user_id")

        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)
        user = await self.user_validator.validate_user_not_deleted_by_id(user_id)

        if not await self.user_group_repository.user_in_group(group.id, user.id):
            raise ValidationException(
                AuthExceptionCode.USER_NOT_IN_GROUP,
                user_id=str(user.id),
                user_group_id=str(group.id),
            )

        user.prepare_update(operator.user_id)
        user.removed_from_user_group(group.id)

        async def remove_membership(tx) -> None:
            await self.user_repository.remove_from_group(user.id, group.id, tx)

        await save_and_dispatch(
            self.user_repository, user, self.dispatcher, post_save=remove_membership
        )


class _GroupRoleHandler:
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_repository: UserGroupRepository,
        user_group_validator: UserGroupValidatorService,
        role_validator: RoleValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_group_repository = user_group_repository
        self.user_group_validator = user_group_validator
        self.role_validator = role_validator
        self.dispatcher = dispatcher


class AddRoleToUserGroupHandler(
    _GroupRoleHandler, CommandHandler[AddRoleToUserGroupCommand, None]
):
    async def handle(self, command: AddRoleToUserGroupCommand, context: AppContext) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        group_id = parse_uuid(command.user_group_id, "user_group_id")
        role_id = parse_uuid(command.role_id, "role_id")

        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)
        role = await self.role_validator.validate_role_exists_by_id(role_id)

        if await self.user_group_repository.role_in_group(group.id, role.id):
            raise ValidationException(
                AuthExceptionCode.ROLE_ALREADY_IN_GROUP,
                role_id=str(role.id),
                user_group_id=str(group.id),
            )

        group.prepare_update(operator.user_id)
        group.add_role(role.id)

        async def add_group_role(tx) -> None:
            await self.user_group_repository.add_role(group.id, role.id, tx)

        await save_and_dispatch(
            self.user_group_repository, group, self.dispatcher, post_save=add_group_role
        )


class RemoveRoleFromUserGroupHandler(
    _GroupRoleHandler, CommandHandler[RemoveRoleFromUserGroupCommand, None]
):
    async def handle(
        self, command: RemoveRoleFromUserGroupCommand, context: AppContext
    ) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        group_id = parse_uuid(command.user_group_id, "user_group_id")
        role_id = parse_uuid(command.role_id, "role_id")

        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)
        role = await self.role_validator.validate_role_exists_by_id(role_id)

        if not await self.user_group_repository.role_in_group(group.id, role.id):
            raise ValidationException(
                AuthExceptionCode.ROLE_NOT_IN_GROUP,
                role_id=str(role.id),
                user_group_id=str(group.id),
            )

        group.prepare_update(operator.user_id)
        group.remove_role(role.id)

        async def remove_group_role(tx) -> None:
            await self.user_group_repository.remove_role(group.id, role.id, tx)

        await save_and_dispatch(
            self.user_group_repository, group, self.dispatcher, post_save=remove_group_role
        )

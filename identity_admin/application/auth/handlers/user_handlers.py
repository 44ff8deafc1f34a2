"""User administration handlers (AUTH_MANAGER)."""

import logging

from identity_admin.application.auth.commands import (
    DeleteUserCommand,
    ToggleUserStatusCommand,
    UpdateUserCommand,
)
from identity_admin.application.auth.dtos import UserDTO
from identity_admin.application.shared import (
    AppContext,
    AuthorizationService,
    CommandHandler,
    parse_uuid,
)
from identity_admin.domain.auth.repositories import UserRepository
from identity_admin.domain.auth.services import UserValidatorService
from identity_admin.domain.auth.value_objects import AuthRole
from identity_admin.infrastructure.messaging import EventDispatcher

from .account_handlers import apply_profile_changes
from .base import save_and_dispatch

logger = logging.getLogger(__name__)


class _UserAdminHandler:
    def __init__(
        self,
        authorization: AuthorizationService,
        user_repository: UserRepository,
        user_validator: UserValidatorService,
        dispatcher: EventDispatcher,
    ) -> None:
        self.authorization = authorization
        self.user_repository = user_repository
        self.user_validator = user_validator
        self.dispatcher = dispatcher


class UpdateUserHandler(_UserAdminHandler, CommandHandler[UpdateUserCommand, UserDTO]):
    async def handle(self, command: UpdateUserCommand, context: AppContext) -> UserDTO:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        user_id = parse_uuid(command.user_id, "user_id")
        user = await self.user_validator.validate_user_not_deleted_by_id(user_id)

        user.prepare_update(operator.user_id)
        await apply_profile_changes(
            user, command.username, command.display_name, self.user_validator
        )

        if user.has_domain_events:
            await save_and_dispatch(self.user_repository, user, self.dispatcher)
        return UserDTO.from_entity(user)


class ToggleUserStatusHandler(
    _UserAdminHandler, CommandHandler[ToggleUserStatusCommand, UserDTO]
):
    """Enable / disable user.

    ``enabled=True`` вимагає DISABLED user (USER_MUST_BE_DISABLED),
    ``enabled=False`` вимагає ACTIVE (USER_MUST_BE_ACTIVE).
    """

    async def handle(self, command: ToggleUserStatusCommand, context: AppContext) -> UserDTO:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        user_id = parse_uuid(command.user_id, "user_id")
        user = await self.user_validator.validate_user_not_deleted_by_id(user_id)

        user.prepare_update(operator.user_id)
        if command.enabled:
            user.activate()
        else:
            user.disable()

        await save_and_dispatch(self.user_repository, user, self.dispatcher)

        logger.info(
            "user.status_changed",
            extra={
                "user_id": str(user.id),
                "status": user.status.value,
                "operator_id": str(operator.user_id),
            },
        )
        return UserDTO.from_entity(user)


class DeleteUserHandler(_UserAdminHandler, CommandHandler[DeleteUserCommand, None]):
    async def handle(self, command: DeleteUserCommand, context: AppContext) -> None:
        operator = self.authorization.require_role(AuthRole.AUTH_MANAGER, context)
        user_id = parse_uuid(command.user_id, "user_id")
        user = await self.user_validator.validate_user_exists_by_id(user_id)

        user.prepare_update(operator.user_id)
        user.mark_for_deletion()
        await save_and_dispatch(self.user_repository, user, self.dispatcher)

        logger.info(
            "user.deleted",
            extra={"user_id": str(user.id), "operator_id": str(operator.user_id)},
        )

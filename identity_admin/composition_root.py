"""
Composition Root

- Single place where adapters, repositories and handlers are wired together
- Plain dataclass container, no DI framework
- Event handler registration happens here and ends with ``freeze()``;
  після цього dispatch table immutable до кінця процесу
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import NAMESPACE_URL, UUID, uuid5

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_admin.application.auth.event_handlers import UserRegisteredHandler
from identity_admin.application.auth.handlers import (
    AddRoleToUserGroupHandler,
    AddUserToUserGroupHandler,
    CreateUserGroupHandler,
    DeleteAccountHandler,
    DeleteUserGroupHandler,
    DeleteUserHandler,
    FindRolesHandler,
    FindUserGroupsHandler,
    FindUsersHandler,
    GetProfileHandler,
    GetRoleHandler,
    GetUserGroupHandler,
    GetUserHandler,
    RegisterHandler,
    RemoveRoleFromUserGroupHandler,
    RemoveUserFromUserGroupHandler,
    RequestAccessTokenHandler,
    SignInHandler,
    ToggleUserStatusHandler,
    UpdateProfileHandler,
    UpdateUserGroupHandler,
    UpdateUserHandler,
)
from identity_admin.application.shared import AuthorizationService
from identity_admin.config import Settings
from identity_admin.domain.auth.entities import Role
from identity_admin.domain.auth.ports import IdentityProvider
from identity_admin.domain.auth.services import (
    RoleValidatorService,
    UserGroupValidatorService,
    UserValidatorService,
)
from identity_admin.domain.auth.value_objects import AuthRole
from identity_admin.infrastructure.auth import (
    InMemoryIdentityProvider,
    JWTManager,
    Uuid5UserIdGenerator,
)
from identity_admin.infrastructure.messaging import (
    EventDispatcher,
    EventHandler,
    EventHandlerRegistry,
)
from identity_admin.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyDomainEventRepository,
    SQLAlchemyRoleRepository,
    SQLAlchemyUserGroupRepository,
    SQLAlchemyUserRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLES = {
    AuthRole.AUTH_MANAGER: ("Auth manager", "Manage users, user groups and roles"),
    AuthRole.AUTH_VIEWER: ("Auth viewer", "Read users, user groups and roles"),
}


@dataclass
class Container:
    """DI container holding all wired dependencies."""

    # Infrastructure
    identity_provider: IdentityProvider
    token_signer: JWTManager
    dispatcher: EventDispatcher
    event_repository: SQLAlchemyDomainEventRepository
    user_repository: SQLAlchemyUserRepository
    user_group_repository: SQLAlchemyUserGroupRepository
    role_repository: SQLAlchemyRoleRepository
    authorization: AuthorizationService

    # Account commands
    register: RegisterHandler
    sign_in: SignInHandler
    request_access_token: RequestAccessTokenHandler
    update_profile: UpdateProfileHandler
    delete_account: DeleteAccountHandler

    # User commands
    update_user: UpdateUserHandler
    toggle_user_status: ToggleUserStatusHandler
    delete_user: DeleteUserHandler

    # User group commands
    create_user_group: CreateUserGroupHandler
    update_user_group: UpdateUserGroupHandler
    delete_user_group: DeleteUserGroupHandler
    add_user_to_user_group: AddUserToUserGroupHandler
    remove_user_from_user_group: RemoveUserFromUserGroupHandler
    add_role_to_user_group: AddRoleToUserGroupHandler
    remove_role_from_user_group: RemoveRoleFromUserGroupHandler

    # Queries
    get_profile: GetProfileHandler
    get_user: GetUserHandler
    find_users: FindUsersHandler
    get_user_group: GetUserGroupHandler
    find_user_groups: FindUserGroupsHandler
    get_role: GetRoleHandler
    find_roles: FindRolesHandler


def build_dispatcher(
    extra_handlers: Iterable[tuple[str, EventHandler]] = (),
) -> EventDispatcher:
    """Register built-in + extra handlers, freeze, return dispatcher."""
    registry = EventHandlerRegistry()
    registry.register_handler(UserRegisteredHandler())
    for event_name, handler in extra_handlers:
        registry.register(event_name, handler)
    return EventDispatcher(registry.freeze())


def create_container(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
    identity_provider: Optional[IdentityProvider] = None,
    extra_event_handlers: Iterable[tuple[str, EventHandler]] = (),
) -> Container:
    """Create and wire all dependencies.

    Args:
        session_factory: SQLAlchemy async session factory.
        settings: Application settings.
        identity_provider: Provider adapter (default: in-process provider).
        extra_event_handlers: ``(event_name, handler)`` pairs registered
            before the dispatch table is frozen.
    """
    identity_provider = identity_provider or InMemoryIdentityProvider()
    token_signer = JWTManager(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_access_token_expire_minutes,
    )
    user_id_generator = Uuid5UserIdGenerator(settings.app_code)
    dispatcher = build_dispatcher(extra_event_handlers)

    page_sizes = {
        "default_page_size": settings.pagination_default_items_per_page,
        "max_page_size": settings.pagination_max_items_per_page,
    }
    event_repository = SQLAlchemyDomainEventRepository(session_factory)
    user_repository = SQLAlchemyUserRepository(
        session_factory, event_repository, identity_provider, **page_sizes
    )
    user_group_repository = SQLAlchemyUserGroupRepository(
        session_factory, event_repository, **page_sizes
    )
    role_repository = SQLAlchemyRoleRepository(session_factory, event_repository, **page_sizes)

    authorization = AuthorizationService()
    user_validator = UserValidatorService(user_repository)
    user_group_validator = UserGroupValidatorService(user_group_repository)
    role_validator = RoleValidatorService(role_repository)

    user_admin = (authorization, user_repository, user_validator, dispatcher)
    group_admin = (authorization, user_group_repository, user_group_validator, dispatcher)
    membership = (
        authorization,
        user_repository,
        user_group_repository,
        user_validator,
        user_group_validator,
        dispatcher,
    )
    group_roles = (
        authorization,
        user_group_repository,
        user_group_validator,
        role_validator,
        dispatcher,
    )

    container = Container(
        identity_provider=identity_provider,
        token_signer=token_signer,
        dispatcher=dispatcher,
        event_repository=event_repository,
        user_repository=user_repository,
        user_group_repository=user_group_repository,
        role_repository=role_repository,
        authorization=authorization,
        register=RegisterHandler(
            user_repository, user_validator, user_id_generator, identity_provider, dispatcher
        ),
        sign_in=SignInHandler(user_repository, identity_provider),
        request_access_token=RequestAccessTokenHandler(
            user_repository,
            user_group_repository,
            user_id_generator,
            identity_provider,
            token_signer,
            dispatcher,
        ),
        update_profile=UpdateProfileHandler(*user_admin),
        delete_account=DeleteAccountHandler(*user_admin),
        update_user=UpdateUserHandler(*user_admin),
        toggle_user_status=ToggleUserStatusHandler(*user_admin),
        delete_user=DeleteUserHandler(*user_admin),
        create_user_group=CreateUserGroupHandler(*group_admin),
        update_user_group=UpdateUserGroupHandler(*group_admin),
        delete_user_group=DeleteUserGroupHandler(*group_admin),
        add_user_to_user_group=AddUserToUserGroupHandler(*membership),
        remove_user_from_user_group=RemoveUserFromUserGroupHandler(*membership),
        add_role_to_user_group=AddRoleToUserGroupHandler(*group_roles),
        remove_role_from_user_group=RemoveRoleFromUserGroupHandler(*group_roles),
        get_profile=GetProfileHandler(authorization, user_validator),
        get_user=GetUserHandler(authorization, user_validator),
        find_users=FindUsersHandler(authorization, user_repository),
        get_user_group=GetUserGroupHandler(authorization, user_group_validator),
        find_user_groups=FindUserGroupsHandler(authorization, user_group_repository),
        get_role=GetRoleHandler(authorization, role_validator),
        find_roles=FindRolesHandler(authorization, role_repository),
    )

    logger.info(
        "composition_root.container_created",
        extra={"event_names": sorted(dispatcher.table)},
    )
    return container


def role_id_for(code: str) -> UUID:
    """Stable id для seeded role code."""
    return uuid5(NAMESPACE_URL, f"role:{code}")


async def seed_default_roles(role_repository: SQLAlchemyRoleRepository) -> list[Role]:
    """Ensure AUTH_MANAGER / AUTH_VIEWER roles exist. Idempotent."""
    seeded = []
    for code, (name, description) in DEFAULT_ROLES.items():
        if await role_repository.find_by_code(code.value) is not None:
            continue
        role = Role(id=role_id_for(code.value), code=code.value, name=name, description=description)
        await role_repository.save(role)
        seeded.append(role)

    if seeded:
        logger.info(
            "composition_root.roles_seeded",
            extra={"codes": [role.code for role in seeded]},
        )
    return seeded

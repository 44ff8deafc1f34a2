"""Read-side handlers. Profile - authenticated; решта - MANAGER або VIEWER."""

from identity_admin.application.auth.dtos import RoleDTO, UserDTO, UserGroupDTO
from identity_admin.application.auth.queries import (
    FindRolesQuery,
    FindUserGroupsQuery,
    FindUsersQuery,
    GetProfileQuery,
    GetRoleQuery,
    GetUserGroupQuery,
    GetUserQuery,
)
from identity_admin.application.shared import (
    AppContext,
    AuthorizationService,
    PaginatedResult,
    QueryHandler,
    parse_optional_uuid,
    parse_uuid,
)
from identity_admin.domain.auth.repositories import (
    RoleRepository,
    UserGroupRepository,
    UserRepository,
)
from identity_admin.domain.auth.services import (
    RoleValidatorService,
    UserGroupValidatorService,
    UserValidatorService,
)
from identity_admin.domain.auth.value_objects import AuthRole

READ_ROLES = (AuthRole.AUTH_MANAGER, AuthRole.AUTH_VIEWER)


class GetProfileHandler(QueryHandler[GetProfileQuery, UserDTO]):
    def __init__(
        self, authorization: AuthorizationService, user_validator: UserValidatorService
    ) -> None:
        self.authorization = authorization
        self.user_validator = user_validator

    async def handle(self, query: GetProfileQuery, context: AppContext) -> UserDTO:
        caller = self.authorization.require_authenticated(context)
        user = await self.user_validator.validate_user_active_by_id(caller.user_id)
        return UserDTO.from_entity(user)


class GetUserHandler(QueryHandler[GetUserQuery, UserDTO]):
    def __init__(
        self, authorization: AuthorizationService, user_validator: UserValidatorService
    ) -> None:
        self.authorization = authorization
        self.user_validator = user_validator

    async def handle(self, query: GetUserQuery, context: AppContext) -> UserDTO:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        user_id = parse_uuid(query.user_id, "user_id")
        user = await self.user_validator.validate_user_not_deleted_by_id(user_id)
        return UserDTO.from_entity(user)


class FindUsersHandler(QueryHandler[FindUsersQuery, PaginatedResult[UserDTO]]):
    """Paged users: search по email / username / display name, optional group filter."""

    def __init__(
        self, authorization: AuthorizationService, user_repository: UserRepository
    ) -> None:
        self.authorization = authorization
        self.user_repository = user_repository

    async def handle(
        self, query: FindUsersQuery, context: AppContext
    ) -> PaginatedResult[UserDTO]:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        user_group_id = parse_optional_uuid(query.user_group_id, "user_group_id")

        result = await self.user_repository.find(query.page, user_group_id=user_group_id)
        return PaginatedResult(
            data=[UserDTO.from_entity(user) for user in result.data],
            count=result.count,
            page_index=result.page_index,
        )


class GetUserGroupHandler(QueryHandler[GetUserGroupQuery, UserGroupDTO]):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_validator: UserGroupValidatorService,
    ) -> None:
        self.authorization = authorization
        self.user_group_validator = user_group_validator

    async def handle(self, query: GetUserGroupQuery, context: AppContext) -> UserGroupDTO:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        group_id = parse_uuid(query.user_group_id, "user_group_id")
        group = await self.user_group_validator.validate_user_group_exists_by_id(group_id)
        return UserGroupDTO.from_entity(group)


class FindUserGroupsHandler(
    QueryHandler[FindUserGroupsQuery, PaginatedResult[UserGroupDTO]]
):
    def __init__(
        self,
        authorization: AuthorizationService,
        user_group_repository: UserGroupRepository,
    ) -> None:
        self.authorization = authorization
        self.user_group_repository = user_group_repository

    async def handle(
        self, query: FindUserGroupsQuery, context: AppContext
    ) -> PaginatedResult[UserGroupDTO]:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        result = await self.user_group_repository.find(query.page)
        return PaginatedResult(
            data=[UserGroupDTO.from_entity(group) for group in result.data],
            count=result.count,
            page_index=result.page_index,
        )


class GetRoleHandler(QueryHandler[GetRoleQuery, RoleDTO]):
    def __init__(
        self, authorization: AuthorizationService, role_validator: RoleValidatorService
    ) -> None:
        self.authorization = authorization
        self.role_validator = role_validator

    async def handle(self, query: GetRoleQuery, context: AppContext) -> RoleDTO:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        role_id = parse_uuid(query.role_id, "role_id")
        role = await self.role_validator.validate_role_exists_by_id(role_id)
        return RoleDTO.from_entity(role)


class FindRolesHandler(QueryHandler[FindRolesQuery, PaginatedResult[RoleDTO]]):
    def __init__(
        self, authorization: AuthorizationService, role_repository: RoleRepository
    ) -> None:
        self.authorization = authorization
        self.role_repository = role_repository

    async def handle(
        self, query: FindRolesQuery, context: AppContext
    ) -> PaginatedResult[RoleDTO]:
        self.authorization.require_one_of_roles(READ_ROLES, context)
        user_group_id = parse_optional_uuid(query.user_group_id, "user_group_id")

        result = await self.role_repository.find(query.page, user_group_id=user_group_id)
        return PaginatedResult(
            data=[RoleDTO.from_entity(role) for role in result.data],
            count=result.count,
            page_index=result.page_index,
        )

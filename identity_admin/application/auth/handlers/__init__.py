"""Command and query handlers for the auth context."""

from .account_handlers import (
    DeleteAccountHandler,
    RegisterHandler,
    RequestAccessTokenHandler,
    SignInHandler,
    UpdateProfileHandler,
)
from .query_handlers import (
    FindRolesHandler,
    FindUserGroupsHandler,
    FindUsersHandler,
    GetProfileHandler,
    GetRoleHandler,
    GetUserGroupHandler,
    GetUserHandler,
)
from .user_group_handlers import (
    AddRoleToUserGroupHandler,
    AddUserToUserGroupHandler,
    CreateUserGroupHandler,
    DeleteUserGroupHandler,
    RemoveRoleFromUserGroupHandler,
    RemoveUserFromUserGroupHandler,
    UpdateUserGroupHandler,
)
from .user_handlers import DeleteUserHandler, ToggleUserStatusHandler, UpdateUserHandler

__all__ = [
    # Account
    "RegisterHandler",
    "SignInHandler",
    "RequestAccessTokenHandler",
    "UpdateProfileHandler",
    "DeleteAccountHandler",
    # Users
    "UpdateUserHandler",
    "ToggleUserStatusHandler",
    "DeleteUserHandler",
    # User groups
    "CreateUserGroupHandler",
    "UpdateUserGroupHandler",
    "DeleteUserGroupHandler",
    "AddUserToUserGroupHandler",
    "RemoveUserFromUserGroupHandler",
    "AddRoleToUserGroupHandler",
    "RemoveRoleFromUserGroupHandler",
    # Queries
    "GetProfileHandler",
    "GetUserHandler",
    "FindUsersHandler",
    "GetUserGroupHandler",
    "FindUserGroupsHandler",
    "GetRoleHandler",
    "FindRolesHandler",
]

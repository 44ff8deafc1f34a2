"""Auth commands (write operations)."""

from .account import (
    DeleteAccountCommand,
    RegisterCommand,
    RequestAccessTokenCommand,
    SignInCommand,
    UpdateProfileCommand,
)
from .user_groups import (
    AddRoleToUserGroupCommand,
    AddUserToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteUserGroupCommand,
    RemoveRoleFromUserGroupCommand,
    RemoveUserFromUserGroupCommand,
    UpdateUserGroupCommand,
)
from .users import DeleteUserCommand, ToggleUserStatusCommand, UpdateUserCommand

__all__ = [
    # Account
    "RegisterCommand",
    "SignInCommand",
    "RequestAccessTokenCommand",
    "UpdateProfileCommand",
    "DeleteAccountCommand",
    # Users
    "UpdateUserCommand",
    "ToggleUserStatusCommand",
    "DeleteUserCommand",
    # User groups
    "CreateUserGroupCommand",
    "UpdateUserGroupCommand",
    "DeleteUserGroupCommand",
    "AddUserToUserGroupCommand",
    "RemoveUserFromUserGroupCommand",
    "AddRoleToUserGroupCommand",
    "RemoveRoleFromUserGroupCommand",
]

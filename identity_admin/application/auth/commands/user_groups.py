"""User group administration commands (AUTH_MANAGER)."""

from dataclasses import dataclass
from typing import Optional

from identity_admin.application.shared import Command


@dataclass(frozen=True)
class CreateUserGroupCommand(Command):
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class UpdateUserGroupCommand(Command):
    user_group_id: str
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class DeleteUserGroupCommand(Command):
    user_group_id: str


@dataclass(frozen=True)
class AddUserToUserGroupCommand(Command):
    """Membership change.

    Persisted як save(user) + join row в одній транзакції, тому event
    ADDED_TO_USER_GROUP і row в ``user_group_users`` або обидва є, або нема.
    """

    user_group_id: str
    user_id: str


@dataclass(frozen=True)
class RemoveUserFromUserGroupCommand(Command):
    user_group_id: str
    user_id: str


@dataclass(frozen=True)
class AddRoleToUserGroupCommand(Command):
    user_group_id: str
    role_id: str


@dataclass(frozen=True)
class RemoveRoleFromUserGroupCommand(Command):
    user_group_id: str
    role_id: str

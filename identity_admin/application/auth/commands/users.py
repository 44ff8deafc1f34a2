"""User administration commands (AUTH_MANAGER)."""

from dataclasses import dataclass
from typing import Optional

from identity_admin.application.shared import Command


@dataclass(frozen=True)
class UpdateUserCommand(Command):
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class ToggleUserStatusCommand(Command):
    user_id: str
    enabled: bool
    """True -> activate, False -> disable."""


@dataclass(frozen=True)
class DeleteUserCommand(Command):
    user_id: str

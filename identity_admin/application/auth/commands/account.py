"""Self-service account commands."""

from dataclasses import dataclass
from typing import Optional

from identity_admin.application.shared import Command


@dataclass(frozen=True)
class RegisterCommand(Command):
    """Реєстрація нового user з email + password.

    Example:
        >>> command = RegisterCommand(email="jane@example.com", password="Secret#123")
        >>> tokens = await handler.handle(command, AppContext.anonymous())
        >>> tokens.sign_in_token
        '...'
    """

    email: str
    password: str
    username: Optional[str] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class SignInCommand(Command):
    identifier: str
    """Email або username."""

    password: str


@dataclass(frozen=True)
class RequestAccessTokenCommand(Command):
    """Обмін provider id token на access token цього сервісу."""

    id_token: str


@dataclass(frozen=True)
class UpdateProfileCommand(Command):
    username: Optional[str] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class DeleteAccountCommand(Command):
    pass

"""Token DTOs returned by account commands."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class AuthTokensDTO:
    """Result of Register / SignIn."""

    id: UUID
    id_token: str
    sign_in_token: str


@dataclass
class AccessTokenDTO:
    token: str

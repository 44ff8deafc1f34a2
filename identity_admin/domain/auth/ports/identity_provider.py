"""IdentityProvider Port - external identity provider (black box).

Provider володіє credentials та видає opaque external ids; цей core лише
зберігає reference на них.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExternalUser:
    """Profile, який повертає provider."""

    external_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    provider_id: Optional[str] = None
    """``password``, ``google.com``, ``apple.com`` (None -> password)."""


@dataclass(frozen=True)
class TokenVerification:
    external_id: str


@dataclass(frozen=True)
class PasswordVerification:
    external_id: str
    id_token: str


class IdentityProvider(ABC):
    """Abstract interface для external identity provider."""

    @abstractmethod
    async def verify_token(self, id_token: str) -> TokenVerification:
        """Verify provider-issued id token.

        Raises:
            AuthorizationException: Token invalid / expired.
        """
        pass

    @abstractmethod
    async def find_user_by_id(self, external_id: str) -> Optional[ExternalUser]:
        pass

    @abstractmethod
    async def find_user_by_email(self, email: str) -> Optional[ExternalUser]:
        pass

    @abstractmethod
    async def create_user(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> str:
        """Create credentials у provider.

        Returns:
            New external id.
        """
        pass

    @abstractmethod
    async def verify_password(
        self, identifier: str, password: str
    ) -> Optional[PasswordVerification]:
        """Return verification або None якщо credentials невірні."""
        pass

    @abstractmethod
    async def create_sign_in_token(self, external_id: str) -> str:
        pass

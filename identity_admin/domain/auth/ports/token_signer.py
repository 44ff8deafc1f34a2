"""TokenSigner Port - access tokens, які видає цей сервіс."""

from abc import ABC, abstractmethod
from typing import Any


class TokenSigner(ABC):
    @abstractmethod
    def sign_token(self, claims: dict[str, Any]) -> str:
        pass

    @abstractmethod
    def verify_token(self, token: str) -> dict[str, Any]:
        """Decode and verify token.

        Raises:
            AuthorizationException: UNAUTHORIZED якщо token invalid або expired.
        """
        pass

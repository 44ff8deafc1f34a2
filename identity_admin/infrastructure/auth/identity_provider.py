"""In-process IdentityProvider adapter.

Використовується для development wiring та тестів, коли справжній provider
недоступний. Tokens мають формат ``"<external_id>:<nonce>"``; passwords
зберігаються тільки як argon2id hash (``argon2-cffi``).
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from identity_admin.domain.auth.ports import (
    ExternalUser,
    IdentityProvider,
    PasswordVerification,
    TokenVerification,
)
from identity_admin.domain.shared import AuthorizationException, AuthorizationExceptionCode

logger = logging.getLogger(__name__)

PASSWORD_PROVIDER_ID = "password"


@dataclass
class _Account:
    profile: ExternalUser
    password_hash: Optional[str]


class InMemoryIdentityProvider(IdentityProvider):
    """Process-local identity provider.

    Example:
        >>> provider = InMemoryIdentityProvider()
        >>> external_id = await provider.create_user("a@b.io", "Secret#123")
        >>> verification = await provider.verify_password("a@b.io", "Secret#123")
        >>> (await provider.verify_token(verification.id_token)).external_id == external_id
        True
    """

    def __init__(self, password_hasher: Optional[PasswordHasher] = None) -> None:
        self._hasher = password_hasher or PasswordHasher()
        self._accounts: dict[str, _Account] = {}
        self._issued_tokens: set[str] = set()

    # ==================== Seeding ====================

    def add_external_user(
        self,
        email: Optional[str],
        provider_id: str = PASSWORD_PROVIDER_ID,
        display_name: Optional[str] = None,
        password: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> ExternalUser:
        """Seed account напряму (federated sign-in, тести)."""
        profile = ExternalUser(
            external_id=external_id or uuid4().hex,
            email=email.strip().lower() if email else None,
            display_name=display_name,
            provider_id=provider_id,
        )
        self._accounts[profile.external_id] = _Account(
            profile=profile,
            password_hash=self._hasher.hash(password) if password is not None else None,
        )
        return profile

    def issue_token(self, external_id: str) -> str:
        token = f"{external_id}:{secrets.token_urlsafe(16)}"
        self._issued_tokens.add(token)
        return token

    # ==================== Port ====================

    async def verify_token(self, id_token: str) -> TokenVerification:
        external_id, _, _ = id_token.partition(":")
        if id_token not in self._issued_tokens or external_id not in self._accounts:
            raise AuthorizationException(
                AuthorizationExceptionCode.UNAUTHORIZED, reason="invalid id token"
            )
        return TokenVerification(external_id=external_id)

    async def find_user_by_id(self, external_id: str) -> Optional[ExternalUser]:
        account = self._accounts.get(external_id)
        return account.profile if account else None

    async def find_user_by_email(self, email: str) -> Optional[ExternalUser]:
        normalized = email.strip().lower()
        for account in self._accounts.values():
            if account.profile.email == normalized:
                return account.profile
        return None

    async def create_user(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> str:
        profile = self.add_external_user(
            email=email, display_name=display_name, password=password
        )
        logger.info(
            "identity_provider.user_created",
            extra={"external_id": profile.external_id},
        )
        return profile.external_id

    async def verify_password(
        self, identifier: str, password: str
    ) -> Optional[PasswordVerification]:
        profile = await self.find_user_by_email(identifier)
        if profile is None:
            return None

        account = self._accounts[profile.external_id]
        if account.password_hash is None or not self._check_password(account, password):
            return None

        return PasswordVerification(
            external_id=profile.external_id,
            id_token=self.issue_token(profile.external_id),
        )

    async def create_sign_in_token(self, external_id: str) -> str:
        return self.issue_token(external_id)

    def _check_password(self, account: _Account, password: str) -> bool:
        try:
            self._hasher.verify(account.password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHash, VerificationError):
            logger.warning(
                "identity_provider.password_hash_invalid",
                extra={"external_id": account.profile.external_id},
            )
            return False

        if self._hasher.check_needs_rehash(account.password_hash):
            account.password_hash = self._hasher.hash(password)
        return True

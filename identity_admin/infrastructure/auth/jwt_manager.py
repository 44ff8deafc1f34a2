"""
JWT access token management
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from identity_admin.domain.auth.ports import TokenSigner
from identity_admin.domain.shared import AuthorizationException, AuthorizationExceptionCode

ACCESS_TOKEN_TYPE = "access"


class JWTManager(TokenSigner):
    """Signs and verifies access tokens issued by this service."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWS algorithm
            expire_minutes: Access token lifetime
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def sign_token(
        self,
        claims: dict[str, Any],
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            claims: Data to encode in the token (``user_id``, ``roles``)
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token
        """
        to_encode = claims.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta if expires_delta else timedelta(minutes=self.expire_minutes)
        )
        to_encode.update({"exp": expire, "type": ACCESS_TOKEN_TYPE})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict[str, Any]:
        """
        Verify and decode an access token.

        Raises:
            AuthorizationException: UNAUTHORIZED if invalid, expired or wrong type
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthorizationException(
                AuthorizationExceptionCode.UNAUTHORIZED, reason=str(e)
            ) from e

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise AuthorizationException(
                AuthorizationExceptionCode.UNAUTHORIZED, reason="wrong token type"
            )
        return payload

"""Ports до external services."""

from .identity_provider import (
    ExternalUser,
    IdentityProvider,
    PasswordVerification,
    TokenVerification,
)
from .token_signer import TokenSigner
from .user_id_generator import UserIdGenerator

__all__ = [
    "IdentityProvider",
    "ExternalUser",
    "TokenVerification",
    "PasswordVerification",
    "TokenSigner",
    "UserIdGenerator",
]

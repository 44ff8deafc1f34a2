"""Auth infrastructure - token signing, id generation, identity provider."""

from .identity_provider import InMemoryIdentityProvider
from .jwt_manager import JWTManager
from .user_id_generator import Uuid5UserIdGenerator

__all__ = ["JWTManager", "Uuid5UserIdGenerator", "InMemoryIdentityProvider"]

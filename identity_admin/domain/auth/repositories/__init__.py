"""Repository ports (Hexagonal Architecture) для Auth bounded context."""

from .role_repository import RoleRepository
from .user_group_repository import UserGroupRepository
from .user_repository import UserRepository

__all__ = ["UserRepository", "UserGroupRepository", "RoleRepository"]

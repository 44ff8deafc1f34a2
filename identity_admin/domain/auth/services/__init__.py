"""Domain services - validators над repository ports."""

from .role_validator import RoleValidatorService
from .user_group_validator import UserGroupValidatorService
from .user_validator import UserValidatorService

__all__ = ["UserValidatorService", "UserGroupValidatorService", "RoleValidatorService"]

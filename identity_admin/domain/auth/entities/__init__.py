from .role import Role
from .user import User
from .user_group import UserGroup

__all__ = ["User", "UserGroup", "Role"]

"""SQLAlchemy ORM models для identity schema."""

from .base import AggregateColumnsMixin, Base
from .domain_event_model import DomainEventModel
from .role_model import RoleModel
from .user_group_model import UserGroupModel, UserGroupRoleModel, UserGroupUserModel
from .user_model import UserModel, UserPendingDeletionModel

__all__ = [
    "Base",
    "AggregateColumnsMixin",
    "UserModel",
    "UserPendingDeletionModel",
    "UserGroupModel",
    "UserGroupRoleModel",
    "UserGroupUserModel",
    "RoleModel",
    "DomainEventModel",
]

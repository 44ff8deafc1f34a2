"""SQLAlchemy repository implementations."""

from .base_repository import SQLAlchemyAggregateRepository
from .domain_event_repository import SQLAlchemyDomainEventRepository
from .role_repository import SQLAlchemyRoleRepository
from .user_group_repository import SQLAlchemyUserGroupRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyAggregateRepository",
    "SQLAlchemyDomainEventRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyUserGroupRepository",
    "SQLAlchemyRoleRepository",
]

"""SQLAlchemy persistence layer."""

from .models import Base
from .repositories import (
    SQLAlchemyDomainEventRepository,
    SQLAlchemyRoleRepository,
    SQLAlchemyUserGroupRepository,
    SQLAlchemyUserRepository,
)
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    # ORM
    "Base",
    # Repositories
    "SQLAlchemyDomainEventRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyUserGroupRepository",
    "SQLAlchemyRoleRepository",
    # Unit of Work
    "SQLAlchemyUnitOfWork",
]

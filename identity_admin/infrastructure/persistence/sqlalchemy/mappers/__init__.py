"""Mappers: Domain aggregates ↔ ORM models."""

from .base_mapper import AggregateMapper, as_utc
from .domain_event_mapper import DomainEventMapper
from .role_mapper import RoleMapper
from .user_group_mapper import UserGroupMapper
from .user_mapper import UserMapper

__all__ = [
    "AggregateMapper",
    "as_utc",
    "UserMapper",
    "UserGroupMapper",
    "RoleMapper",
    "DomainEventMapper",
]

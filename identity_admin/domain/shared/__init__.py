"""Shared Kernel - base classes для всієї domain layer.

- Entity: Об'єкт з identity
- ValueObject: Immutable об'єкт порівнюваний за значенням
- AggregateRoot: Unit of consistency з version та pending events
- DomainEvent: Подія що сталась в domain
- AggregateRepository: Generic persistence port
- Exceptions: Validation / Concurrency / Business / Authorization
"""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity
from .exceptions import (
    AuthorizationException,
    AuthorizationExceptionCode,
    BusinessException,
    CodedException,
    CommonExceptionCode,
    ConcurrencyConflict,
    DomainException,
    ValidationException,
)
from .pagination import PageRequest, PaginatedResult, SortOrder
from .repository import AggregateRepository, DomainEventRepository, PostSaveCallback
from .value_object import ValueObject

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    "AggregateRoot",
    "DomainEvent",
    # Persistence
    "AggregateRepository",
    "DomainEventRepository",
    "PostSaveCallback",
    "PageRequest",
    "PaginatedResult",
    "SortOrder",
    # Exceptions
    "DomainException",
    "CodedException",
    "ValidationException",
    "ConcurrencyConflict",
    "BusinessException",
    "AuthorizationException",
    # Codes
    "CommonExceptionCode",
    "AuthorizationExceptionCode",
]

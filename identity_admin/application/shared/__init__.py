"""Shared Application Layer components."""

from identity_admin.domain.shared import PageRequest, PaginatedResult, SortOrder

from .authorization import AuthorizationService
from .command import Command
from .context import AppContext, AuthenticatedUser
from .handler import CommandHandler, QueryHandler
from .ids import parse_optional_uuid, parse_uuid
from .query import Query

__all__ = [
    "Command",
    "Query",
    "CommandHandler",
    "QueryHandler",
    "AppContext",
    "AuthenticatedUser",
    "AuthorizationService",
    "PageRequest",
    "PaginatedResult",
    "SortOrder",
    "parse_uuid",
    "parse_optional_uuid",
]

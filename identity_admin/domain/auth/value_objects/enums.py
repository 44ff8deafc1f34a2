"""Enums для Auth bounded context."""

from enum import Enum


class UserStatus(str, Enum):
    """User lifecycle status.

    ACTIVE <-> DISABLED (reversible), будь-який non-deleted -> DELETED (terminal).
    """

    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"
    DELETED = "DELETED"


class SignInType(str, Enum):
    EMAIL = "EMAIL"
    GOOGLE = "GOOGLE"
    APPLE = "APPLE"


class AuthRole(str, Enum):
    """Role codes, на які перевіряє AuthorizationService."""

    AUTH_MANAGER = "AUTH_MANAGER"
    AUTH_VIEWER = "AUTH_VIEWER"


class UserEventType(str, Enum):
    REGISTERED = "REGISTERED"
    UPDATED = "UPDATED"
    ACTIVATED = "ACTIVATED"
    DISABLED = "DISABLED"
    DELETED = "DELETED"
    ADDED_TO_USER_GROUP = "ADDED_TO_USER_GROUP"
    REMOVED_FROM_USER_GROUP = "REMOVED_FROM_USER_GROUP"


class UserGroupEventType(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    ROLE_ADDED = "ROLE_ADDED"
    ROLE_REMOVED = "ROLE_REMOVED"

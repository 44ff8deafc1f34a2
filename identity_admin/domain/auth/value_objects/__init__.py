"""Value objects та enums для Auth bounded context."""

from .email import Email
from .enums import (
    AuthRole,
    SignInType,
    UserEventType,
    UserGroupEventType,
    UserStatus,
)
from .password import Password
from .username import Username

__all__ = [
    "Email",
    "Username",
    "Password",
    "UserStatus",
    "SignInType",
    "AuthRole",
    "UserEventType",
    "UserGroupEventType",
]

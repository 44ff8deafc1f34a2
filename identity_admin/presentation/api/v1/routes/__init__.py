"""API v1 routes."""

from .account import router as account_router
from .roles import router as roles_router
from .user_groups import router as user_groups_router
from .users import router as users_router

__all__ = [
    "account_router",
    "users_router",
    "user_groups_router",
    "roles_router",
]

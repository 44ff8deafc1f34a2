"""Request context, який transport layer передає в handlers."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: UUID
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(frozen=True)
class AppContext:
    """Who is calling. ``user`` is None для anonymous requests."""

    user: Optional[AuthenticatedUser] = None

    @classmethod
    def anonymous(cls) -> "AppContext":
        return cls(user=None)

    @classmethod
    def for_user(cls, user_id: UUID, roles: frozenset[str] | set[str] = frozenset()) -> "AppContext":
        return cls(user=AuthenticatedUser(user_id=user_id, roles=frozenset(roles)))

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

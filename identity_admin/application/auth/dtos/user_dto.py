"""User DTO - data transfer object for API responses."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from identity_admin.domain.auth.entities import User


@dataclass
class UserDTO:
    """User data transfer object."""

    id: UUID
    email: str
    sign_in_type: str
    username: str | None
    display_name: str | None
    status: str
    version: int
    created_at: datetime
    last_modified_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        return cls(
            id=user.id,
            email=user.email.value,
            sign_in_type=user.sign_in_type.value,
            username=user.username.value if user.username else None,
            display_name=user.display_name,
            status=user.status.value,
            version=user.version,
            created_at=user.created_at,
            last_modified_at=user.last_modified_at,
        )

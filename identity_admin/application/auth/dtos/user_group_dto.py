"""UserGroup / Role DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from identity_admin.domain.auth.entities import Role, UserGroup


@dataclass
class UserGroupDTO:
    id: UUID
    name: str
    description: str | None
    version: int
    created_at: datetime
    last_modified_at: datetime

    @classmethod
    def from_entity(cls, group: UserGroup) -> "UserGroupDTO":
        return cls(
            id=group.id,
            name=group.name,
            description=group.description,
            version=group.version,
            created_at=group.created_at,
            last_modified_at=group.last_modified_at,
        )


@dataclass
class RoleDTO:
    id: UUID
    code: str
    name: str
    description: str | None

    @classmethod
    def from_entity(cls, role: Role) -> "RoleDTO":
        return cls(id=role.id, code=role.code, name=role.name, description=role.description)

"""UserGroup Aggregate Root.

Membership (roles та users) живе в join tables ``user_group_roles`` /
``user_group_users``, а не в aggregate: перевірки membership йдуть через
repository, без завантаження всього графа.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from identity_admin.domain.shared import (
    AggregateRoot,
    CommonExceptionCode,
    ValidationException,
)

from ..value_objects import UserGroupEventType

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class UserGroup(AggregateRoot):
    """UserGroup Aggregate Root.

    Example:
        >>> group = UserGroup.create(id=uuid4(), name="Admins", created_by=manager_id)
        >>> group.set_name("Root Admins")
        >>> [e.event_type for e in group.get_domain_events()]
        ['CREATED', 'UPDATED']
    """

    aggregate_name = "UserGroup"

    def __init__(
        self,
        id: UUID,
        name: str,
        description: Optional[str] = None,
        version: int = 0,
        created_at: Optional[datetime] = None,
        created_by: Optional[UUID] = None,
        last_modified_at: Optional[datetime] = None,
        last_modified_by: Optional[UUID] = None,
    ) -> None:
        super().__init__(
            id,
            version=version,
            created_at=created_at,
            created_by=created_by,
            last_modified_at=last_modified_at,
            last_modified_by=last_modified_by,
        )
        self.name = self._validate_name(name)
        self.description = self._validate_description(description)
        self._marked_for_deletion = False

    @classmethod
    def create(
        cls,
        id: UUID,
        name: str,
        description: Optional[str] = None,
        created_by: Optional[UUID] = None,
    ) -> "UserGroup":
        """Factory method. Records CREATED ``{name, description}``."""
        group = cls(id=id, name=name, description=description, created_by=created_by)
        group.record_event(
            UserGroupEventType.CREATED,
            {"name": group.name, "description": group.description},
        )
        return group

    @property
    def is_marked_for_deletion(self) -> bool:
        return self._marked_for_deletion

    def set_name(self, name: str) -> None:
        name = self._validate_name(name)
        if name == self.name:
            return
        self.name = name
        self.record_event(UserGroupEventType.UPDATED, {"field": "name", "value": name})

    def set_description(self, description: Optional[str]) -> None:
        description = self._validate_description(description)
        if description == self.description:
            return
        self.description = description
        self.record_event(
            UserGroupEventType.UPDATED, {"field": "description", "value": description}
        )

    def mark_for_deletion(self) -> None:
        """Record DELETED; row видаляється через ``UserGroupRepository.delete``."""
        self._marked_for_deletion = True
        self.record_event(UserGroupEventType.DELETED)

    def add_role(self, role_id: UUID) -> None:
        self.record_event(UserGroupEventType.ROLE_ADDED, {"role_id": str(role_id)})

    def remove_role(self, role_id: UUID) -> None:
        self.record_event(UserGroupEventType.ROLE_REMOVED, {"role_id": str(role_id)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "created_by": str(self.created_by) if self.created_by else None,
            "last_modified_at": self.last_modified_at.isoformat(),
            "last_modified_by": (
                str(self.last_modified_by) if self.last_modified_by else None
            ),
        }

    @staticmethod
    def _validate_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_REQUIRED, field="name"
            )
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_TOO_LONG,
                field="name",
                constraint=f"max {NAME_MAX_LENGTH} chars",
            )
        return name

    @staticmethod
    def _validate_description(description: Optional[str]) -> Optional[str]:
        if description is None:
            return None
        description = description.strip() or None
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_TOO_LONG,
                field="description",
                constraint=f"max {DESCRIPTION_MAX_LENGTH} chars",
            )
        return description

    def __repr__(self) -> str:
        return f"UserGroup(id={self.id}, name={self.name!r}, version={self.version})"

"""Role - reference data (code, name, description).

Role не є mutable aggregate з events: ролі сідяться міграцією / seed
скриптом і лише читаються цим core.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from identity_admin.domain.shared import (
    AggregateRoot,
    CommonExceptionCode,
    ValidationException,
)

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class Role(AggregateRoot):
    aggregate_name = "Role"

    def __init__(
        self,
        id: UUID,
        code: str,
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
        if not code:
            raise ValidationException(CommonExceptionCode.FIELD_IS_REQUIRED, field="code")
        if not name:
            raise ValidationException(CommonExceptionCode.FIELD_IS_REQUIRED, field="name")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_TOO_LONG, field="name"
            )
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_TOO_LONG, field="description"
            )
        self.code = code
        self.name = name
        self.description = description

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "last_modified_at": self.last_modified_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"Role(id={self.id}, code={self.code})"

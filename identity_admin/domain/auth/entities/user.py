"""User Aggregate Root.

State machine:
    ACTIVE <-> DISABLED      (reversible)
    ACTIVE/DISABLED -> DELETED (terminal, жодних змін після)

Soft delete: ``mark_for_deletion`` переводить user в DELETED, а repository
додає row в ``users_pending_deletion`` в тій самій транзакції. Фізичне
видалення / anonymization робить окремий процес.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from identity_admin.domain.shared import (
    AggregateRoot,
    CommonExceptionCode,
    ValidationException,
)

from ..exceptions import AuthExceptionCode
from ..value_objects import Email, SignInType, UserEventType, UserStatus, Username

DISPLAY_NAME_MAX_LENGTH = 255


class User(AggregateRoot):
    """User Aggregate Root.

    Example:
        >>> user = User.register(
        ...     id=user_id,
        ...     email=Email.create("john@example.com"),
        ...     sign_in_type=SignInType.EMAIL,
        ...     external_id="ext-123",
        ... )
        >>> user.disable()
        >>> [e.event_type for e in user.get_domain_events()]
        ['REGISTERED', 'DISABLED']
    """

    aggregate_name = "User"

    def __init__(
        self,
        id: UUID,
        email: Email,
        sign_in_type: SignInType,
        external_id: str,
        username: Optional[Username] = None,
        display_name: Optional[str] = None,
        status: UserStatus = UserStatus.ACTIVE,
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
        self.email = email
        self.sign_in_type = sign_in_type
        self.external_id = external_id
        self.username = username
        self.display_name = self._validate_display_name(display_name)
        self.status = status

    @classmethod
    def register(
        cls,
        id: UUID,
        email: Email,
        sign_in_type: SignInType,
        external_id: str,
        username: Optional[Username] = None,
        display_name: Optional[str] = None,
        created_by: Optional[UUID] = None,
    ) -> "User":
        """Factory method для нового user (version 0, ACTIVE).

        Records:
            REGISTERED ``{email, username, display_name}``
        """
        user = cls(
            id=id,
            email=email,
            sign_in_type=sign_in_type,
            external_id=external_id,
            username=username,
            display_name=display_name,
            created_by=created_by,
        )
        user.record_event(
            UserEventType.REGISTERED,
            {
                "email": email.value,
                "username": username.value if username else None,
                "display_name": user.display_name,
            },
        )
        return user

    # ==================== State queries ====================

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_disabled(self) -> bool:
        return self.status == UserStatus.DISABLED

    @property
    def is_deleted(self) -> bool:
        return self.status == UserStatus.DELETED

    def ensure_active(self) -> None:
        if not self.is_active:
            raise ValidationException(
                AuthExceptionCode.USER_MUST_BE_ACTIVE,
                user_id=str(self.id),
                status=self.status.value,
            )

    def ensure_disabled(self) -> None:
        if not self.is_disabled:
            raise ValidationException(
                AuthExceptionCode.USER_MUST_BE_DISABLED,
                user_id=str(self.id),
                status=self.status.value,
            )

    def ensure_not_deleted(self) -> None:
        if self.is_deleted:
            raise ValidationException(
                AuthExceptionCode.USER_DELETED, user_id=str(self.id)
            )

    # ==================== Mutations ====================

    def set_username(self, username: Username) -> None:
        self.ensure_not_deleted()
        if username == self.username:
            return
        self.username = username
        self.record_event(
            UserEventType.UPDATED, {"field": "username", "value": username.value}
        )

    def set_display_name(self, display_name: Optional[str]) -> None:
        self.ensure_not_deleted()
        display_name = self._validate_display_name(display_name)
        if display_name == self.display_name:
            return
        self.display_name = display_name
        self.record_event(
            UserEventType.UPDATED, {"field": "display_name", "value": display_name}
        )

    def disable(self) -> None:
        self.ensure_active()
        self.status = UserStatus.DISABLED
        self.record_event(UserEventType.DISABLED)

    def activate(self) -> None:
        self.ensure_disabled()
        self.status = UserStatus.ACTIVE
        self.record_event(UserEventType.ACTIVATED)

    def mark_for_deletion(self) -> None:
        if self.is_deleted:
            raise ValidationException(
                AuthExceptionCode.USER_ALREADY_DELETED, user_id=str(self.id)
            )
        self.status = UserStatus.DELETED
        self.record_event(UserEventType.DELETED)

    def added_to_user_group(self, user_group_id: UUID) -> None:
        self.ensure_not_deleted()
        self.record_event(
            UserEventType.ADDED_TO_USER_GROUP, {"user_group_id": str(user_group_id)}
        )

    def removed_from_user_group(self, user_group_id: UUID) -> None:
        self.ensure_not_deleted()
        self.record_event(
            UserEventType.REMOVED_FROM_USER_GROUP,
            {"user_group_id": str(user_group_id)},
        )

    # ==================== Serialization ====================

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "email": self.email.value,
            "sign_in_type": self.sign_in_type.value,
            "external_id": self.external_id,
            "username": self.username.value if self.username else None,
            "display_name": self.display_name,
            "status": self.status.value,
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "created_by": str(self.created_by) if self.created_by else None,
            "last_modified_at": self.last_modified_at.isoformat(),
            "last_modified_by": (
                str(self.last_modified_by) if self.last_modified_by else None
            ),
        }

    @staticmethod
    def _validate_display_name(display_name: Optional[str]) -> Optional[str]:
        if display_name is None:
            return None
        display_name = display_name.strip()
        if not display_name:
            return None
        if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
            raise ValidationException(
                CommonExceptionCode.FIELD_IS_TOO_LONG,
                field="display_name",
                constraint=f"max {DISPLAY_NAME_MAX_LENGTH} chars",
            )
        return display_name

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email.value}, status={self.status.value})"

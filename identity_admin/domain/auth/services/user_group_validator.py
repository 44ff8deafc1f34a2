"""UserGroupValidatorService - перевірки user groups."""

from typing import Optional
from uuid import UUID

from identity_admin.domain.shared import ValidationException

from ..entities import UserGroup
from ..exceptions import AuthExceptionCode
from ..repositories import UserGroupRepository


class UserGroupValidatorService:
    def __init__(self, user_group_repository: UserGroupRepository) -> None:
        self._user_group_repository = user_group_repository

    async def validate_user_group_exists_by_id(self, user_group_id: UUID) -> UserGroup:
        group = await self._user_group_repository.find_by_id(user_group_id)
        if group is None:
            raise ValidationException(
                AuthExceptionCode.USER_GROUP_NOT_FOUND,
                field="user_group_id",
                user_group_id=str(user_group_id),
            )
        return group

    async def validate_name_uniqueness(
        self, name: str, exclude_id: Optional[UUID] = None
    ) -> None:
        """Name унікальний глобально; ``exclude_id`` дозволяє rename в себе."""
        if await self._user_group_repository.name_exists(name.strip(), exclude_id):
            raise ValidationException(
                AuthExceptionCode.USER_GROUP_NAME_ALREADY_TAKEN, field="name"
            )

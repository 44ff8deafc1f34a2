"""UserValidatorService - Domain Service для read-only перевірок users.

Кожен метод raise-ить конкретний ValidationException з ``field`` data,
щоб transport layer міг сформувати response.
"""

from typing import Optional
from uuid import UUID

from identity_admin.domain.shared import ValidationException

from ..entities import User
from ..exceptions import AuthExceptionCode
from ..repositories import UserRepository
from ..value_objects import Email, Username


class UserValidatorService:
    """Existence / uniqueness / state checks над UserRepository.

    Example:
        >>> validator = UserValidatorService(user_repository)
        >>> await validator.validate_email_uniqueness(Email.create("a@example.com"))
        >>> user = await validator.validate_user_active_by_id(user_id)
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    async def validate_email_uniqueness(self, email: Email) -> None:
        if await self._user_repository.email_exists(email):
            raise ValidationException(
                AuthExceptionCode.EMAIL_ALREADY_TAKEN, field="email"
            )

    async def validate_username_uniqueness(
        self, username: Username, exclude_user_id: Optional[UUID] = None
    ) -> None:
        if await self._user_repository.username_exists(username, exclude_user_id):
            raise ValidationException(
                AuthExceptionCode.USERNAME_ALREADY_TAKEN, field="username"
            )

    async def validate_user_exists_by_id(self, user_id: UUID) -> User:
        user = await self._user_repository.find_by_id(user_id)
        if user is None:
            raise ValidationException(
                AuthExceptionCode.USER_NOT_FOUND, field="user_id", user_id=str(user_id)
            )
        return user

    async def validate_user_active_by_id(self, user_id: UUID) -> User:
        user = await self.validate_user_exists_by_id(user_id)
        user.ensure_active()
        return user

    async def validate_user_not_deleted_by_id(self, user_id: UUID) -> User:
        user = await self.validate_user_exists_by_id(user_id)
        user.ensure_not_deleted()
        return user

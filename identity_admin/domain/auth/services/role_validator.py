"""RoleValidatorService - перевірки roles."""

from uuid import UUID

from identity_admin.domain.shared import ValidationException

from ..entities import Role
from ..exceptions import AuthExceptionCode
from ..repositories import RoleRepository


class RoleValidatorService:
    def __init__(self, role_repository: RoleRepository) -> None:
        self._role_repository = role_repository

    async def validate_role_exists_by_id(self, role_id: UUID) -> Role:
        role = await self._role_repository.find_by_id(role_id)
        if role is None:
            raise ValidationException(
                AuthExceptionCode.ROLE_NOT_FOUND, field="role_id", role_id=str(role_id)
            )
        return role

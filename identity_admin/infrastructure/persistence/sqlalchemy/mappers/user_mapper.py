"""User Mapper - converts between User aggregate and UserModel ORM."""

from typing import Any

from identity_admin.domain.auth.entities import User
from identity_admin.domain.auth.value_objects import (
    Email,
    SignInType,
    UserStatus,
    Username,
)
from identity_admin.infrastructure.persistence.sqlalchemy.models import UserModel

from .base_mapper import AggregateMapper


class UserMapper(AggregateMapper[User, UserModel]):
    """Mapper для User ↔ UserModel.

    Reconstruction повторно валідує Email / Username: якщо збережені дані
    більше не задовольняють поточні правила, raise ValidationException
    (без тихого "ремонту" row).
    """

    @property
    def model_class(self) -> type[UserModel]:
        return UserModel

    def to_entity(self, model: UserModel) -> User:
        user = User(
            id=model.id,
            email=Email(model.email),
            sign_in_type=SignInType(model.sign_in_type),
            external_id=model.external_id,
            username=Username(model.username) if model.username is not None else None,
            display_name=model.display_name,
            status=UserStatus(model.status) if model.status else UserStatus.ACTIVE,
            **self.audit_kwargs(model),
        )
        return self.reconstructed(user)

    def to_row(self, entity: User) -> dict[str, Any]:
        return {
            "email": entity.email.value,
            "sign_in_type": entity.sign_in_type.value,
            "external_id": entity.external_id,
            "username": entity.username.value if entity.username else None,
            "display_name": entity.display_name,
            "status": entity.status.value,
        }

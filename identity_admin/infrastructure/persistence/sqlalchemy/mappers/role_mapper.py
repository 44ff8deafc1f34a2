"""Role Mapper."""

from typing import Any

from identity_admin.domain.auth.entities import Role
from identity_admin.infrastructure.persistence.sqlalchemy.models import RoleModel

from .base_mapper import AggregateMapper


class RoleMapper(AggregateMapper[Role, RoleModel]):
    @property
    def model_class(self) -> type[RoleModel]:
        return RoleModel

    def to_entity(self, model: RoleModel) -> Role:
        role = Role(
            id=model.id,
            code=model.code,
            name=model.name,
            description=model.description,
            **self.audit_kwargs(model),
        )
        return self.reconstructed(role)

    def to_row(self, entity: Role) -> dict[str, Any]:
        return {
            "code": entity.code,
            "name": entity.name,
            "description": entity.description,
        }

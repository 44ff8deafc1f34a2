"""UserGroup Mapper."""

from typing import Any

from identity_admin.domain.auth.entities import UserGroup
from identity_admin.infrastructure.persistence.sqlalchemy.models import UserGroupModel

from .base_mapper import AggregateMapper


class UserGroupMapper(AggregateMapper[UserGroup, UserGroupModel]):
    @property
    def model_class(self) -> type[UserGroupModel]:
        return UserGroupModel

    def to_entity(self, model: UserGroupModel) -> UserGroup:
        group = UserGroup(
            id=model.id,
            name=model.name,
            description=model.description,
            **self.audit_kwargs(model),
        )
        return self.reconstructed(group)

    def to_row(self, entity: UserGroup) -> dict[str, Any]:
        return {"name": entity.name, "description": entity.description}

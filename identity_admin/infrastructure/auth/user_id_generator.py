"""Deterministic user ids (UUID v5)."""

from uuid import NAMESPACE_DNS, UUID, uuid5

from identity_admin.domain.auth.ports import UserIdGenerator
from identity_admin.domain.auth.value_objects import Email


class Uuid5UserIdGenerator(UserIdGenerator):
    """UUID v5 від normalized email під namespace застосунку.

    Example:
        >>> generator = Uuid5UserIdGenerator("identity-admin")
        >>> generator.generate_user_id(Email("A@b.io")) == generator.generate_user_id(Email("a@b.io"))
        True
    """

    def __init__(self, app_code: str) -> None:
        self._namespace = uuid5(NAMESPACE_DNS, app_code)

    def generate_user_id(self, email: Email) -> UUID:
        return uuid5(self._namespace, email.value)

"""AuthorizationService - role checks над AppContext."""

import logging
from enum import Enum
from typing import Iterable, Union

from identity_admin.domain.shared import AuthorizationException, AuthorizationExceptionCode

from .context import AppContext, AuthenticatedUser

logger = logging.getLogger(__name__)

RoleCode = Union[str, Enum]


def _code(role: RoleCode) -> str:
    return role.value if isinstance(role, Enum) else role


class AuthorizationService:
    """Stateless guard, який викликають handlers першим кроком.

    Example:
        >>> operator = authorization.require_role(AuthRole.AUTH_MANAGER, context)
        >>> operator.user_id
        UUID('...')
    """

    def require_authenticated(self, context: AppContext) -> AuthenticatedUser:
        if context.user is None:
            raise AuthorizationException(AuthorizationExceptionCode.UNAUTHORIZED)
        return context.user

    def require_role(self, role: RoleCode, context: AppContext) -> AuthenticatedUser:
        return self.require_one_of_roles([role], context)

    def require_one_of_roles(
        self, roles: Iterable[RoleCode], context: AppContext
    ) -> AuthenticatedUser:
        user = self.require_authenticated(context)
        required = {_code(role) for role in roles}

        if user.roles.isdisjoint(required):
            logger.warning(
                "authorization.forbidden",
                extra={"user_id": str(user.user_id), "required_roles": sorted(required)},
            )
            raise AuthorizationException(
                AuthorizationExceptionCode.FORBIDDEN, required_roles=sorted(required)
            )
        return user

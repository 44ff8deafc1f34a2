"""Dependency injection for FastAPI.

Provides dependencies для API routes:
- Container (handlers, repositories) з composition root
- AppContext з Bearer access token
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header

from identity_admin.application.shared import AppContext
from identity_admin.composition_root import Container
from identity_admin.config import bind_operator_context
from identity_admin.domain.shared import AuthorizationException, AuthorizationExceptionCode

# ============================================================================
# GLOBAL DEPENDENCIES (будуть initialized в main.py)
# ============================================================================

_container: Container | None = None


def init_dependencies(container: Container) -> None:
    """Initialize global dependencies.

    Note:
        Викликається при FastAPI startup (в main.py) або в тестах.
    """
    global _container
    _container = container


def reset_dependencies() -> None:
    global _container
    _container = None


def get_container() -> Container:
    """Get wired container.

    Raises:
        RuntimeError: If dependencies not initialized.
    """
    if _container is None:
        raise RuntimeError(
            "Dependencies not initialized. Call init_dependencies() first."
        )
    return _container


# ============================================================================
# AUTHENTICATION
# ============================================================================


def _context_from_claims(claims: dict[str, Any]) -> AppContext:
    try:
        user_id = UUID(str(claims["user_id"]))
    except (KeyError, ValueError) as e:
        raise AuthorizationException(
            AuthorizationExceptionCode.UNAUTHORIZED, reason="malformed claims"
        ) from e
    return AppContext.for_user(user_id, frozenset(claims.get("roles") or ()))


async def get_app_context(
    container: Annotated[Container, Depends(get_container)],
    authorization: Annotated[str | None, Header()] = None,
) -> AppContext:
    """Build AppContext from ``Authorization: Bearer <access token>``.

    Без header - anonymous context; handlers самі вирішують, чи це дозволено.

    Raises:
        AuthorizationException: Header present but token invalid / expired.
    """
    if authorization is None:
        return AppContext.anonymous()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthorizationException(
            AuthorizationExceptionCode.UNAUTHORIZED, reason="invalid authorization format"
        )

    claims = container.token_signer.verify_token(token.strip())
    context = _context_from_claims(claims)
    bind_operator_context(str(context.user.user_id), context.user.roles)
    return context


# ============================================================================
# TYPE ALIASES (для cleaner route signatures)
# ============================================================================

ContainerDep = Annotated[Container, Depends(get_container)]
AppContextDep = Annotated[AppContext, Depends(get_app_context)]

"""Base Handler classes для Commands та Queries.

Handler - orchestrates domain logic для одного use case.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .command import Command
from .context import AppContext
from .query import Query

TCommand = TypeVar("TCommand", bound=Command)
TQuery = TypeVar("TQuery", bound=Query)
TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class для command handlers.

    Pipeline кожного handler-а:
        authorize -> validate -> mutate aggregate -> save -> dispatch events

    Collaborators передаються через constructor (composition root), handler
    ніколи не звертається до global state.

    Example:
        >>> class DeleteUserHandler(CommandHandler[DeleteUserCommand, None]):
        ...     def __init__(self, authorization, user_validator, user_repository, dispatcher):
        ...         ...
        ...
        ...     async def handle(self, command, context):
        ...         operator = self._authorization.require_role(AuthRole.AUTH_MANAGER, context)
        ...         user = await self._user_validator.validate_user_exists_by_id(...)
        ...         user.prepare_update(operator.user_id)
        ...         user.mark_for_deletion()
        ...         events = user.get_domain_events()
        ...         await self._user_repository.save(user)
        ...         await self._dispatcher.dispatch(events)
    """

    @abstractmethod
    async def handle(self, command: TCommand, context: AppContext) -> TResult:
        """Handle command and return result.

        Raises:
            AuthorizationException: Caller не має доступу.
            ValidationException: Input або state невалідні.
            BusinessException: Business failure (e.g. provider відмовив).
        """
        pass


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class для query handlers.

    Query Handler:
    - Authorize caller
    - Fetch data з repository read side
    - Transform to DTOs
    - NO side effects (read-only)
    """

    @abstractmethod
    async def handle(self, query: TQuery, context: AppContext) -> TResult:
        pass

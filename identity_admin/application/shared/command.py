"""Base Command class для CQRS pattern.

Command - запит на зміну стану системи (write operation).
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class Command(ABC):
    """Base class для всіх commands.

    Command - immutable data без business logic; вся логіка в handler.
    Хто виконує command передається окремо, через ``AppContext``.

    Example:
        >>> @dataclass(frozen=True)
        ... class CreateUserGroupCommand(Command):
        ...     name: str
        ...     description: str | None = None

        >>> command = CreateUserGroupCommand(name="Admins")
        >>> group_id = await handler.handle(command, context)
    """

    pass

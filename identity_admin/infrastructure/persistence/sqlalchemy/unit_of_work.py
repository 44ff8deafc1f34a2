"""SQLAlchemy Unit of Work - одна session + одна транзакція на mutation."""

import logging
from types import TracebackType
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork:
    """Transaction scope used by repositories for every write.

    Відповідальності:
    - Керування SQLAlchemy async session
    - Transaction management (commit/rollback)
    - Automatic rollback при exceptions (exception пропагується як є)

    ``session`` - handle активної транзакції; саме його отримує
    ``post_save`` callback, щоб виконати додаткові writes атомарно.

    Example:
        >>> async with SQLAlchemyUnitOfWork(session_factory) as uow:
        ...     uow.session.add(model)
        ...     await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of Work not started (use async with)")
        return self._session

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        # SQLAlchemy 2.0+ auto-begins транзакцію на першому statement
        self._session = self._session_factory()
        logger.debug("unit_of_work.started")
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
                logger.warning(
                    "unit_of_work.rolled_back",
                    extra={"exception_type": exc_type.__name__},
                )
        finally:
            if self._session is not None:
                await self._session.close()
                self._session = None
            logger.debug("unit_of_work.closed")

    async def commit(self) -> None:
        """Commit transaction.

        Raises:
            Exception: If commit failed (після rollback, без обгортання).
        """
        try:
            await self.session.commit()
            logger.debug("unit_of_work.committed")
        except Exception as e:
            logger.error("unit_of_work.commit_failed", extra={"error": str(e)})
            await self.rollback()
            raise

    async def rollback(self) -> None:
        await self.session.rollback()
        logger.debug("unit_of_work.rollback")


from __future__ import annotations

import asyncio

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from geckotrack.domain.errors import PersistenceError
from geckotrack.infrastructure.repositories.collections import (
    ResourceRepository,
    StudentRepository,
    SubmissionRepository,
)

logger = structlog.get_logger()


class UnitOfWork:
    """One session, three repositories; commits on clean exit, rolls back otherwise.

    Driver errors raised inside the block or at commit surface as PersistenceError.
    When ``lock`` is given it is held from enter to exit, so units of work that
    share one connection never interleave.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        lock: asyncio.Lock | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._lock = lock
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork used outside of 'async with'")
        return self._session

    async def __aenter__(self) -> UnitOfWork:
        if self._lock is not None:
            await self._lock.acquire()
        self._session = self._session_factory()
        self.students = StudentRepository(self._session)
        self.submissions = SubmissionRepository(self._session)
        self.resources = ResourceRepository(self._session)
        logger.debug("uow_enter")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc:
                await self.rollback()
            else:
                await self.commit()
        finally:
            try:
                await self.session.close()
            finally:
                self._session = None
                if self._lock is not None:
                    self._lock.release()
            logger.debug("uow_exit", exc_type=str(exc_type) if exc_type else None)

        if isinstance(exc, SQLAlchemyError):
            raise PersistenceError(f"Store operation failed: {exc}") from exc

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("uow_commit_failed", error=str(exc))
            raise PersistenceError(f"Store write failed: {exc}") from exc
        logger.debug("uow_commit")

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as exc:
            logger.error("uow_rollback_failed", error=str(exc))
            return
        logger.debug("uow_rollback")

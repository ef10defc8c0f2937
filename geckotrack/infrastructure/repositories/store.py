from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import Generic, TypeVar

import structlog
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool

from geckotrack.core.config import Settings, get_settings
from geckotrack.domain.errors import PersistenceError
from geckotrack.domain.models import Resource, StudentProfile, Submission
from geckotrack.domain.reference_data import bootstrap_roster
from geckotrack.infrastructure.db.base import Base
from geckotrack.infrastructure.db.models import StoreMeta
from geckotrack.infrastructure.db.session import build_engine, build_session_factory
from geckotrack.infrastructure.repositories.collections import _Repository
from geckotrack.infrastructure.repositories.unit_of_work import UnitOfWork

logger = structlog.get_logger()

EntityT = TypeVar("EntityT")

ROSTER_MARKER = "students_initialized"


class StoreCollection(Generic[EntityT]):
    """Collection facade whose every call runs in its own committed unit of work."""

    def __init__(
        self,
        store: EntityStore,
        select_repository: Callable[[UnitOfWork], _Repository],
    ) -> None:
        self._store = store
        self._select_repository = select_repository

    async def list(self) -> list[EntityT]:
        async with self._store.unit_of_work() as uow:
            return await self._select_repository(uow).list()

    async def insert(self, record: EntityT) -> None:
        async with self._store.unit_of_work() as uow:
            await self._select_repository(uow).insert(record)

    async def replace(self, key: str, record: EntityT) -> None:
        async with self._store.unit_of_work() as uow:
            await self._select_repository(uow).replace(key, record)


class EntityStore:
    """Durable students, submissions and resources collections.

    Construct one per process (or per test) and call ``init()`` before use.
    An engine whose pool hands every session the same connection (in-memory
    SQLite) gets one store-wide lock, taken by every unit of work.
    """

    def __init__(self, engine: AsyncEngine, *, seed_roster: bool = True) -> None:
        self.engine = engine
        self.seed_roster = seed_roster
        self._session_factory = build_session_factory(engine)
        self._connection_lock: asyncio.Lock | None = (
            asyncio.Lock() if isinstance(engine.pool, StaticPool) else None
        )
        self.students: StoreCollection[StudentProfile] = StoreCollection(
            self, lambda uow: uow.students
        )
        self.submissions: StoreCollection[Submission] = StoreCollection(
            self, lambda uow: uow.submissions
        )
        self.resources: StoreCollection[Resource] = StoreCollection(
            self, lambda uow: uow.resources
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> EntityStore:
        settings = settings or get_settings()
        engine = build_engine(settings.async_database_url)
        return cls(engine, seed_roster=settings.seed_roster)

    @property
    def serializes_writes(self) -> bool:
        return self._connection_lock is not None

    def unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self._session_factory, self._connection_lock)

    def _exclusive(self) -> AbstractAsyncContextManager:
        if self._connection_lock is None:
            return nullcontext()
        return self._connection_lock

    async def init(self) -> None:
        """Create tables and seed the roster once; safe to call repeatedly."""
        try:
            async with self._exclusive(), self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            logger.error("store_init_failed", error=str(exc))
            raise PersistenceError(f"Store initialization failed: {exc}") from exc

        async with self.unit_of_work() as uow:
            marker = await uow.session.scalar(
                select(StoreMeta).where(StoreMeta.key == ROSTER_MARKER)
            )
            if marker is not None:
                return

            seeded: list[str] = []
            if self.seed_roster:
                for student in bootstrap_roster():
                    if await uow.students.get(student.username) is None:
                        await uow.students.insert(student)
                        seeded.append(student.username)
            uow.session.add(StoreMeta(key=ROSTER_MARKER, value="1"))

        await logger.ainfo("store_seeded", students=seeded)

    async def ping(self) -> bool:
        try:
            async with self._exclusive(), self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Store unavailable: {exc}") from exc
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()

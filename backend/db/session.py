"""Database engine lifecycle."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core import Settings


class StoreHandle:
    """Owns the async engine and hands out request-scoped sessions.

    ``init()`` must be called before ``session()``; ``dispose()`` releases
    pooled connections. Both are idempotent.
    """

    def __init__(self, database_url: str, **engine_options: Any) -> None:
        self.database_url = database_url
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, source: Settings) -> "StoreHandle":
        options: dict[str, Any] = {"echo": source.database_echo}
        if source.database_url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["pool_pre_ping"] = True
        return cls(source.database_url, **options)

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("StoreHandle.init() has not been called")
        return self._engine

    def init(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.database_url, **self._engine_options)
        self._sessionmaker = async_sessionmaker(self._engine, expire_on_commit=False)

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("StoreHandle.init() has not been called")
        async with self._sessionmaker() as session:
            yield session

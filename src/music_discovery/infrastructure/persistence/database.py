"""SQLite connection manager: WAL mode, one connection per operation."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite

from music_discovery.domain.shared.constants import SQLPragmas
from music_discovery.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...config.settings import DatabaseSettings

logger = logging.getLogger(__name__)

_MEMORY = ":memory:"


def _path_from_url(url: str) -> str:
    return url.removeprefix("sqlite:///")


class Database:
    """Hands out configured aiosqlite connections and applies the schema it is given.

    The database knows nothing about tables; repositories pass their DDL in
    through ``schema`` and run their own statements on ``connection()`` or
    ``transaction()``.
    """

    def __init__(
        self,
        url: str,
        settings: DatabaseSettings | None = None,
        *,
        schema: Sequence[str] = (),
    ) -> None:
        self._path = _path_from_url(url)
        self._schema = tuple(schema)
        self._busy_timeout = settings.busy_timeout_ms if settings else 5000
        self._connection_timeout = settings.connection_timeout_s if settings else 10
        self._anchor: aiosqlite.Connection | None = None
        self._initialized = False

    @property
    def db_path(self) -> str:
        return self._path

    @property
    def is_memory(self) -> bool:
        return self._path == _MEMORY

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        if self._initialized:
            return

        if self.is_memory:
            # A shared in-memory database lives only while a connection holds it.
            self._anchor = await self._open()
        else:
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)

        async with self.transaction() as conn:
            for statement in self._schema:
                await conn.execute(statement)

        self._initialized = True
        logger.info(LogTemplates.DATABASE_INITIALIZED, self._path)

    async def _open(self) -> aiosqlite.Connection:
        if self.is_memory:
            target, uri = f"file:music-discovery-{id(self)}?mode=memory&cache=shared", True
        else:
            target, uri = self._path, False

        conn = await aiosqlite.connect(target, uri=uri, timeout=self._connection_timeout)
        conn.row_factory = aiosqlite.Row
        await conn.execute(SQLPragmas.JOURNAL_MODE_WAL)
        await conn.execute(SQLPragmas.BUSY_TIMEOUT.format(timeout=self._busy_timeout))
        return conn

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        conn = await self._open()
        try:
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Connection that commits on success and rolls back on error."""
        async with self.connection() as conn:
            try:
                yield conn
            except Exception:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        if self._anchor is not None:
            try:
                await self._anchor.close()
            finally:
                self._anchor = None
        self._initialized = False
        logger.info(LogTemplates.DATABASE_CLOSED)

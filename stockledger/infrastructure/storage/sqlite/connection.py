"""
Async SQLite connection pool with aiosqlite.

Connections are opened once and handed out through an asyncio queue.
Three ways to borrow one:
- acquire(): plain connection, caller manages commits
- transaction(): deferred transaction, commit on success, rollback on error
- write_transaction(): BEGIN IMMEDIATE, holding the database write lock
  from the first statement until commit
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stockledger.config import get_logger, get_settings
from stockledger.core.exceptions import StorageUnavailableError

logger = get_logger(__name__)

# WAL lets readers proceed while a writer holds the lock
CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections to one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout  # ms

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        # Bounds how long BEGIN IMMEDIATE waits for another writer
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    async def initialize(self) -> None:
        """Open all connections. Safe to call more than once."""
        async with self._lock:
            if self._initialized:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            while len(self._connections) < self.pool_size:
                conn = await self._open()
                self._connections.append(conn)
                self._pool.put_nowait(conn)
            self._initialized = True

        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; waits while all of them are in use."""
        if not self._initialized:
            await self.initialize()
        conn = await self._pool.get()
        try:
            yield conn
        finally:
            self._pool.put_nowait(conn)

    @asynccontextmanager
    async def _unit(self, begin: str | None) -> AsyncIterator[aiosqlite.Connection]:
        async with self.acquire() as conn:
            if begin is not None:
                await conn.execute(begin)
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    def transaction(self):
        """Connection whose statements commit together or roll back together."""
        return self._unit(None)

    def write_transaction(self):
        """
        Connection inside BEGIN IMMEDIATE.

        The write lock is taken before the first read, so a read-modify-write
        cannot interleave with another writer on any connection.
        """
        return self._unit("BEGIN IMMEDIATE")

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._pool = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
        logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Process-wide pool, configured from storage settings on first use."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn


@asynccontextmanager
async def get_write_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Connection holding the database write lock until commit."""
    pool = await get_pool()
    async with pool.write_transaction() as conn:
        yield conn


@asynccontextmanager
async def storage_operation(operation: str) -> AsyncIterator[None]:
    """
    Translate driver failures into StorageUnavailableError.

    The raw driver message is logged, never returned to callers.
    """
    try:
        yield
    except aiosqlite.Error as e:
        logger.error(
            "storage_operation_failed",
            operation=operation,
            error_type=e.__class__.__name__,
            error=str(e),
        )
        raise StorageUnavailableError(operation) from e

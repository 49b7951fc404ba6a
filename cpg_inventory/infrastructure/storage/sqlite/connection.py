"""
Async SQLite connection pool with aiosqlite.

Reads borrow a pooled connection through ``get_connection()``. Stock
writes go through ``get_transaction()``, which opens the write lock with
``BEGIN IMMEDIATE`` before the first statement, so a quantity check and
the decrement that follows it see the same committed state.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from cpg_inventory.config import get_logger, get_settings

logger = get_logger(__name__)


class ConnectionPool:
    """
    Fixed-size pool of SQLite connections to the ledger database.

    Every connection runs in WAL mode with foreign keys on, so readers
    never block the single writer.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def in_use(self) -> int:
        """Connections currently checked out."""
        return len(self._connections) - self._pool.qsize()

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._create_connection()
                self._connections.append(conn)
                await self._pool.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _create_connection(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        # Ledger rows must point at a live item, order or shipment
        await conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection, returning it to the pool afterwards.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        finally:
            if conn.in_transaction:
                # A reader left a write open; never hand it to the next caller
                logger.warning("connection_returned_in_transaction")
                await conn.rollback()
            await self._pool.put(conn)

    @asynccontextmanager
    async def transaction(self, label: str | None = None) -> AsyncIterator[aiosqlite.Connection]:
        """
        Run one unit of work under the database write lock.

        Commits when the block exits normally. Any exception rolls back
        every statement issued inside the block and is re-raised.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.commit()
            except Exception as e:
                await conn.rollback()
                logger.info(
                    "unit_of_work_rolled_back",
                    unit=label,
                    error_type=type(e).__name__,
                )
                raise

    async def ping(self) -> float:
        """Round-trip a trivial query and return its latency in milliseconds."""
        start = time.perf_counter()
        async with self.acquire() as conn:
            await conn.execute("SELECT 1")
        return (time.perf_counter() - start) * 1000

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._initialized = False
            logger.info("connection_pool_closed")


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool from storage settings."""
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
    """Read connection from the global pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction(label: str | None = None) -> AsyncIterator[aiosqlite.Connection]:
    """Write transaction from the global pool; see ``ConnectionPool.transaction``."""
    pool = await get_pool()
    async with pool.transaction(label) as conn:
        yield conn

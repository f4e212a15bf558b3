"""
MongoDB connection cache.

Keeps one client, and the one connect attempt that produces it, for the life
of the process so repeated or concurrent callers never open extra connections.
Importing this module without MONGODB_URI configured is a fatal error.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from connection_cache.core.config import MissingConfigurationError, settings

logger = structlog.get_logger(__name__)

# Operations issued before the server is reachable fail instead of queuing.
CONNECT_OPTIONS: dict[str, Any] = {"buffer_commands": False}

MONGODB_URI = settings.MONGODB_URI.strip()

if not MONGODB_URI:
    raise MissingConfigurationError("Please define the MONGODB_URI environment variable in .env")


async def connect(
    uri: str,
    *,
    buffer_commands: bool = True,
    server_selection_timeout_ms: int | None = None,
) -> AsyncIOMotorClient:
    """
    Open a motor client for `uri`.

    Motor connects lazily, so with buffering disabled the client gets a short
    server selection timeout and is pinged before it is returned. Driver
    errors are raised unchanged.
    """
    if buffer_commands:
        return AsyncIOMotorClient(uri)

    timeout_ms = server_selection_timeout_ms or settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS
    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=timeout_ms)
    try:
        await client.admin.command("ping")
    except Exception:
        client.close()
        raise
    return client


def _log_outcome(attempt: asyncio.Future) -> None:
    if attempt.cancelled():
        logger.warning("mongodb_connect_cancelled")
        return
    exc = attempt.exception()
    if exc is not None:
        logger.error("mongodb_connect_failed", error=repr(exc))
    else:
        logger.info("mongodb_connected")


@dataclass
class ConnectionCache:
    """
    Memoizes a connected client and the in-flight attempt that produces it.

    `conn` is set once and never replaced. `pending` is checked and set with
    no await in between, so concurrent callers in one event loop share a
    single attempt. A failed attempt stays in `pending` and is re-raised on
    every later call unless `evict_failed` is set.
    """

    uri: str
    connector: Callable[..., Awaitable[AsyncIOMotorClient]] = connect
    options: dict[str, Any] = field(default_factory=lambda: dict(CONNECT_OPTIONS))
    evict_failed: bool = False
    conn: AsyncIOMotorClient | None = None
    pending: asyncio.Future | None = None

    async def get(self) -> AsyncIOMotorClient:
        if self.conn is not None:
            return self.conn

        if self.pending is None:
            logger.info("mongodb_connect_started", options=self.options)
            self.pending = asyncio.ensure_future(self.connector(self.uri, **self.options))
            self.pending.add_done_callback(_log_outcome)

        attempt = self.pending
        try:
            # one cancelled waiter must not cancel the attempt for the rest
            conn = await asyncio.shield(attempt)
        except Exception:
            if self.evict_failed and self.pending is attempt and attempt.done():
                self.pending = None
            raise

        if self.conn is None:
            self.conn = conn
        return self.conn


_cache = ConnectionCache(uri=MONGODB_URI)


async def get_connection() -> AsyncIOMotorClient:
    """Return the process-wide client, connecting on first use."""
    return await _cache.get()


async def get_database(name: str | None = None) -> AsyncIOMotorDatabase:
    client = await get_connection()
    db_name = name or settings.MONGODB_DB
    if db_name:
        return client[db_name]
    return client.get_default_database()

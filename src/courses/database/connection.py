"""
Document store connection management

A single handle to the document store is created on first demand and shared
by every caller for the rest of the process lifetime.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pymongo import AsyncMongoClient

from ..config import ConnectionConfig, settings
from ..logging import get_logger
from .exceptions import DatabaseConnectionError

logger = get_logger(__name__)


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


@dataclass(frozen=True)
class ConnectionHandle:
    """An established session with a named database of the document store."""

    database_name: str
    client: Any = field(repr=False)
    database: Any = field(repr=False)


Connector = Callable[[ConnectionConfig], Awaitable[ConnectionHandle]]


async def connect_mongo(config: ConnectionConfig) -> ConnectionHandle:
    """Open a MongoDB client and verify the session with a ping."""
    client = AsyncMongoClient(
        config.url(),
        serverSelectionTimeoutMS=config.connect_timeout_ms,
        connectTimeoutMS=config.connect_timeout_ms,
    )
    try:
        await client.admin.command("ping")
    except BaseException:
        await client.close()
        raise
    return ConnectionHandle(
        database_name=config.database_name,
        client=client,
        database=client[config.database_name],
    )


def _default_config() -> ConnectionConfig:
    return settings.connection_config()


class ConnectionManager:
    """Lazily establishes and memoizes the process-wide connection handle.

    Concurrent callers that arrive while a connection attempt is in flight wait
    for that attempt instead of opening their own. A failed attempt is terminal:
    later callers get the same error and no new attempt is made.
    """

    def __init__(
        self,
        connector: Connector | None = None,
        config_factory: Callable[[], ConnectionConfig] | None = None,
    ):
        self._connector = connector or connect_mongo
        self._config_factory = config_factory or _default_config
        self._handle: ConnectionHandle | None = None
        self._error: DatabaseConnectionError | None = None
        self._state = ConnectionState.UNINITIALIZED
        self._lock = asyncio.Lock()
        self.attempts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def handle(self) -> ConnectionHandle | None:
        return self._handle

    async def get_connection(self) -> ConnectionHandle:
        """Return the shared handle, connecting on first use."""
        # Fast path: already connected, no lock and no I/O
        if self._handle is not None:
            return self._handle

        async with self._lock:
            # Double-check after acquiring lock (an earlier waiter may have connected)
            if self._handle is not None:
                return self._handle
            if self._error is not None:
                raise self._error

            self._handle = await self._establish()
            return self._handle

    async def _establish(self) -> ConnectionHandle:
        config = self._config_factory()
        target = config.redacted_url()

        self._state = ConnectionState.CONNECTING
        self.attempts += 1
        logger.info("Connecting to document store", target=target)

        try:
            handle = await asyncio.wait_for(
                self._connector(config), timeout=config.connect_timeout
            )
        except asyncio.CancelledError:
            # The caller went away; nothing was established
            self._state = ConnectionState.UNINITIALIZED
            raise
        except TimeoutError as e:
            error = DatabaseConnectionError(
                f"Timed out after {config.connect_timeout_ms}ms connecting to {target}",
                target=target,
            )
            self._record_failure(error, e)
            raise error from e
        except Exception as e:
            error = DatabaseConnectionError(f"Could not connect to {target}: {e}", target=target)
            self._record_failure(error, e)
            raise error from e

        self._state = ConnectionState.CONNECTED
        logger.info("Connected to document store", database=handle.database_name)
        return handle

    def _record_failure(self, error: DatabaseConnectionError, cause: BaseException) -> None:
        self._state = ConnectionState.FAILED
        self._error = error
        logger.error(
            "Could not connect to document store",
            target=error.target,
            error=str(cause),
            error_type=type(cause).__name__,
        )

    async def check(self, connect: bool = False) -> tuple[bool, str | None]:
        """Ping the document store.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        if self._handle is None:
            if not connect:
                return False, f"Database connection {self._state.value}"
            try:
                await self.get_connection()
            except DatabaseConnectionError as e:
                return False, str(e)

        assert self._handle is not None
        try:
            await self._handle.client.admin.command("ping")
        except Exception as e:
            return False, f"Database ping failed ({type(e).__name__}): {e}"
        return True, None

    async def close(self) -> None:
        """Close the underlying client, if one was established."""
        if self._handle is not None:
            await self._handle.client.close()
            logger.info("Document store connection closed", database=self._handle.database_name)


# Global shared connection manager
_connection_manager = ConnectionManager()


def get_connection_manager() -> ConnectionManager:
    return _connection_manager


async def get_connection() -> ConnectionHandle:
    """Get the shared document store handle, connecting on first use.

    Raises:
        DatabaseConnectionError: If the store cannot be reached. Fatal.
    """
    return await _connection_manager.get_connection()


async def get_database() -> Any:
    """Get the configured database from the shared handle."""
    handle = await _connection_manager.get_connection()
    return handle.database


def get_connection_state() -> ConnectionState:
    return _connection_manager.state


async def check_connection(connect: bool = False) -> tuple[bool, str | None]:
    return await _connection_manager.check(connect=connect)


async def close_connection() -> None:
    await _connection_manager.close()


def reset_connection(
    connector: Connector | None = None,
    config_factory: Callable[[], ConnectionConfig] | None = None,
) -> ConnectionManager:
    """Replace the shared manager with a fresh one (for tests)."""
    global _connection_manager
    _connection_manager = ConnectionManager(connector=connector, config_factory=config_factory)
    return _connection_manager

"""Shared Motor client for every docmap connector and sequence generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import MongoConnectionError

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger("docmap.mongo.connection")


class MongoConnectionManager:
    """Own one lazily created Motor client and a default database name.

    Pooling, timeouts, transport errors and cancellation are Motor's
    concern; this class only decides when the client exists and which
    database operations run against.

    Args:
        url: MongoDB connection string.
        database: Default database for :meth:`database`.
        server_selection_timeout_ms: Passed to Motor as ``serverSelectionTimeoutMS``.
        connect_timeout_ms: Passed to Motor as ``connectTimeoutMS``.
        **client_options: Any further ``AsyncIOMotorClient`` keyword arguments.
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        *,
        database: str | None = None,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **client_options: Any,
    ) -> None:
        self._url = url
        self._database = database
        self._client_options: dict[str, Any] = {
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "connectTimeoutMS": connect_timeout_ms,
            **client_options,
        }
        self._client: AsyncIOMotorClient[Any] | None = None

    @property
    def database_name(self) -> str | None:
        return self._database

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> AsyncIOMotorClient[Any]:
        """Return the client, creating it on first use."""
        if self._client is None:
            self._client = self._create_client()
            logger.debug("Created Motor client for %s", self._url)
        return self._client

    def _create_client(self) -> AsyncIOMotorClient[Any]:
        try:
            from motor.motor_asyncio import AsyncIOMotorClient
        except ImportError as e:
            raise MongoConnectionError(
                "motor is required; install with motor>=3.3.0"
            ) from e
        try:
            return AsyncIOMotorClient(self._url, **self._client_options)
        except Exception as e:
            # Invalid URIs and options surface here; nothing is sent yet.
            raise MongoConnectionError(str(e)) from e

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    def database(self, name: str | None = None) -> AsyncIOMotorDatabase[Any]:
        """Database *name*, or the default one given at construction."""
        database_name = name or self._database
        if not database_name:
            raise MongoConnectionError(
                "Database name must be set on the connector or connection"
            )
        return self.client.get_database(database_name)

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        logger.debug("Closed Motor client for %s", self._url)

    async def health_check(self) -> bool:
        """``True`` when the server answers ``ping``."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except Exception as e:  # noqa: BLE001
            logger.warning("MongoDB health check failed: %s", e)
            return False
        return True

"""
Store connection lifecycle for MDB_TYPED.

``ConnectionManager`` owns the ``AsyncIOMotorClient``. It is the only
object that does; repositories receive ``manager.mongo_db`` (or a
collection from it) explicitly, so there is no module-level client to
import or patch.

Usage:
    async with ConnectionManager.from_config(StoreConfig()) as manager:
        repos = Repositories(manager.mongo_db)
        ...
"""

import time
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from ..config import StoreConfig
from ..constants import (
    APP_NAME,
    DEFAULT_MAX_IDLE_TIME_MS,
    DEFAULT_MAX_POOL_SIZE,
    DEFAULT_MIN_POOL_SIZE,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
)
from ..exceptions import InitializationError
from ..observability import (
    HealthCheckResult,
    check_store_health,
    clear_store_context,
    get_logger,
    record_operation,
    set_store_context,
)

logger = get_logger(__name__)


class ConnectionManager:
    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        max_pool_size: int = DEFAULT_MAX_POOL_SIZE,
        min_pool_size: int = DEFAULT_MIN_POOL_SIZE,
        server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    ) -> None:
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.max_pool_size = max_pool_size
        self.min_pool_size = min_pool_size
        self.server_selection_timeout_ms = server_selection_timeout_ms

        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    @classmethod
    def from_config(cls, config: StoreConfig) -> "ConnectionManager":
        """
        Raises:
            ConfigurationError: If ``config`` does not validate
        """
        config.validate()
        return cls(
            mongo_uri=config.mongo_uri,
            db_name=config.db_name,
            max_pool_size=config.max_pool_size,
            min_pool_size=config.min_pool_size,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
        )

    def _build_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(
            self.mongo_uri,
            appname=APP_NAME,
            maxPoolSize=self.max_pool_size,
            minPoolSize=self.min_pool_size,
            maxIdleTimeMS=DEFAULT_MAX_IDLE_TIME_MS,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            retryReads=True,
            retryWrites=True,
        )

    async def initialize(self) -> None:
        """
        Open the client and confirm the server answers a ping.

        Calling this on an open manager does nothing.

        Raises:
            InitializationError: If the server cannot be reached; the
                half-open client is closed first
        """
        if self._client is not None:
            logger.warning(f"Connection to '{self.db_name}' is already open")
            return

        logger.info(
            f"Connecting to database '{self.db_name}'",
            extra={"pool_size": f"{self.min_pool_size}-{self.max_pool_size}"},
        )
        started = time.perf_counter()
        client = self._build_client()

        try:
            await client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            client.close()
            elapsed_ms = (time.perf_counter() - started) * 1000
            record_operation("connection.initialize", elapsed_ms, success=False)
            logger.critical(
                f"Could not reach MongoDB for database '{self.db_name}'",
                extra={"error_type": type(e).__name__, "duration_ms": round(elapsed_ms, 2)},
                exc_info=True,
            )
            raise InitializationError(
                f"Failed to connect to MongoDB: {e}",
                mongo_uri=self.mongo_uri,
                db_name=self.db_name,
                context={"error_type": type(e).__name__},
            ) from e

        self._client = client
        self._db = client[self.db_name]
        set_store_context(db_name=self.db_name)

        elapsed_ms = (time.perf_counter() - started) * 1000
        record_operation("connection.initialize", elapsed_ms)
        logger.info(
            f"Connected to database '{self.db_name}' in {elapsed_ms:.2f}ms",
            extra={"duration_ms": round(elapsed_ms, 2)},
        )

    async def shutdown(self) -> None:
        """Close the client. Safe to call when already closed."""
        if self._client is None:
            return

        self._client.close()
        self._client = None
        self._db = None
        clear_store_context()
        logger.info(f"Closed connection to database '{self.db_name}'")

    async def health_check(self) -> HealthCheckResult:
        """Ping the server. Reports unhealthy rather than raising when not connected."""
        return await check_store_health(self._client)

    async def __aenter__(self) -> "ConnectionManager":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.shutdown()

    @property
    def initialized(self) -> bool:
        return self._client is not None

    @property
    def mongo_client(self) -> AsyncIOMotorClient:
        """
        Raises:
            RuntimeError: If ``initialize`` has not completed
        """
        if self._client is None:
            raise RuntimeError("ConnectionManager not initialized. Call initialize() first.")
        return self._client

    @property
    def mongo_db(self) -> AsyncIOMotorDatabase:
        """
        Raises:
            RuntimeError: If ``initialize`` has not completed
        """
        if self._db is None:
            raise RuntimeError("ConnectionManager not initialized. Call initialize() first.")
        return self._db

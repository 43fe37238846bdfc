"""
MongoDB access for HirePath.

Repositories and the ledger talk to MongoDB through the synchronous PyMongo
client; index creation at install time goes through Motor. Both clients are
bounded by ``DB_TIMEOUT_MS`` so a dead server surfaces as a timeout instead
of a hang.
"""

import re
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from hirepath.utils.config import AppSettings, get_settings
from hirepath.utils.logger import get_logger

logger = get_logger(__name__)

APPLICATIONS_COLLECTION = "applications"
JOBS_COLLECTION = "jobs"
CANDIDATES_COLLECTION = "candidates"

_HOST_PATTERN = re.compile(r"^[A-Za-z0-9._\-,:\[\]]+$")

# (collection, keys, options)
INDEXES: list[tuple[str, list[tuple[str, int]], dict[str, Any]]] = [
    (
        APPLICATIONS_COLLECTION,
        [("job_id", ASCENDING), ("candidate_id", ASCENDING)],
        {
            "unique": True,
            "partialFilterExpression": {"withdrawn": False},
            "name": "uniq_live_application_per_pair",
        },
    ),
    (APPLICATIONS_COLLECTION, [("candidate_id", ASCENDING), ("withdrawn", ASCENDING)], {}),
    (APPLICATIONS_COLLECTION, [("job_id", ASCENDING)], {}),
    (APPLICATIONS_COLLECTION, [("status", ASCENDING)], {}),
    (JOBS_COLLECTION, [("is_active", ASCENDING), ("posted_at", ASCENDING)], {}),
    (JOBS_COLLECTION, [("deadline", ASCENDING)], {}),
]


class DatabaseManager:
    """
    Owns the MongoDB clients for one settings snapshot.

    Clients are created lazily on first use; ``close`` drops both so the
    next call reconnects.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self._settings = settings or get_settings()
        self._client: Optional[MongoClient] = None
        self._async_client: Optional[AsyncIOMotorClient] = None

    @property
    def database_name(self) -> str:
        return self._settings.database.name

    def _build_uri(self) -> str:
        """Connection URI with the host checked and credentials URL-encoded."""
        db = self._settings.database
        host = db.host.strip()
        if not _HOST_PATTERN.match(host):
            raise ValueError(f"Invalid database host: {host!r}")
        return db.connection_string

    def _client_options(self) -> dict[str, Any]:
        timeout = self._settings.database.timeout_ms
        return {
            "serverSelectionTimeoutMS": timeout,
            "connectTimeoutMS": timeout,
            "socketTimeoutMS": timeout,
            "maxPoolSize": 50,
        }

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            logger.info(f"Connecting to MongoDB database '{self.database_name}'")
            self._client = MongoClient(self._build_uri(), **self._client_options())
        return self._client

    def collection(self, name: str) -> Collection:
        """Synchronous handle on one collection."""
        return self.client[self.database_name][name]

    def ping(self) -> bool:
        """True when the server answers within the configured timeout."""
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            self.close()
            return False
        return True

    async def ensure_indexes(self) -> int:
        """Create every index in ``INDEXES``; returns how many were requested."""
        if self._async_client is None:
            self._async_client = AsyncIOMotorClient(self._build_uri(), **self._client_options())
        database = self._async_client[self.database_name]

        for name, keys, options in INDEXES:
            await database[name].create_index(keys, **options)
            logger.debug(f"Index on {name}: {keys}")

        logger.info(f"Ensured {len(INDEXES)} indexes")
        return len(INDEXES)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
        if self._async_client is not None:
            self._async_client.close()
            self._async_client = None
        logger.debug("MongoDB clients closed")


_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Process-wide manager built from the current settings."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager

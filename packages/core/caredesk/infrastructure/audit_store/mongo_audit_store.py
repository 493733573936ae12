"""MongoDB audit store implementation.

Stores audit entries in a single append-only collection using motor (async
MongoDB driver).

Example:
    ```python
    from caredesk.infrastructure.audit_store.mongo_audit_store import MongoAuditStore

    store = MongoAuditStore(connection_url="mongodb://localhost:27017")
    await store.initialize()
    await store.append(entry)
    ```
"""

import os
from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import DESCENDING, IndexModel
from pymongo.errors import (
    ConfigurationError,
    ConnectionFailure,
    NetworkTimeout,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from caredesk.domain.interfaces.audit_store import (
    AuditQuery,
    AuditStore,
    AuditStoreError,
)
from caredesk.domain.models.audit_entry import AuditEntry

logger = structlog.get_logger(__name__)

AUDIT_INDEXES = [
    IndexModel([("timestamp", DESCENDING)]),
    IndexModel([("admin_id", 1), ("timestamp", DESCENDING)]),
    IndexModel([("action", 1), ("timestamp", DESCENDING)]),
    IndexModel([("entity_id", 1), ("timestamp", DESCENDING)]),
]


def entry_to_document(entry: AuditEntry) -> dict[str, Any]:
    """Convert an AuditEntry to its MongoDB document (``_id`` = entry id)."""
    document = entry.model_dump(mode="python")
    document["_id"] = document.pop("id")
    document["entity_kind"] = entry.entity_kind.value
    return document


def document_to_entry(document: dict[str, Any]) -> AuditEntry:
    """Convert a MongoDB document back to an AuditEntry."""
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return AuditEntry.model_validate(data)


def build_filter(query: AuditQuery) -> dict[str, Any]:
    """Translate an AuditQuery into a MongoDB filter document."""
    mongo_filter: dict[str, Any] = {}
    if query.admin_id is not None:
        mongo_filter["admin_id"] = query.admin_id
    if query.action is not None:
        mongo_filter["action"] = query.action
    if query.entity_kind is not None:
        mongo_filter["entity_kind"] = query.entity_kind.value
    if query.entity_id is not None:
        mongo_filter["entity_id"] = query.entity_id

    timestamp_range: dict[str, Any] = {}
    if query.timestamp_from is not None:
        timestamp_range["$gte"] = query.timestamp_from
    if query.timestamp_to is not None:
        timestamp_range["$lte"] = query.timestamp_to
    if timestamp_range:
        mongo_filter["timestamp"] = timestamp_range
    return mongo_filter


class MongoAuditStore(AuditStore):
    """MongoDB implementation of AuditStore.

    Connection Configuration:
        - Connection string from the constructor or the MONGODB_URL
          environment variable
        - Indexes on timestamp, admin, action and entity are created by
          :meth:`initialize`

    Error Handling:
        - Driver errors are logged and re-raised as AuditStoreError
    """

    def __init__(
        self,
        connection_url: str | None = None,
        database_name: str = "caredesk",
        collection_name: str = "admin_audit_logs",
        server_selection_timeout_ms: int = 5000,
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        """Initialize MongoAuditStore.

        Args:
            connection_url: MongoDB connection string. If None, reads from
                           MONGODB_URL environment variable.
            database_name: Database holding the audit collection.
            collection_name: Audit collection name.
            server_selection_timeout_ms: Server selection timeout in milliseconds.
            client: Existing motor client to reuse instead of creating one.

        Raises:
            AuditStoreError: If the connection URL is missing or invalid.
        """
        self._database_name = database_name
        self._collection_name = collection_name
        self._initialized = False

        if client is None:
            if connection_url is None:
                connection_url = os.getenv("MONGODB_URL")
                if connection_url is None:
                    raise AuditStoreError(
                        "MongoDB connection URL not provided. Set MONGODB_URL environment "
                        "variable or pass connection_url parameter."
                    )
            try:
                client = AsyncIOMotorClient(
                    connection_url,
                    serverSelectionTimeoutMS=server_selection_timeout_ms,
                    tz_aware=True,
                )
            except (ConfigurationError, ValueError) as e:
                error_msg = f"Invalid MongoDB connection URL: {e}"
                logger.error("mongodb_connection_error", error=error_msg)
                raise AuditStoreError(error_msg) from e

        self._client = client
        self._collection = client[database_name][collection_name]

    @property
    def client(self) -> AsyncIOMotorClient:
        return self._client

    async def initialize(self) -> None:
        """Verify connectivity and create the audit indexes.

        Raises:
            AuditStoreError: If the server cannot be reached.
        """
        if self._initialized:
            return

        try:
            await self._client.admin.command("ping")
            await self._collection.create_indexes(AUDIT_INDEXES)
            self._initialized = True
            logger.info(
                "MongoDB audit store initialized",
                database=self._database_name,
                collection=self._collection_name,
            )
        except (ConnectionFailure, ServerSelectionTimeoutError, NetworkTimeout) as e:
            error_msg = f"Failed to connect to MongoDB: {e}"
            logger.error("mongodb_connection_failure", error=error_msg)
            raise AuditStoreError(error_msg) from e
        except OperationFailure as e:
            error_msg = f"MongoDB audit store initialization failed: {e}"
            logger.error("mongodb_initialization_error", error=error_msg)
            raise AuditStoreError(error_msg) from e

    async def close(self) -> None:
        """Close the MongoDB client."""
        self._client.close()
        self._initialized = False
        logger.info("MongoDB connection closed")

    async def append(self, entry: AuditEntry) -> None:
        if not self._initialized:
            await self.initialize()

        try:
            await self._collection.insert_one(entry_to_document(entry))
        except Exception as e:
            error_msg = f"Failed to append audit entry {entry.id}: {e}"
            logger.error("mongodb_audit_append_error", audit_id=entry.id, error=error_msg)
            raise AuditStoreError(error_msg) from e

    async def query(self, query: AuditQuery) -> list[AuditEntry]:
        if not self._initialized:
            await self.initialize()

        try:
            cursor = self._collection.find(build_filter(query)).sort("timestamp", DESCENDING)
            if query.offset:
                cursor = cursor.skip(query.offset)
            if query.limit is not None:
                cursor = cursor.limit(query.limit)
            return [document_to_entry(document) async for document in cursor]
        except Exception as e:
            error_msg = f"Failed to query audit entries: {e}"
            logger.error("mongodb_audit_query_error", error=error_msg)
            raise AuditStoreError(error_msg) from e

    async def count(self, query: AuditQuery) -> int:
        if not self._initialized:
            await self.initialize()

        try:
            return await self._collection.count_documents(build_filter(query))
        except Exception as e:
            error_msg = f"Failed to count audit entries: {e}"
            logger.error("mongodb_audit_count_error", error=error_msg)
            raise AuditStoreError(error_msg) from e

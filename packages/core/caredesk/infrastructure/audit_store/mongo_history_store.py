"""MongoDB status history store implementation.

Shares the motor client of the MongoAuditStore; closing the client is left
to the audit store.
"""

from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import DESCENDING, IndexModel
from pymongo.errors import OperationFailure

from caredesk.domain.interfaces.status_history_store import (
    StatusHistoryError,
    StatusHistoryStore,
)
from caredesk.domain.models.entity import EntityKind
from caredesk.domain.models.status_change import StatusChange

logger = structlog.get_logger(__name__)

HISTORY_INDEXES = [
    IndexModel([("entity_kind", 1), ("entity_id", 1), ("changed_at", DESCENDING)]),
]


def change_to_document(change: StatusChange) -> dict[str, Any]:
    document = change.model_dump(mode="python")
    document["_id"] = document.pop("id")
    document["entity_kind"] = change.entity_kind.value
    return document


def document_to_change(document: dict[str, Any]) -> StatusChange:
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return StatusChange.model_validate(data)


class MongoStatusHistoryStore(StatusHistoryStore):
    """MongoDB implementation of StatusHistoryStore."""

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: str = "caredesk",
        collection_name: str = "user_status_history",
    ) -> None:
        self._collection = client[database_name][collection_name]
        self._initialized = False

    async def initialize(self) -> None:
        """Create the history index.

        Raises:
            StatusHistoryError: If the index cannot be created.
        """
        if self._initialized:
            return
        try:
            await self._collection.create_indexes(HISTORY_INDEXES)
            self._initialized = True
        except OperationFailure as e:
            error_msg = f"MongoDB status history initialization failed: {e}"
            logger.error("mongodb_initialization_error", error=error_msg)
            raise StatusHistoryError(error_msg) from e

    async def append(self, change: StatusChange) -> None:
        if not self._initialized:
            await self.initialize()

        try:
            await self._collection.insert_one(change_to_document(change))
        except Exception as e:
            error_msg = f"Failed to record status change {change.id}: {e}"
            logger.error("mongodb_history_append_error", change_id=change.id, error=error_msg)
            raise StatusHistoryError(error_msg) from e

    async def history(self, entity_kind: EntityKind, entity_id: str) -> list[StatusChange]:
        if not self._initialized:
            await self.initialize()

        try:
            cursor = self._collection.find(
                {"entity_kind": entity_kind.value, "entity_id": entity_id}
            ).sort("changed_at", DESCENDING)
            return [document_to_change(document) async for document in cursor]
        except Exception as e:
            error_msg = f"Failed to read status history for {entity_id}: {e}"
            logger.error("mongodb_history_query_error", error=error_msg)
            raise StatusHistoryError(error_msg) from e

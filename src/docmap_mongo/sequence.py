"""Per-model integer sequences in a counters collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

if TYPE_CHECKING:
    from .connection import MongoConnectionManager

logger = logging.getLogger("docmap.mongo.sequence")


class MongoSequenceGenerator:
    """
    Opaque id generator backed by MongoDB.

    Each model owns one counter document ``{_id: <model name>, value: n}``
    in the ``counters`` collection. Values are incremented atomically with
    ``find_one_and_update`` and upsert, so concurrent creates never receive
    the same value. The first id of a model is ``1``.
    """

    COUNTERS_COLLECTION = "counters"

    def __init__(
        self,
        connection: MongoConnectionManager,
        *,
        database: str | None = None,
        collection: str | None = None,
    ) -> None:
        self._connection = connection
        self._database = database
        self._collection_name = collection or self.COUNTERS_COLLECTION

    def _collection(self) -> Any:
        return self._connection.database(self._database).get_collection(
            self._collection_name
        )

    async def next_id(self, model_name: str) -> int:
        result = await self._collection().find_one_and_update(
            {"_id": model_name},
            {"$inc": {"value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        value = int(result["value"])
        logger.debug("Generated sequence value %d for %s", value, model_name)
        return value

    async def current(self, model_name: str) -> int:
        """Last value handed out for *model_name* (``0`` if none yet)."""
        doc = await self._collection().find_one({"_id": model_name})
        return int(doc["value"]) if doc else 0

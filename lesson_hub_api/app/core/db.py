"""
MongoDB integration.

This module provides the ``DocumentStore`` accessor wrapping a single
asynchronous pymongo client, a FastAPI dependency returning the store
attached to the running application (``get_store``) and small helpers
converting between API identifiers and BSON documents.

One store is created per application and shared by every request
handler; the MongoDB driver handles concurrent access.  Two logical
collections are exposed: ``lessons`` and ``orders``.
"""

import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from .errors import StoreError, ValidationError


logger = logging.getLogger(__name__)

LESSONS_COLLECTION = "lessons"
ORDERS_COLLECTION = "orders"

# Range of the 64-bit integers BSON can encode.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class DocumentStore:
    """Accessor for the lesson hub database."""

    def __init__(self, uri: str, database_name: str, client: Optional[AsyncMongoClient] = None) -> None:
        self.uri = uri
        self.database_name = database_name
        # The async client connects lazily, on the first operation.
        self.client = client if client is not None else AsyncMongoClient(uri)
        self.db = self.client[database_name]

    @property
    def lessons(self):
        return self.db[LESSONS_COLLECTION]

    @property
    def orders(self):
        return self.db[ORDERS_COLLECTION]

    async def connect(self) -> None:
        """Verify that the server is reachable.

        Raises ``StoreError`` when the ping fails; the application
        startup hook lets it propagate so that the process exits.
        """
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            raise StoreError(f"Could not connect to MongoDB: {exc}") from exc
        logger.info("Connected to MongoDB database '%s'", self.database_name)

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB connection closed")


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency returning the application's document store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError("Document store is not initialised")
    return store


def parse_object_id(value: Any) -> ObjectId:
    """Convert an API identifier into an ``ObjectId``.

    Raises ``ValidationError`` ("invalid id format") for anything that
    is not a 24 character hexadecimal string.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError("invalid id format", {"id": str(value)})
    return ObjectId(value)


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return serialize_document(value)
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a copy of ``document`` with ``_id`` exposed as a string ``id``."""
    if document is None:
        return None
    data: Dict[str, Any] = {}
    for key, value in document.items():
        if key == "_id":
            data["id"] = str(value)
        else:
            data[key] = _serialize_value(value)
    return data

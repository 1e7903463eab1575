"""
Business logic for lessons.

``LessonService`` lists, searches, creates and updates lesson
documents and adjusts the number of available seats.  Seat adjustment
is a single atomic update which never takes ``space`` below zero; it is
not called by order creation.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import ReturnDocument

from ..core.db import DocumentStore, parse_object_id, serialize_document
from ..core.errors import NotFoundError, ValidationError
from ..schemas.lesson import LessonCreate, LessonRead, LessonUpdate


logger = logging.getLogger(__name__)


class LessonService:
    """Service for managing lessons."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def list_lessons(self, search: Optional[str] = None) -> List[LessonRead]:
        """Return all lessons, optionally filtered by ``search``.

        The filter is a case‑insensitive substring match on ``topic`` or
        ``location``.  Results come back in the store's natural order.
        """
        query: dict = {}
        if search and search.strip():
            pattern = {"$regex": re.escape(search.strip()), "$options": "i"}
            query = {"$or": [{"topic": pattern}, {"location": pattern}]}
        documents = await self.store.lessons.find(query).to_list(length=None)
        return [LessonRead.model_validate(serialize_document(doc)) for doc in documents]

    async def get_lesson(self, lesson_id: str) -> LessonRead:
        oid = parse_object_id(lesson_id)
        document = await self.store.lessons.find_one({"_id": oid})
        if document is None:
            raise NotFoundError("Lesson not found", {"id": lesson_id})
        return LessonRead.model_validate(serialize_document(document))

    async def create_lesson(self, data: LessonCreate) -> LessonRead:
        document = data.model_dump(exclude_none=True)
        document["createdAt"] = datetime.now(timezone.utc)
        result = await self.store.lessons.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created lesson %s (%s, %s)", result.inserted_id, data.topic, data.location)
        return LessonRead.model_validate(serialize_document(document))

    async def update_lesson(self, lesson_id: str, updates: LessonUpdate) -> LessonRead:
        """Apply a partial update and return the updated lesson.

        Only fields present in the request are written.  Raises
        ``ValidationError`` when nothing would change and
        ``NotFoundError`` when the lesson does not exist.
        """
        oid = parse_object_id(lesson_id)
        fields = updates.model_dump(exclude_unset=True, exclude_none=True)
        if not fields:
            raise ValidationError("No fields to update")
        document = await self.store.lessons.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise NotFoundError("Lesson not found", {"id": lesson_id})
        logger.info("Updated lesson %s: %s", lesson_id, ", ".join(sorted(fields)))
        return LessonRead.model_validate(serialize_document(document))

    async def adjust_space(self, lesson_id: str, change: int) -> LessonRead:
        """Add ``change`` (which may be negative) to the lesson's space.

        The update runs as one aggregation pipeline on the server, so
        the new value is computed from the stored one and clamped at
        zero without a read‑modify‑write race.
        """
        oid = parse_object_id(lesson_id)
        document = await self.store.lessons.find_one_and_update(
            {"_id": oid},
            [
                {
                    "$set": {
                        "space": {
                            "$max": [0, {"$add": [{"$ifNull": ["$space", 0]}, change]}],
                        }
                    }
                }
            ],
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise NotFoundError("Lesson not found", {"id": lesson_id})
        logger.info("Adjusted space of lesson %s by %+d, now %s", lesson_id, change, document.get("space"))
        return LessonRead.model_validate(serialize_document(document))

"""
Business logic for orders.

Creating an order runs in three steps:

1. ``validate_order_request`` checks the raw request body and stops at
   the first problem (missing field, wrong type, non‑positive number of
   spaces, malformed lesson id).
2. All referenced lessons are fetched with a single query.  If any id
   does not resolve the whole order is rejected and nothing is written.
3. The total price is computed from the resolved lessons and the order
   is stored with status ``pending`` and a snapshot of the lessons.

Seat counts are not touched here.  Callers that want to reserve seats
use ``LessonService.adjust_space`` separately, which means two
concurrent orders may together exceed a lesson's capacity.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.db import INT64_MAX, DocumentStore, parse_object_id, serialize_document
from ..core.errors import NotFoundError, ValidationError
from ..schemas.order import OrderCreate, OrderRead, OrderStatus


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "phoneNumber", "lessonIDs", "numberOfSpaces")
OPTIONAL_TEXT_FIELDS = ("email", "notes")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def validate_order_request(payload: Optional[Mapping[str, Any]]) -> OrderCreate:
    """Validate a raw order body and return an ``OrderCreate``.

    Raises ``ValidationError`` describing the first failed check.
    ``lessonIds`` is accepted as a spelling of ``lessonIDs``.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("request body must be a JSON object")
    data: Dict[str, Any] = dict(payload)
    if "lessonIDs" not in data and "lessonIds" in data:
        data["lessonIDs"] = data.pop("lessonIds")

    for field in REQUIRED_FIELDS:
        if _is_missing(data.get(field)):
            raise ValidationError(f"missing required field: {field}", {"field": field})

    for field in ("name", "phoneNumber"):
        if not isinstance(data[field], str):
            raise ValidationError(f"{field} must be a string", {"field": field})

    lesson_ids = data["lessonIDs"]
    if not isinstance(lesson_ids, list):
        raise ValidationError("lessonIDs must be an array", {"field": "lessonIDs"})

    spaces = data["numberOfSpaces"]
    if (
        isinstance(spaces, bool)
        or not isinstance(spaces, (int, float))
        or spaces <= 0
        or (isinstance(spaces, float) and not spaces.is_integer())
    ):
        raise ValidationError("numberOfSpaces must be a positive integer", {"field": "numberOfSpaces"})
    if spaces > INT64_MAX:
        raise ValidationError("numberOfSpaces is too large", {"field": "numberOfSpaces"})

    for lesson_id in lesson_ids:
        parse_object_id(lesson_id)

    for field in OPTIONAL_TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field} must be a string", {"field": field})

    return OrderCreate(
        name=data["name"].strip(),
        phone_number=data["phoneNumber"].strip(),
        lesson_ids=list(lesson_ids),
        number_of_spaces=int(spaces),
        email=data.get("email") or None,
        notes=data.get("notes") or None,
    )


def compute_total_price(prices: Iterable[float], number_of_spaces: int) -> float:
    """Sum of the lesson prices multiplied by the number of spaces."""
    return round(sum(prices) * number_of_spaces, 2)


def _snapshot(lesson: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(lesson["_id"]),
        "topic": lesson.get("topic"),
        "price": lesson.get("price"),
        "location": lesson.get("location"),
    }


class OrderService:
    """Service for creating and reading orders."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def create_order(self, payload: Optional[Mapping[str, Any]]) -> OrderRead:
        order = validate_order_request(payload)
        requested = [parse_object_id(lesson_id) for lesson_id in order.lesson_ids]
        unique_ids = list(dict.fromkeys(requested))

        lessons = await self.store.lessons.find({"_id": {"$in": unique_ids}}).to_list(length=None)
        by_id = {lesson["_id"]: lesson for lesson in lessons}
        if len(by_id) != len(unique_ids):
            missing = [str(oid) for oid in unique_ids if oid not in by_id]
            logger.warning("Rejected order for %s: unknown lessons %s", order.name, ", ".join(missing))
            raise NotFoundError("one or more lesson IDs not found", {"missingLessonIDs": missing})

        details: List[Dict[str, Any]] = [_snapshot(by_id[oid]) for oid in requested]
        total_price = compute_total_price((item["price"] for item in details), order.number_of_spaces)

        document: Dict[str, Any] = {
            "name": order.name,
            "phoneNumber": order.phone_number,
            "lessonIDs": requested,
            "numberOfSpaces": order.number_of_spaces,
            "totalPrice": total_price,
            "orderDate": datetime.now(timezone.utc),
            "status": OrderStatus.PENDING.value,
            "lessonDetails": details,
        }
        if order.email:
            document["email"] = order.email
        if order.notes:
            document["notes"] = order.notes

        result = await self.store.orders.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(
            "Order %s saved: %s lesson(s) x %s space(s), total %.2f",
            result.inserted_id,
            len(requested),
            order.number_of_spaces,
            total_price,
        )
        return OrderRead.model_validate(serialize_document(document))

    async def list_orders(self) -> List[OrderRead]:
        """Return all orders, newest first."""
        documents = await self.store.orders.find({}, sort=[("orderDate", -1)]).to_list(length=None)
        return [OrderRead.model_validate(serialize_document(doc)) for doc in documents]

    async def get_order(self, order_id: str) -> OrderRead:
        oid = parse_object_id(order_id)
        document = await self.store.orders.find_one({"_id": oid})
        if document is None:
            raise NotFoundError("Order not found", {"id": order_id})
        return OrderRead.model_validate(serialize_document(document))

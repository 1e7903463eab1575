"""
Pydantic models for orders.

An order books ``numberOfSpaces`` seats on each of the lessons listed
in ``lessonIDs``.  ``OrderRead`` carries the derived ``totalPrice`` and
the ``lessonDetails`` snapshot captured when the order was created;
later changes to a lesson do not affect stored orders.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderCreate(BaseModel):
    """Validated order request.

    Instances are built by ``validate_order_request`` in the order
    service, which checks the raw body field by field first so that
    clients receive the first problem found rather than a list.
    """

    name: str = Field(..., min_length=1, examples=["John Smith"])
    phone_number: str = Field(..., alias="phoneNumber", min_length=1, examples=["+44 7700 900123"])
    lesson_ids: List[str] = Field(..., alias="lessonIDs", min_length=1)
    number_of_spaces: int = Field(..., alias="numberOfSpaces", gt=0, examples=[2])
    email: Optional[str] = Field(None, examples=["john.smith@email.com"])
    notes: Optional[str] = Field(None, examples=["Weekend sessions preferred"])

    model_config = {
        "populate_by_name": True,
    }


class LessonSnapshot(BaseModel):
    id: str
    topic: str
    price: float
    location: str


class OrderRead(BaseModel):
    id: str
    name: str
    phone_number: str = Field(..., alias="phoneNumber")
    lesson_ids: List[str] = Field(..., alias="lessonIDs")
    number_of_spaces: int = Field(..., alias="numberOfSpaces")
    total_price: float = Field(..., alias="totalPrice")
    order_date: datetime = Field(..., alias="orderDate")
    status: OrderStatus = OrderStatus.PENDING
    email: Optional[str] = None
    notes: Optional[str] = None
    lesson_details: List[LessonSnapshot] = Field(default_factory=list, alias="lessonDetails")

    model_config = {
        "populate_by_name": True,
    }

"""
Pydantic models for lesson data.

``LessonBase`` contains the shared fields; ``LessonCreate`` is used for
requests and ``LessonRead`` extends it with the document ``id`` for
responses.  Only ``topic``, ``price``, ``location`` and ``space`` are
required; the descriptive fields mirror the sample catalogue.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt

from ..core.db import INT64_MAX, INT64_MIN


class LessonBase(BaseModel):
    topic: str = Field(..., min_length=1, examples=["Mathematics"])
    price: float = Field(..., gt=0, examples=[25])
    location: str = Field(..., min_length=1, examples=["London"])
    space: int = Field(..., ge=0, le=INT64_MAX, examples=[10])
    instructor: Optional[str] = Field(None, examples=["Dr. Sarah Johnson"])
    duration: Optional[str] = Field(None, examples=["1 hour"])
    level: Optional[str] = Field(None, examples=["Intermediate"])
    description: Optional[str] = None
    image: Optional[str] = Field(None, examples=["/images/lessons/mathematics.svg"])


class LessonCreate(LessonBase):
    """Schema for creating a lesson."""
    pass


class LessonRead(LessonBase):
    """Schema for reading a lesson from the API."""

    id: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = {
        "populate_by_name": True,
    }


class LessonUpdate(BaseModel):
    """Schema for updating a lesson.

    All fields are optional; only provided fields will be updated.
    """
    topic: str | None = Field(None, min_length=1)
    price: float | None = Field(None, gt=0)
    location: str | None = Field(None, min_length=1)
    space: int | None = Field(None, ge=0, le=INT64_MAX)
    instructor: str | None = None
    duration: str | None = None
    level: str | None = None
    description: str | None = None
    image: str | None = None


class SpaceChange(BaseModel):
    """Signed change applied to a lesson's available space.

    Only JSON integers are accepted; numeric strings and floats are
    rejected rather than coerced.
    """

    change: StrictInt = Field(..., ge=INT64_MIN, le=INT64_MAX, examples=[-1])

"""
Lesson endpoints.

These routes list, search, create and update lessons and adjust the
number of available seats.  Errors raised by ``LessonService`` are
turned into JSON responses by the handlers in ``core.errors``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from lesson_hub_api.app.api.deps import get_lesson_service
from lesson_hub_api.app.schemas.lesson import LessonCreate, LessonRead, LessonUpdate, SpaceChange
from lesson_hub_api.app.services.lesson_service import LessonService


router = APIRouter()


@router.get("", response_model=List[LessonRead])
async def list_lessons(
    search: Optional[str] = Query(None, description="Case-insensitive match on topic or location"),
    service: LessonService = Depends(get_lesson_service),
) -> List[LessonRead]:
    """Return every lesson, optionally filtered by ``search``."""
    return await service.list_lessons(search)


@router.post("", response_model=LessonRead, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    lesson: LessonCreate,
    service: LessonService = Depends(get_lesson_service),
) -> LessonRead:
    """Create a new lesson.

    ``topic``, ``location``, ``price`` and ``space`` are required; the
    price must be positive and the space must not be negative.
    """
    return await service.create_lesson(lesson)


@router.get("/{lesson_id}", response_model=LessonRead)
async def get_lesson(
    lesson_id: str,
    service: LessonService = Depends(get_lesson_service),
) -> LessonRead:
    return await service.get_lesson(lesson_id)


@router.put("/{lesson_id}", response_model=LessonRead)
async def update_lesson(
    lesson_id: str,
    updates: LessonUpdate,
    service: LessonService = Depends(get_lesson_service),
) -> LessonRead:
    """Update an existing lesson.

    Partial updates are supported; any unspecified fields remain
    unchanged.
    """
    return await service.update_lesson(lesson_id, updates)


@router.put("/{lesson_id}/space", response_model=LessonRead)
@router.put("/{lesson_id}/availability", response_model=LessonRead, include_in_schema=False)
async def adjust_lesson_space(
    lesson_id: str,
    body: SpaceChange,
    service: LessonService = Depends(get_lesson_service),
) -> LessonRead:
    """Add ``change`` to the lesson's available space.

    Negative values release seats.  The result never drops below zero.
    The same handler answers on ``/availability`` for older clients.
    """
    return await service.adjust_space(lesson_id, body.change)

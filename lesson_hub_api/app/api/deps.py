"""
FastAPI dependencies building services around the application store.
"""

from fastapi import Depends

from lesson_hub_api.app.core.db import DocumentStore, get_store
from lesson_hub_api.app.services.lesson_service import LessonService
from lesson_hub_api.app.services.order_service import OrderService


def get_lesson_service(store: DocumentStore = Depends(get_store)) -> LessonService:
    return LessonService(store)


def get_order_service(store: DocumentStore = Depends(get_store)) -> OrderService:
    return OrderService(store)

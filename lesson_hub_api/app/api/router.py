"""
Top‑level router for the REST API.

This router aggregates domain‑specific routers (lessons, orders).
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import lessons, orders

router = APIRouter()

router.include_router(lessons.router, prefix="/lessons", tags=["lessons"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])

"""
Order endpoints.

The create route takes the raw JSON body and hands it to
``OrderService.create_order``, which validates it field by field and
reports the first problem as a 400 response.  Unknown lesson ids are
reported as 404 and nothing is stored in that case.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status

from lesson_hub_api.app.api.deps import get_order_service
from lesson_hub_api.app.schemas.order import OrderRead
from lesson_hub_api.app.services.order_service import OrderService


router = APIRouter()


@router.get("", response_model=List[OrderRead])
async def list_orders(service: OrderService = Depends(get_order_service)) -> List[OrderRead]:
    """Return all orders, newest first."""
    return await service.list_orders()


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: Optional[Dict[str, Any]] = Body(
        None,
        examples=[
            {
                "name": "John Smith",
                "phoneNumber": "+44 7700 900123",
                "lessonIDs": ["<lesson id>", "<lesson id>"],
                "numberOfSpaces": 2,
                "email": "john.smith@email.com",
                "notes": "Weekend sessions preferred",
            }
        ],
    ),
    service: OrderService = Depends(get_order_service),
) -> OrderRead:
    """Create an order for one or more lessons.

    The total price is the sum of the lesson prices multiplied by
    ``numberOfSpaces``.  The order starts in the ``pending`` state and
    keeps a snapshot of the booked lessons.
    """
    return await service.create_order(payload)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)) -> OrderRead:
    return await service.get_order(order_id)

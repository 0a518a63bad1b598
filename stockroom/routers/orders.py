# stockroom/routers/orders.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.database import get_db
from stockroom.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderPlacementResult,
    OrderResponse,
    OrderStatusUpdate,
)
from stockroom.services import orders as order_service

router = APIRouter(prefix="/orders", tags=["Orders"])


# =========================================================
# PLACE ORDER
#
# 409 when any line is short of stock (nothing written).
# 201 with success=false when the order went through but
# inventory could not be fully adjusted.
# =========================================================
@router.post("", response_model=OrderPlacementResult, status_code=status.HTTP_201_CREATED)
def place_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
):
    return order_service.place_order(db, order_data)


@router.get("", response_model=list[OrderResponse])
def list_orders(
    db: Session = Depends(get_db),
    limit: int = Query(settings.RECENT_ORDERS_LIMIT, ge=1, le=100),
):
    return order_service.get_recent_orders(db, limit=limit)


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
):
    order = order_service.get_order_details(db, order_id)

    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )

    return order


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    db: Session = Depends(get_db),
):
    return order_service.update_order_status(db, order_id, status_data.order_status)

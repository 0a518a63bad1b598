# stockroom/schemas/order.py

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from stockroom.models.orders import OrderStatus
from stockroom.schemas.inventory import StockDeduction


class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    customer_id: int
    shipping_address: str | None = None
    order_status: OrderStatus = OrderStatus.PENDING
    items: List[OrderItemCreate]


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus


class OrderResponse(BaseModel):
    order_id: int
    customer_id: int
    order_date: datetime
    total_amount: Decimal
    shipping_address: str | None
    order_status: OrderStatus
    customer_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemResponse(BaseModel):
    order_item_id: int
    order_id: int
    product_id: int
    quantity_ordered: int
    item_price: Decimal
    total_price: Decimal
    product_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderDetailResponse(OrderResponse):
    items: List[OrderItemResponse]


class OrderPlacementResult(BaseModel):
    order_id: int
    total_amount: Decimal
    items: List[OrderItemResponse]
    success: bool
    message: str
    shortfalls: List[StockDeduction] = []

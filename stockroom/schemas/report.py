# stockroom/schemas/report.py

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel

from stockroom.schemas.order import OrderResponse


class LowStockItem(BaseModel):
    record_id: int
    product_id: int
    product_name: str
    category: str | None
    price: Decimal
    supplier_id: int | None
    supplier_name: str | None
    warehouse_name: str
    quantity_in_stock: int
    expiry_date: date | None


class ExpiringItem(BaseModel):
    record_id: int
    product_id: int
    product_name: str
    category: str | None
    warehouse_name: str
    quantity_in_stock: int
    expiry_date: date
    days_remaining: int


class PerishableProduct(BaseModel):
    product_id: int
    product_name: str
    category: str | None
    supplier_name: str | None
    total_stock: int


class RecentlyUpdatedItem(BaseModel):
    record_id: int
    product_id: int
    product_name: str
    supplier_name: str | None
    quantity_in_stock: int
    last_updated: datetime


class AlertItem(BaseModel):
    type: Literal["low-stock", "expiring"]
    product_id: int
    product_name: str
    quantity: int | None = None
    expiry_date: date | None = None
    days_remaining: int | None = None


class InventoryStats(BaseModel):
    total_products: int
    total_stock: int
    average_stock: int
    total_value: Decimal


class DashboardSummary(BaseModel):
    total_products: int
    total_stock: int
    total_value: Decimal
    low_stock_count: int
    expiring_count: int
    recent_orders: List[OrderResponse]

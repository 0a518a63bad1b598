# stockroom/schemas/inventory.py

from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class InventoryRecordCreate(BaseModel):
    product_id: int
    warehouse_id: int
    quantity_in_stock: int = Field(..., ge=0)
    expiry_date: date | None = None
    supplier_id: int | None = None


class InventoryRecordUpdate(BaseModel):
    product_id: int | None = None
    warehouse_id: int | None = None
    quantity_in_stock: int | None = Field(None, ge=0)
    expiry_date: date | None = None
    supplier_id: int | None = None


class InventoryRecordResponse(BaseModel):
    record_id: int
    product_id: int
    warehouse_id: int
    quantity_in_stock: int
    last_updated: datetime
    expiry_date: date | None
    supplier_id: int | None

    model_config = ConfigDict(from_attributes=True)


class InventoryRecordView(InventoryRecordResponse):
    product_name: str
    category: str | None
    price: Decimal
    warehouse_name: str


# =========================================================
# STOCK CHECK / DEDUCTION RESULTS
# =========================================================
class StockAvailability(BaseModel):
    product_id: int
    product_name: str
    requested: int
    available: int
    is_available: bool
    message: str


class RecordAdjustment(BaseModel):
    record_id: int
    warehouse_id: int
    before: int
    after: int


class StockDeduction(BaseModel):
    product_id: int
    requested: int
    deducted: int
    shortfall: int
    adjustments: List[RecordAdjustment]

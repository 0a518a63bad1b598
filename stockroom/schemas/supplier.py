# stockroom/schemas/supplier.py

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SupplierCreate(BaseModel):
    supplier_name: str = Field(..., min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    contact_phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    locality: str | None = None
    country: str | None = None


class SupplierUpdate(BaseModel):
    supplier_name: str | None = Field(None, min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    contact_phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    locality: str | None = None
    country: str | None = None


class SupplierResponse(SupplierCreate):
    supplier_id: int

    model_config = ConfigDict(from_attributes=True)


class SupplierProductCount(BaseModel):
    supplier_id: int
    supplier_name: str
    product_count: int


class QuantityBreakdown(BaseModel):
    name: str
    quantity: int


class SupplierInventorySummary(BaseModel):
    supplier_id: int
    total_products: int
    total_stock: int
    total_value: Decimal
    warehouses: List[QuantityBreakdown]
    categories: List[QuantityBreakdown]


class SupplierDeletion(BaseModel):
    supplier_id: int
    supplier_name: str
    products_detached: int
    records_detached: int

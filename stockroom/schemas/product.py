# stockroom/schemas/product.py

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    product_name: str = Field(..., min_length=1)
    description: str | None = None

    price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        description="Unit price must be positive and below 100 million",
    )

    category: str | None = None
    supplier_id: int | None = None


class ProductUpdate(BaseModel):
    product_name: str | None = Field(None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(None, gt=0, lt=100_000_000)
    category: str | None = None
    supplier_id: int | None = None


class ProductResponse(BaseModel):
    product_id: int
    product_name: str
    description: str | None
    price: Decimal
    category: str | None
    supplier_id: int | None

    model_config = ConfigDict(from_attributes=True)


class ProductWithStock(ProductResponse):
    supplier_name: str | None = None
    total_stock: int = 0

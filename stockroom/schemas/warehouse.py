# stockroom/schemas/warehouse.py

from pydantic import BaseModel, ConfigDict, Field


class WarehouseCreate(BaseModel):
    warehouse_name: str = Field(..., min_length=1)
    location: str | None = None
    contact_number: str | None = None


class WarehouseUpdate(BaseModel):
    warehouse_name: str | None = Field(None, min_length=1)
    location: str | None = None
    contact_number: str | None = None


class WarehouseResponse(WarehouseCreate):
    warehouse_id: int

    model_config = ConfigDict(from_attributes=True)

# stockroom/schemas/customer.py

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class CustomerCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    shipping_address: str | None = None
    date_of_birth: date | None = None


class CustomerUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1)
    last_name: str | None = Field(None, min_length=1)
    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    shipping_address: str | None = None
    date_of_birth: date | None = None


class CustomerResponse(BaseModel):
    customer_id: int
    first_name: str
    last_name: str
    name: str | None
    phone_number: str | None
    email: str | None
    shipping_address: str | None
    date_of_birth: date | None

    model_config = ConfigDict(from_attributes=True)

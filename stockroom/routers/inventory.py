# stockroom/routers/inventory.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.schemas.inventory import (
    InventoryRecordCreate,
    InventoryRecordResponse,
    InventoryRecordUpdate,
    StockAvailability,
)
from stockroom.services import inventory as inventory_service

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
)


# =========================================================
# RESTOCK
# =========================================================
@router.post(
    "",
    response_model=InventoryRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
def restock(
    record_data: InventoryRecordCreate,
    db: Session = Depends(get_db),
):
    return inventory_service.add_inventory_record(db, record_data)


@router.get("/availability", response_model=StockAvailability)
def check_availability(
    product_id: int = Query(...),
    quantity: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    return inventory_service.check_stock_availability(db, product_id, quantity)


@router.get("/{record_id}", response_model=InventoryRecordResponse)
def get_record(
    record_id: int,
    db: Session = Depends(get_db),
):
    record = inventory_service.get_inventory_record(db, record_id)

    if not record:
        raise HTTPException(status_code=404, detail="Inventory record not found")

    return record


@router.put("/{record_id}", response_model=InventoryRecordResponse)
def update_record(
    record_id: int,
    record_data: InventoryRecordUpdate,
    db: Session = Depends(get_db),
):
    return inventory_service.update_inventory_record(db, record_id, record_data)

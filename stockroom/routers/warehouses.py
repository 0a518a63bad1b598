# stockroom/routers/warehouses.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.schemas.inventory import InventoryRecordView
from stockroom.schemas.warehouse import WarehouseCreate, WarehouseResponse, WarehouseUpdate
from stockroom.services import inventory as inventory_service
from stockroom.services import warehouses as warehouse_service

router = APIRouter(
    prefix="/warehouses",
    tags=["Warehouses"],
)


@router.post(
    "",
    response_model=WarehouseResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_warehouse(
    warehouse_data: WarehouseCreate,
    db: Session = Depends(get_db),
):
    return warehouse_service.add_warehouse(db, warehouse_data)


@router.get("", response_model=list[WarehouseResponse])
def list_warehouses(db: Session = Depends(get_db)):
    return warehouse_service.get_warehouses(db)


@router.get("/{warehouse_id}", response_model=WarehouseResponse)
def get_warehouse(
    warehouse_id: int,
    db: Session = Depends(get_db),
):
    warehouse = warehouse_service.get_warehouse(db, warehouse_id)

    if not warehouse:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Warehouse not found",
        )

    return warehouse


@router.get("/{warehouse_id}/inventory", response_model=list[InventoryRecordView])
def get_warehouse_inventory(
    warehouse_id: int,
    db: Session = Depends(get_db),
):
    if not warehouse_service.get_warehouse(db, warehouse_id):
        raise HTTPException(status_code=404, detail="Warehouse not found")

    return inventory_service.get_inventory_by_warehouse(db, warehouse_id)


@router.put("/{warehouse_id}", response_model=WarehouseResponse)
def update_warehouse(
    warehouse_id: int,
    warehouse_data: WarehouseUpdate,
    db: Session = Depends(get_db),
):
    return warehouse_service.update_warehouse(db, warehouse_id, warehouse_data)

# stockroom/routers/suppliers.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.schemas.inventory import InventoryRecordView
from stockroom.schemas.product import ProductWithStock
from stockroom.schemas.supplier import (
    SupplierCreate,
    SupplierDeletion,
    SupplierInventorySummary,
    SupplierProductCount,
    SupplierResponse,
    SupplierUpdate,
)
from stockroom.services import inventory as inventory_service
from stockroom.services import products as product_service
from stockroom.services import reports as report_service
from stockroom.services import suppliers as supplier_service

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
)


def _require_supplier(db: Session, supplier_id: int):
    supplier = supplier_service.get_supplier(db, supplier_id)

    if not supplier:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Supplier not found",
        )

    return supplier


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_supplier(
    supplier_data: SupplierCreate,
    db: Session = Depends(get_db),
):
    return supplier_service.add_supplier(db, supplier_data)


@router.get("", response_model=list[SupplierResponse])
def list_suppliers(db: Session = Depends(get_db)):
    return supplier_service.get_suppliers(db)


# Declared before /{supplier_id} so the literal path wins
@router.get("/product-counts", response_model=list[SupplierProductCount])
def supplier_product_counts(db: Session = Depends(get_db)):
    return report_service.get_suppliers_product_count(db)


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
):
    return _require_supplier(db, supplier_id)


@router.get("/{supplier_id}/products", response_model=list[ProductWithStock])
def get_supplier_products(
    supplier_id: int,
    db: Session = Depends(get_db),
):
    _require_supplier(db, supplier_id)
    return product_service.get_products_by_supplier(db, supplier_id)


@router.get("/{supplier_id}/inventory", response_model=list[InventoryRecordView])
def get_supplier_inventory(
    supplier_id: int,
    db: Session = Depends(get_db),
):
    _require_supplier(db, supplier_id)
    return inventory_service.get_inventory_by_supplier(db, supplier_id)


@router.get("/{supplier_id}/summary", response_model=SupplierInventorySummary)
def get_supplier_summary(
    supplier_id: int,
    db: Session = Depends(get_db),
):
    return report_service.get_supplier_inventory_summary(db, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    supplier_data: SupplierUpdate,
    db: Session = Depends(get_db),
):
    return supplier_service.update_supplier(db, supplier_id, supplier_data)


@router.delete("/{supplier_id}", response_model=SupplierDeletion)
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
):
    return supplier_service.delete_supplier(db, supplier_id)

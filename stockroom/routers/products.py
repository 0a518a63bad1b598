# stockroom/routers/products.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from stockroom.database import get_db
from stockroom.schemas.inventory import InventoryRecordView
from stockroom.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ProductWithStock,
)
from stockroom.services import inventory as inventory_service
from stockroom.services import products as product_service

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
):
    return product_service.add_product(db, product_data)


@router.get("", response_model=list[ProductWithStock])
def list_products(
    db: Session = Depends(get_db),
    category: str | None = Query(None),
):
    return product_service.get_products(db, category=category)


@router.get("/{product_id}", response_model=ProductWithStock)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
):
    product = product_service.get_product_details(db, product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return product


@router.get("/{product_id}/inventory", response_model=list[InventoryRecordView])
def get_product_inventory(
    product_id: int,
    db: Session = Depends(get_db),
):
    if not product_service.get_product(db, product_id):
        raise HTTPException(status_code=404, detail="Product not found")

    return inventory_service.get_inventory_by_product(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
):
    return product_service.update_product(db, product_id, product_data)

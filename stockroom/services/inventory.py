# stockroom/services/inventory.py

import logging

from sqlalchemy.orm import Session

from stockroom.core.errors import InvalidInputError
from stockroom.models.inventory import InventoryRecord
from stockroom.models.products import Product
from stockroom.models.suppliers import Supplier
from stockroom.models.warehouses import Warehouse
from stockroom.schemas.inventory import (
    InventoryRecordCreate,
    InventoryRecordResponse,
    InventoryRecordUpdate,
    InventoryRecordView,
    RecordAdjustment,
    StockAvailability,
    StockDeduction,
)
from stockroom.services.common import apply_updates, commit, require_row
from stockroom.services.products import get_product_stock

logger = logging.getLogger(__name__)


# =========================================================
# READS
# =========================================================
def _record_views(db: Session):
    return (
        db.query(
            InventoryRecord,
            Product.product_name,
            Product.category,
            Product.price,
            Warehouse.warehouse_name,
        )
        .join(Product, InventoryRecord.product_id == Product.product_id)
        .join(Warehouse, InventoryRecord.warehouse_id == Warehouse.warehouse_id)
    )


def _to_view(row) -> InventoryRecordView:
    record, product_name, category, price, warehouse_name = row

    return InventoryRecordView(
        **InventoryRecordResponse.model_validate(record).model_dump(),
        product_name=product_name,
        category=category,
        price=price,
        warehouse_name=warehouse_name,
    )


def get_inventory_by_warehouse(db: Session, warehouse_id: int) -> list[InventoryRecordView]:
    rows = (
        _record_views(db)
        .filter(InventoryRecord.warehouse_id == warehouse_id)
        .order_by(InventoryRecord.record_id)
        .all()
    )
    return [_to_view(row) for row in rows]


def get_inventory_by_product(db: Session, product_id: int) -> list[InventoryRecordView]:
    rows = (
        _record_views(db)
        .filter(InventoryRecord.product_id == product_id)
        .order_by(InventoryRecord.record_id)
        .all()
    )
    return [_to_view(row) for row in rows]


def get_inventory_by_supplier(db: Session, supplier_id: int) -> list[InventoryRecordView]:
    rows = (
        _record_views(db)
        .filter(InventoryRecord.supplier_id == supplier_id)
        .order_by(InventoryRecord.record_id)
        .all()
    )
    return [_to_view(row) for row in rows]


def get_inventory_record(db: Session, record_id: int) -> InventoryRecord | None:
    return db.get(InventoryRecord, record_id)


# =========================================================
# RESTOCK / EDIT
# =========================================================
def add_inventory_record(db: Session, record_data: InventoryRecordCreate) -> InventoryRecord:
    """Stock a product in a warehouse. The supplier defaults to the product's own."""
    product = require_row(db, Product, record_data.product_id, "Product")
    require_row(db, Warehouse, record_data.warehouse_id, "Warehouse")

    supplier_id = record_data.supplier_id
    if supplier_id is None:
        supplier_id = product.supplier_id
    else:
        require_row(db, Supplier, supplier_id, "Supplier")

    if record_data.quantity_in_stock < 0:
        raise InvalidInputError("Quantity cannot be negative")

    record = InventoryRecord(
        product_id=product.product_id,
        warehouse_id=record_data.warehouse_id,
        quantity_in_stock=record_data.quantity_in_stock,
        expiry_date=record_data.expiry_date,
        supplier_id=supplier_id,
    )

    db.add(record)
    commit(db, record)

    logger.info(
        f"Restocked {product.product_name}: {record.quantity_in_stock} units "
        f"into warehouse #{record.warehouse_id} (record #{record.record_id})"
    )
    return record


def update_inventory_record(
    db: Session,
    record_id: int,
    record_data: InventoryRecordUpdate,
) -> InventoryRecord:
    record = require_row(db, InventoryRecord, record_id, "Inventory record")
    updates = record_data.model_dump(exclude_unset=True)

    if updates.get("product_id") is not None:
        require_row(db, Product, updates["product_id"], "Product")

    if updates.get("warehouse_id") is not None:
        require_row(db, Warehouse, updates["warehouse_id"], "Warehouse")

    if updates.get("supplier_id") is not None:
        require_row(db, Supplier, updates["supplier_id"], "Supplier")

    if updates.get("quantity_in_stock") is not None and updates["quantity_in_stock"] < 0:
        raise InvalidInputError("Quantity cannot be negative")

    apply_updates(
        record,
        updates,
        required=("product_id", "warehouse_id", "quantity_in_stock"),
    )
    commit(db, record)

    return record


# =========================================================
# AVAILABILITY CHECK
# =========================================================
def check_stock_availability(db: Session, product_id: int, quantity: int) -> StockAvailability:
    """
    Compare a requested quantity against the product's stock summed over every
    warehouse record. Never writes.
    """
    if quantity is None or quantity <= 0:
        raise InvalidInputError("Item quantity must be greater than zero")

    product = require_row(db, Product, product_id, "Product")
    available = get_product_stock(db, product_id)

    if available >= quantity:
        return StockAvailability(
            product_id=product_id,
            product_name=product.product_name,
            requested=quantity,
            available=available,
            is_available=True,
            message=f"{quantity} units of {product.product_name} available ({available} in stock)",
        )

    return StockAvailability(
        product_id=product_id,
        product_name=product.product_name,
        requested=quantity,
        available=available,
        is_available=False,
        message=(
            f"Insufficient stock for {product.product_name}: "
            f"{available} available, {quantity} requested"
        ),
    )


# =========================================================
# MULTI-RECORD DEDUCTION
# =========================================================
def deduct_stock(db: Session, product_id: int, quantity: int) -> StockDeduction:
    """
    Take ``quantity`` units of a product out of its inventory records.

    Records are drained earliest expiry first (undated records last, then by
    record id). Each record gives at most what it holds, so no quantity goes
    below zero. If the records hold less than requested, the remainder is
    reported as ``shortfall`` instead of raising.

    Changes are flushed but not committed; the caller owns the transaction.
    """
    if quantity is None or quantity <= 0:
        raise InvalidInputError("Deduction quantity must be greater than zero")

    records = (
        db.query(InventoryRecord)
        .filter(
            InventoryRecord.product_id == product_id,
            InventoryRecord.quantity_in_stock > 0,
        )
        .order_by(
            InventoryRecord.expiry_date.is_(None),
            InventoryRecord.expiry_date,
            InventoryRecord.record_id,
        )
        .all()
    )

    remaining = quantity
    adjustments = []

    for record in records:
        if remaining <= 0:
            break

        before = record.quantity_in_stock
        taken = min(remaining, before)

        record.quantity_in_stock = before - taken
        remaining -= taken

        adjustments.append(
            RecordAdjustment(
                record_id=record.record_id,
                warehouse_id=record.warehouse_id,
                before=before,
                after=record.quantity_in_stock,
            )
        )

    db.flush()

    deduction = StockDeduction(
        product_id=product_id,
        requested=quantity,
        deducted=quantity - remaining,
        shortfall=remaining,
        adjustments=adjustments,
    )

    if deduction.shortfall:
        logger.warning(
            f"Deducted {deduction.deducted} of {quantity} units for product #{product_id}; "
            f"{deduction.shortfall} units short"
        )
    else:
        logger.info(
            f"Deducted {quantity} units for product #{product_id} "
            f"across {len(adjustments)} inventory records"
        )

    return deduction

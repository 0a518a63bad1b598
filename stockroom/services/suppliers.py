# stockroom/services/suppliers.py

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.models.inventory import InventoryRecord
from stockroom.models.products import Product
from stockroom.models.suppliers import Supplier
from stockroom.schemas.supplier import SupplierCreate, SupplierDeletion, SupplierUpdate
from stockroom.services.common import apply_updates, commit, require_row

logger = logging.getLogger(__name__)


def get_suppliers(db: Session) -> list[Supplier]:
    return db.query(Supplier).order_by(Supplier.supplier_id).all()


def get_supplier(db: Session, supplier_id: int) -> Supplier | None:
    return db.get(Supplier, supplier_id)


def add_supplier(db: Session, supplier_data: SupplierCreate) -> Supplier:
    supplier = Supplier(**supplier_data.model_dump())

    db.add(supplier)
    commit(db, supplier)

    logger.info(f"Added supplier #{supplier.supplier_id} {supplier.supplier_name}")
    return supplier


def update_supplier(db: Session, supplier_id: int, supplier_data: SupplierUpdate) -> Supplier:
    supplier = require_row(db, Supplier, supplier_id, "Supplier")

    apply_updates(
        supplier,
        supplier_data.model_dump(exclude_unset=True),
        required=("supplier_name",),
    )
    commit(db, supplier)

    logger.info(f"Updated supplier #{supplier.supplier_id}")
    return supplier


# =========================================================
# DELETE (DETACH DEPENDENTS, THEN DROP THE SUPPLIER)
# =========================================================
def delete_supplier(db: Session, supplier_id: int) -> SupplierDeletion:
    """
    Delete a supplier without deleting anything that referenced it.

    Products and inventory records pointing at the supplier keep existing with
    their supplier_id cleared. The references are cleared before the supplier
    row is removed, all in one transaction, so foreign keys never dangle.
    """
    supplier = require_row(db, Supplier, supplier_id, "Supplier")
    supplier_name = supplier.supplier_name

    try:
        product_ids = [
            product_id
            for (product_id,) in db.query(Product.product_id)
            .filter(Product.supplier_id == supplier_id)
            .all()
        ]

        products_detached = (
            db.query(Product)
            .filter(Product.product_id.in_(product_ids))
            .update({Product.supplier_id: None}, synchronize_session="fetch")
        )

        records_detached = (
            db.query(InventoryRecord)
            .filter(InventoryRecord.supplier_id == supplier_id)
            .update({InventoryRecord.supplier_id: None}, synchronize_session="fetch")
        )

        db.flush()

        db.delete(supplier)
        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        f"Deleted supplier #{supplier_id} {supplier_name} "
        f"(detached {products_detached} products, {records_detached} inventory records)"
    )

    return SupplierDeletion(
        supplier_id=supplier_id,
        supplier_name=supplier_name,
        products_detached=products_detached,
        records_detached=records_detached,
    )

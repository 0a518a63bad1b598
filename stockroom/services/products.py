# stockroom/services/products.py

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stockroom.models.inventory import InventoryRecord
from stockroom.models.products import Product
from stockroom.models.suppliers import Supplier
from stockroom.schemas.product import ProductCreate, ProductUpdate, ProductWithStock
from stockroom.services.common import apply_updates, commit, require_row

logger = logging.getLogger(__name__)


def _total_stock_column():
    return (
        select(func.coalesce(func.sum(InventoryRecord.quantity_in_stock), 0))
        .where(InventoryRecord.product_id == Product.product_id)
        .correlate(Product)
        .scalar_subquery()
        .label("total_stock")
    )


def _products_with_stock(db: Session):
    return (
        db.query(Product, Supplier.supplier_name, _total_stock_column())
        .outerjoin(Supplier, Product.supplier_id == Supplier.supplier_id)
    )


def _to_product_with_stock(row) -> ProductWithStock:
    product, supplier_name, total_stock = row

    return ProductWithStock.model_validate(product).model_copy(
        update={
            "supplier_name": supplier_name,
            "total_stock": int(total_stock or 0),
        }
    )


# =========================================================
# READS
# =========================================================
def get_products(db: Session, category: str | None = None) -> list[ProductWithStock]:
    query = _products_with_stock(db)

    if category:
        query = query.filter(Product.category == category)

    rows = query.order_by(Product.product_id).all()
    return [_to_product_with_stock(row) for row in rows]


def get_product(db: Session, product_id: int) -> Product | None:
    return db.get(Product, product_id)


def get_product_details(db: Session, product_id: int) -> ProductWithStock | None:
    row = _products_with_stock(db).filter(Product.product_id == product_id).first()

    if row is None:
        return None

    details = _to_product_with_stock(row)
    logger.info(f"Retrieved details for product: {details.product_name}")
    return details


def get_products_by_supplier(db: Session, supplier_id: int) -> list[ProductWithStock]:
    rows = (
        _products_with_stock(db)
        .filter(Product.supplier_id == supplier_id)
        .order_by(Product.product_id)
        .all()
    )

    logger.info(f"Found {len(rows)} products from supplier ID {supplier_id}")
    return [_to_product_with_stock(row) for row in rows]


def get_product_stock(db: Session, product_id: int) -> int:
    """Total units of a product across every warehouse record."""
    total = (
        db.query(func.coalesce(func.sum(InventoryRecord.quantity_in_stock), 0))
        .filter(InventoryRecord.product_id == product_id)
        .scalar()
    )
    return int(total or 0)


# =========================================================
# WRITES
# =========================================================
def add_product(db: Session, product_data: ProductCreate) -> Product:
    if product_data.supplier_id is not None:
        require_row(db, Supplier, product_data.supplier_id, "Supplier")

    product = Product(**product_data.model_dump())

    db.add(product)
    commit(db, product)

    logger.info(f"Added product #{product.product_id} {product.product_name}")
    return product


def update_product(db: Session, product_id: int, product_data: ProductUpdate) -> Product:
    product = require_row(db, Product, product_id, "Product")
    updates = product_data.model_dump(exclude_unset=True)

    if updates.get("supplier_id") is not None:
        require_row(db, Supplier, updates["supplier_id"], "Supplier")

    apply_updates(product, updates, required=("product_name", "price"))
    commit(db, product)

    logger.info(f"Updated product #{product.product_id}")
    return product

# stockroom/services/reports.py
#
# Read-only figures for the dashboard, alerts and supplier pages.

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.models.inventory import InventoryRecord
from stockroom.models.products import Product
from stockroom.models.suppliers import Supplier
from stockroom.models.warehouses import Warehouse
from stockroom.schemas.report import (
    AlertItem,
    DashboardSummary,
    ExpiringItem,
    InventoryStats,
    LowStockItem,
    PerishableProduct,
    RecentlyUpdatedItem,
)
from stockroom.schemas.supplier import (
    QuantityBreakdown,
    SupplierInventorySummary,
    SupplierProductCount,
)
from stockroom.services.common import require_row
from stockroom.services.inventory import get_inventory_by_supplier
from stockroom.services.orders import get_recent_orders

logger = logging.getLogger(__name__)


# =========================================================
# GENERAL INVENTORY FIGURES
# =========================================================
def get_total_stock(db: Session) -> int:
    total = (
        db.query(func.coalesce(func.sum(InventoryRecord.quantity_in_stock), 0))
        .scalar()
    )

    logger.info(f"Total stock: {total} units")
    return int(total or 0)


def get_total_product_count(db: Session) -> int:
    return db.query(func.count(Product.product_id)).scalar() or 0


def get_average_stock_level(db: Session) -> int:
    average = db.query(func.avg(InventoryRecord.quantity_in_stock)).scalar()
    return round(average or 0)


def get_total_inventory_value(db: Session) -> Decimal:
    value = (
        db.query(func.coalesce(func.sum(Product.price * InventoryRecord.quantity_in_stock), 0))
        .select_from(InventoryRecord)
        .join(Product, InventoryRecord.product_id == Product.product_id)
        .scalar()
    )

    value = Decimal(str(value or 0)).quantize(Decimal("0.01"))
    logger.info(f"Total inventory value: {value}")
    return value


def get_inventory_stats(db: Session) -> InventoryStats:
    return InventoryStats(
        total_products=get_total_product_count(db),
        total_stock=get_total_stock(db),
        average_stock=get_average_stock_level(db),
        total_value=get_total_inventory_value(db),
    )


# =========================================================
# LOW STOCK / EXPIRING / PERISHABLE
# =========================================================
def get_low_stock_products(db: Session, threshold: int | None = None) -> list[LowStockItem]:
    """One row per inventory record holding fewer than ``threshold`` units."""
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    rows = (
        db.query(InventoryRecord, Product, Supplier.supplier_name, Warehouse.warehouse_name)
        .join(Product, InventoryRecord.product_id == Product.product_id)
        .join(Warehouse, InventoryRecord.warehouse_id == Warehouse.warehouse_id)
        .outerjoin(Supplier, Product.supplier_id == Supplier.supplier_id)
        .filter(InventoryRecord.quantity_in_stock < threshold)
        .order_by(InventoryRecord.quantity_in_stock, InventoryRecord.record_id)
        .all()
    )

    return [
        LowStockItem(
            record_id=record.record_id,
            product_id=product.product_id,
            product_name=product.product_name,
            category=product.category,
            price=product.price,
            supplier_id=product.supplier_id,
            supplier_name=supplier_name,
            warehouse_name=warehouse_name,
            quantity_in_stock=record.quantity_in_stock,
            expiry_date=record.expiry_date,
        )
        for record, product, supplier_name, warehouse_name in rows
    ]


def get_expiring_products(
    db: Session,
    days: int | None = None,
    today: date | None = None,
) -> list[ExpiringItem]:
    """Records expiring between today and ``days`` from now, soonest first."""
    if days is None:
        days = settings.EXPIRY_ALERT_DAYS
    if today is None:
        today = date.today()

    cutoff = today + timedelta(days=days)

    rows = (
        db.query(InventoryRecord, Product, Warehouse.warehouse_name)
        .join(Product, InventoryRecord.product_id == Product.product_id)
        .join(Warehouse, InventoryRecord.warehouse_id == Warehouse.warehouse_id)
        .filter(
            InventoryRecord.expiry_date.isnot(None),
            InventoryRecord.expiry_date >= today,
            InventoryRecord.expiry_date <= cutoff,
        )
        .order_by(InventoryRecord.expiry_date, InventoryRecord.record_id)
        .all()
    )

    return [
        ExpiringItem(
            record_id=record.record_id,
            product_id=product.product_id,
            product_name=product.product_name,
            category=product.category,
            warehouse_name=warehouse_name,
            quantity_in_stock=record.quantity_in_stock,
            expiry_date=record.expiry_date,
            days_remaining=(record.expiry_date - today).days,
        )
        for record, product, warehouse_name in rows
    ]


def get_perishable_products(db: Session) -> list[PerishableProduct]:
    rows = (
        db.query(
            Product,
            Supplier.supplier_name,
            func.sum(InventoryRecord.quantity_in_stock).label("total_stock"),
        )
        .join(InventoryRecord, InventoryRecord.product_id == Product.product_id)
        .outerjoin(Supplier, Product.supplier_id == Supplier.supplier_id)
        .filter(InventoryRecord.expiry_date.isnot(None))
        .group_by(Product.product_id, Supplier.supplier_name)
        .order_by(Product.product_id)
        .all()
    )

    logger.info(f"Found {len(rows)} perishable products")

    return [
        PerishableProduct(
            product_id=product.product_id,
            product_name=product.product_name,
            category=product.category,
            supplier_name=supplier_name,
            total_stock=int(total_stock or 0),
        )
        for product, supplier_name, total_stock in rows
    ]


def get_recently_updated_products(db: Session, hours: int | None = None) -> list[RecentlyUpdatedItem]:
    if hours is None:
        hours = settings.RECENTLY_UPDATED_HOURS

    # last_updated is written by SQLite's CURRENT_TIMESTAMP, which is naive UTC
    since = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(hours=hours)

    rows = (
        db.query(InventoryRecord, Product.product_name, Supplier.supplier_name)
        .join(Product, InventoryRecord.product_id == Product.product_id)
        .outerjoin(Supplier, Product.supplier_id == Supplier.supplier_id)
        .filter(InventoryRecord.last_updated > since)
        .order_by(InventoryRecord.last_updated.desc(), InventoryRecord.record_id)
        .all()
    )

    return [
        RecentlyUpdatedItem(
            record_id=record.record_id,
            product_id=record.product_id,
            product_name=product_name,
            supplier_name=supplier_name,
            quantity_in_stock=record.quantity_in_stock,
            last_updated=record.last_updated,
        )
        for record, product_name, supplier_name in rows
    ]


# =========================================================
# SUPPLIERS
# =========================================================
def get_suppliers_product_count(db: Session) -> list[SupplierProductCount]:
    rows = (
        db.query(
            Supplier.supplier_id,
            Supplier.supplier_name,
            func.count(Product.product_id).label("product_count"),
        )
        .outerjoin(Product, Product.supplier_id == Supplier.supplier_id)
        .group_by(Supplier.supplier_id, Supplier.supplier_name)
        .order_by(Supplier.supplier_id)
        .all()
    )

    return [
        SupplierProductCount(
            supplier_id=row.supplier_id,
            supplier_name=row.supplier_name,
            product_count=row.product_count,
        )
        for row in rows
    ]


def get_supplier_inventory_summary(db: Session, supplier_id: int) -> SupplierInventorySummary:
    require_row(db, Supplier, supplier_id, "Supplier")

    records = get_inventory_by_supplier(db, supplier_id)

    product_ids = set()
    total_stock = 0
    total_value = Decimal("0.00")
    by_warehouse = defaultdict(int)
    by_category = defaultdict(int)

    for record in records:
        product_ids.add(record.product_id)
        total_stock += record.quantity_in_stock
        total_value += record.price * record.quantity_in_stock
        by_warehouse[record.warehouse_name] += record.quantity_in_stock

        if record.category:
            by_category[record.category] += record.quantity_in_stock

    summary = SupplierInventorySummary(
        supplier_id=supplier_id,
        total_products=len(product_ids),
        total_stock=total_stock,
        total_value=total_value.quantize(Decimal("0.01")),
        warehouses=[QuantityBreakdown(name=k, quantity=v) for k, v in by_warehouse.items()],
        categories=[QuantityBreakdown(name=k, quantity=v) for k, v in by_category.items()],
    )

    logger.info(
        f"Supplier ID {supplier_id} has {summary.total_products} products "
        f"with {summary.total_stock} total units worth {summary.total_value}"
    )
    return summary


# =========================================================
# ALERTS / DASHBOARD
# =========================================================
def get_alerts(
    db: Session,
    low_stock_threshold: int | None = None,
    expiry_days: int | None = None,
    include_low_stock: bool | None = None,
    include_expiring: bool | None = None,
) -> list[AlertItem]:
    if include_low_stock is None:
        include_low_stock = settings.LOW_STOCK_ALERTS
    if include_expiring is None:
        include_expiring = settings.EXPIRY_ALERTS

    alerts = []

    if include_low_stock:
        for item in get_low_stock_products(db, low_stock_threshold):
            alerts.append(
                AlertItem(
                    type="low-stock",
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity_in_stock,
                    expiry_date=item.expiry_date,
                )
            )

    if include_expiring:
        for item in get_expiring_products(db, expiry_days):
            alerts.append(
                AlertItem(
                    type="expiring",
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity_in_stock,
                    expiry_date=item.expiry_date,
                    days_remaining=item.days_remaining,
                )
            )

    return alerts


def get_dashboard_summary(db: Session) -> DashboardSummary:
    return DashboardSummary(
        total_products=get_total_product_count(db),
        total_stock=get_total_stock(db),
        total_value=get_total_inventory_value(db),
        low_stock_count=len(get_low_stock_products(db)),
        expiring_count=len(get_expiring_products(db)),
        recent_orders=get_recent_orders(db, limit=5),
    )

# stockroom/services/warehouses.py

import logging

from sqlalchemy.orm import Session

from stockroom.models.warehouses import Warehouse
from stockroom.schemas.warehouse import WarehouseCreate, WarehouseUpdate
from stockroom.services.common import apply_updates, commit, require_row

logger = logging.getLogger(__name__)


def get_warehouses(db: Session) -> list[Warehouse]:
    return db.query(Warehouse).order_by(Warehouse.warehouse_id).all()


def get_warehouse(db: Session, warehouse_id: int) -> Warehouse | None:
    return db.get(Warehouse, warehouse_id)


def add_warehouse(db: Session, warehouse_data: WarehouseCreate) -> Warehouse:
    warehouse = Warehouse(**warehouse_data.model_dump())

    db.add(warehouse)
    commit(db, warehouse)

    logger.info(f"Added warehouse #{warehouse.warehouse_id} {warehouse.warehouse_name}")
    return warehouse


def update_warehouse(db: Session, warehouse_id: int, warehouse_data: WarehouseUpdate) -> Warehouse:
    warehouse = require_row(db, Warehouse, warehouse_id, "Warehouse")

    apply_updates(
        warehouse,
        warehouse_data.model_dump(exclude_unset=True),
        required=("warehouse_name",),
    )
    commit(db, warehouse)

    return warehouse

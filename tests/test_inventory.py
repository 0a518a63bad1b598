from datetime import date, datetime, timedelta

import pytest

from conftest import APPLES, CENTRAL, CHICKEN, FRESH_FOODS, NORTH, RICE, SOUTH, TOMATOES
from stockroom.core.errors import InvalidInputError, NotFoundError
from stockroom.models.inventory import InventoryRecord
from stockroom.schemas.inventory import InventoryRecordCreate, InventoryRecordUpdate
from stockroom.services.inventory import (
    add_inventory_record,
    check_stock_availability,
    deduct_stock,
    get_inventory_by_product,
    get_inventory_by_warehouse,
    update_inventory_record,
)
from stockroom.services.products import get_product_stock


def _records(db, product_id):
    return (
        db.query(InventoryRecord)
        .filter(InventoryRecord.product_id == product_id)
        .order_by(InventoryRecord.record_id)
        .all()
    )


def _restock(db, product_id, warehouse_id, quantity, expiry_in_days=None):
    expiry = date.today() + timedelta(days=expiry_in_days) if expiry_in_days is not None else None
    return add_inventory_record(
        db,
        InventoryRecordCreate(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity_in_stock=quantity,
            expiry_date=expiry,
        ),
    )


# =========================================================
# AVAILABILITY
# =========================================================
def test_availability_sums_every_warehouse_record(db):
    _restock(db, RICE, NORTH, 200)

    check = check_stock_availability(db, RICE, 650)

    assert check.is_available
    assert check.available == 700
    assert check.requested == 650


def test_shortfall_message_names_product_and_quantities(db):
    check = check_stock_availability(db, RICE, 600)

    assert not check.is_available
    assert check.available == 500
    assert check.message == "Insufficient stock for Rice: 500 available, 600 requested"


def test_availability_check_does_not_write(db):
    before = [r.quantity_in_stock for r in _records(db, RICE)]

    check_stock_availability(db, RICE, 10_000)

    assert [r.quantity_in_stock for r in _records(db, RICE)] == before


@pytest.mark.parametrize("quantity", [0, -3])
def test_availability_rejects_non_positive_quantity(db, quantity):
    with pytest.raises(InvalidInputError):
        check_stock_availability(db, RICE, quantity)


def test_availability_unknown_product(db):
    with pytest.raises(NotFoundError, match="Product #999 not found"):
        check_stock_availability(db, 999, 1)


# =========================================================
# DEDUCTION
# =========================================================
def test_deduction_conserves_stock_across_records(db):
    _restock(db, RICE, NORTH, 200)
    before = get_product_stock(db, RICE)

    deduction = deduct_stock(db, RICE, 600)

    assert deduction.deducted == 600
    assert deduction.shortfall == 0
    assert get_product_stock(db, RICE) == before - 600
    assert all(r.quantity_in_stock >= 0 for r in _records(db, RICE))


def test_deduction_drains_earliest_expiry_first(db):
    soon = _restock(db, RICE, NORTH, 40, expiry_in_days=5)
    undated = _restock(db, RICE, SOUTH, 1000)

    deduction = deduct_stock(db, RICE, 100)

    touched = [a.record_id for a in deduction.adjustments]
    seeded = _records(db, RICE)[0]

    assert touched == [soon.record_id, seeded.record_id]
    assert deduction.adjustments[0].before == 40
    assert deduction.adjustments[0].after == 0
    assert deduction.adjustments[1].before == 500
    assert deduction.adjustments[1].after == 440
    assert db.get(InventoryRecord, undated.record_id).quantity_in_stock == 1000


def test_deduction_clamps_at_zero_and_reports_shortfall(db):
    _restock(db, TOMATOES, SOUTH, 25)

    deduction = deduct_stock(db, TOMATOES, 10_000)

    assert deduction.deducted == 175
    assert deduction.shortfall == 10_000 - 175
    assert [r.quantity_in_stock for r in _records(db, TOMATOES)] == [0, 0]


def test_deduction_skips_empty_records(db):
    empty = _restock(db, APPLES, CENTRAL, 0, expiry_in_days=1)

    deduction = deduct_stock(db, APPLES, 10)

    assert empty.record_id not in [a.record_id for a in deduction.adjustments]
    assert get_product_stock(db, APPLES) == 190


def test_deduction_rejects_non_positive_quantity(db):
    with pytest.raises(InvalidInputError):
        deduct_stock(db, RICE, 0)


def test_deduction_refreshes_last_updated_on_touched_records(db):
    long_ago = datetime(2020, 1, 1)
    db.query(InventoryRecord).update({InventoryRecord.last_updated: long_ago})
    db.commit()

    deduct_stock(db, RICE, 5)
    db.commit()

    rice = _records(db, RICE)[0]
    apples = _records(db, APPLES)[0]
    db.refresh(rice)
    db.refresh(apples)

    assert rice.last_updated > long_ago
    assert apples.last_updated == long_ago


# =========================================================
# RESTOCK / QUERIES
# =========================================================
def test_restock_defaults_supplier_to_products_supplier(db):
    record = _restock(db, CHICKEN, CENTRAL, 30)

    assert record.supplier_id == FRESH_FOODS
    assert record.last_updated is not None
    assert get_product_stock(db, CHICKEN) == 130


def test_restock_unknown_warehouse(db):
    with pytest.raises(NotFoundError, match="Warehouse"):
        _restock(db, CHICKEN, 42, 30)


def test_update_record_quantity(db):
    record = _records(db, CHICKEN)[0]

    updated = update_inventory_record(
        db,
        record.record_id,
        InventoryRecordUpdate(quantity_in_stock=12),
    )

    assert updated.quantity_in_stock == 12
    assert get_product_stock(db, CHICKEN) == 12


def test_update_record_cannot_clear_quantity(db):
    record = _records(db, CHICKEN)[0]

    with pytest.raises(InvalidInputError):
        update_inventory_record(
            db,
            record.record_id,
            InventoryRecordUpdate(quantity_in_stock=None),
        )


def test_inventory_by_warehouse_includes_product_details(db):
    records = get_inventory_by_warehouse(db, NORTH)

    assert [r.product_name for r in records] == ["Tomatoes", "Apples"]
    assert all(r.warehouse_name == "North Facility" for r in records)


def test_inventory_by_product(db):
    _restock(db, RICE, SOUTH, 5)

    records = get_inventory_by_product(db, RICE)

    assert [r.warehouse_name for r in records] == ["Central Warehouse", "South Storage"]

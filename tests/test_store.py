import sqlite3
import threading
from decimal import Decimal

import pytest

from conftest import MICHAEL, RICE
from stockroom.core.errors import InvalidInputError, StoreNotInitializedError
from stockroom.database import SQLITE_HEADER, Store, required_tables
from stockroom.models.orders import Order
from stockroom.schemas.product import ProductCreate
from stockroom.services.inventory import deduct_stock
from stockroom.services.orders import add_order
from stockroom.services.products import add_product, get_product_stock, get_products
from stockroom.services.suppliers import get_suppliers


def _product_names(store):
    with store.session() as db:
        return [p.product_name for p in get_products(db)]


def test_session_before_open_raises():
    store = Store("sqlite://")

    with pytest.raises(StoreNotInitializedError, match="Database not initialized"):
        store.session()


def test_session_after_close_raises(store):
    store.close()

    assert not store.is_open
    with pytest.raises(StoreNotInitializedError):
        store.session()


def test_open_is_idempotent(store):
    engine = store.engine

    store.open()

    assert store.engine is engine
    assert len(_product_names(store)) == 6


def test_open_without_seed_is_empty():
    store = Store("sqlite://").open(seed=False)

    try:
        assert _product_names(store) == []
    finally:
        store.close()


def test_stores_are_isolated(store):
    other = Store("sqlite://").open(seed=False)

    try:
        assert _product_names(other) == []
        assert len(_product_names(store)) == 6
    finally:
        other.close()


def test_export_import_round_trip(store):
    with store.session() as db:
        add_product(db, ProductCreate(product_name="Oats", price=Decimal("2.49")))

    data = store.export_bytes()
    assert data.startswith(SQLITE_HEADER)

    restored = Store("sqlite://").open(seed=False)
    try:
        restored.import_bytes(data)

        assert _product_names(restored) == _product_names(store)
        assert "Oats" in _product_names(restored)

        with restored.session() as db:
            assert len(get_suppliers(db)) == 3
    finally:
        restored.close()


def test_import_replaces_existing_contents(store):
    empty = Store("sqlite://").open(seed=False)
    try:
        data = empty.export_bytes()
    finally:
        empty.close()

    store.import_bytes(data)

    assert _product_names(store) == []


def test_import_rejects_garbage_and_keeps_data(store):
    with pytest.raises(InvalidInputError, match="not a valid database export"):
        store.import_bytes(b"definitely not sqlite")

    assert len(_product_names(store)) == 6


def test_import_rejects_database_without_inventory_tables(store):
    other = sqlite3.connect(":memory:")
    other.execute("CREATE TABLE notes (body TEXT)")
    other.commit()
    data = other.serialize()
    other.close()

    with pytest.raises(InvalidInputError, match="missing tables"):
        store.import_bytes(data)

    assert len(_product_names(store)) == 6


def test_reset_restores_sample_data(store):
    empty = Store("sqlite://").open(seed=False)
    try:
        store.import_bytes(empty.export_bytes())
    finally:
        empty.close()

    assert _product_names(store) == []

    store.reset(seed=True)

    assert len(_product_names(store)) == 6


def test_import_rejects_tables_with_wrong_columns(store):
    other = sqlite3.connect(":memory:")
    for name in sorted(required_tables()):
        other.execute(f'CREATE TABLE "{name}" (id INTEGER PRIMARY KEY)')
    other.commit()
    data = other.serialize()
    other.close()

    with pytest.raises(InvalidInputError, match="missing columns"):
        store.import_bytes(data)

    assert len(_product_names(store)) == 6


# =========================================================
# CONCURRENT UNITS OF WORK
# =========================================================
def test_locked_sessions_run_one_at_a_time(store):
    seen = []

    def count_orders():
        with store.locked_session() as other:
            seen.append(other.query(Order).count())

    with store.locked_session() as db:
        add_order(db, customer_id=MICHAEL, total_amount=Decimal("64.95"))

        reader = threading.Thread(target=count_orders)
        reader.start()
        reader.join(timeout=0.2)

        # The reader is blocked, so it cannot close the shared transaction under us
        assert reader.is_alive()

        deduct_stock(db, RICE, 5)
        db.commit()

    reader.join(timeout=5)
    assert not reader.is_alive()
    assert seen == [4]

    with store.session() as db:
        assert db.query(Order).count() == 4
        assert get_product_stock(db, RICE) == 495


def test_export_waits_for_open_unit_of_work(store):
    exported = []

    def export():
        exported.append(store.export_bytes())

    with store.locked_session() as db:
        add_order(db, customer_id=MICHAEL, total_amount=Decimal("12.99"))

        exporter = threading.Thread(target=export)
        exporter.start()
        exporter.join(timeout=0.2)

        assert exporter.is_alive()

        db.commit()

    exporter.join(timeout=5)

    restored = Store("sqlite://").open(seed=False)
    try:
        restored.import_bytes(exported[0])
        with restored.session() as db:
            assert db.query(Order).count() == 4
    finally:
        restored.close()

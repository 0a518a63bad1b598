from decimal import Decimal

import pytest

from conftest import CHICKEN, DAVID, MICHAEL, RICE, SARAH, WHEAT_FLOUR
from stockroom.core.errors import InsufficientStockError, InvalidInputError, NotFoundError
from stockroom.models.inventory import InventoryRecord
from stockroom.models.order_items import OrderItem
from stockroom.models.orders import Order, OrderStatus
from stockroom.schemas.order import OrderCreate, OrderItemCreate
from stockroom.schemas.product import ProductUpdate
from stockroom.services.orders import (
    get_order_details,
    get_recent_orders,
    place_order,
    update_order_status,
)
from stockroom.services.products import get_product_stock, update_product


def _order(customer_id, *lines, **kwargs):
    return OrderCreate(
        customer_id=customer_id,
        items=[OrderItemCreate(product_id=p, quantity=q) for p, q in lines],
        **kwargs,
    )


def _stock_snapshot(db):
    return {
        r.record_id: r.quantity_in_stock
        for r in db.query(InventoryRecord).order_by(InventoryRecord.record_id)
    }


# =========================================================
# PLACEMENT
# =========================================================
def test_order_total_and_line_totals(db):
    result = place_order(db, _order(MICHAEL, (RICE, 5), (CHICKEN, 3)))

    assert result.success
    assert result.total_amount == Decimal("91.92")

    items = db.query(OrderItem).filter(OrderItem.order_id == result.order_id).all()
    assert len(items) == 2
    for item in items:
        assert item.total_price == item.item_price * item.quantity_ordered

    assert {item.product_id: item.total_price for item in items} == {
        RICE: Decimal("64.95"),
        CHICKEN: Decimal("26.97"),
    }
    assert db.get(Order, result.order_id).total_amount == Decimal("91.92")


def test_order_deducts_inventory(db):
    place_order(db, _order(MICHAEL, (RICE, 5), (CHICKEN, 3)))

    assert get_product_stock(db, RICE) == 495
    assert get_product_stock(db, CHICKEN) == 97


def test_order_rejected_as_a_whole_when_one_line_is_short(db):
    orders_before = db.query(Order).count()
    items_before = db.query(OrderItem).count()
    stock_before = _stock_snapshot(db)

    with pytest.raises(InsufficientStockError) as excinfo:
        place_order(db, _order(MICHAEL, (RICE, 5), (WHEAT_FLOUR, 10_000)))

    assert [s.product_name for s in excinfo.value.shortfalls] == ["Wheat Flour"]
    assert "Insufficient stock for Wheat Flour: 300 available, 10000 requested" in str(excinfo.value)

    assert db.query(Order).count() == orders_before
    assert db.query(OrderItem).count() == items_before
    assert _stock_snapshot(db) == stock_before


def test_repeated_product_lines_place_order_with_caveat(db):
    # Each line passes the check against the same 100 units of chicken
    result = place_order(db, _order(SARAH, (CHICKEN, 60), (CHICKEN, 60)))

    assert not result.success
    assert "placed, but inventory could not be fully adjusted" in result.message
    assert "Chicken: 20 units short" in result.message
    assert [s.shortfall for s in result.shortfalls] == [20]

    assert db.get(Order, result.order_id) is not None
    assert get_product_stock(db, CHICKEN) == 0


def test_prices_are_frozen_on_order_items(db):
    result = place_order(db, _order(DAVID, (RICE, 2)))

    update_product(db, RICE, ProductUpdate(price=Decimal("20.00")))

    details = get_order_details(db, result.order_id)
    assert details.items[0].item_price == Decimal("12.99")
    assert details.items[0].total_price == Decimal("25.98")
    assert details.total_amount == Decimal("25.98")


def test_shipping_address_defaults_to_customer(db):
    result = place_order(db, _order(SARAH, (RICE, 1)))
    override = place_order(db, _order(SARAH, (RICE, 1), shipping_address="1 Dock Rd"))

    assert db.get(Order, result.order_id).shipping_address == "456 Elm St, Los Angeles, CA"
    assert db.get(Order, override.order_id).shipping_address == "1 Dock Rd"


def test_empty_order_is_rejected(db):
    with pytest.raises(InvalidInputError, match="Order must contain items"):
        place_order(db, OrderCreate(customer_id=MICHAEL, items=[]))


def test_unknown_customer_is_rejected(db):
    with pytest.raises(NotFoundError, match="Customer"):
        place_order(db, _order(404, (RICE, 1)))


def test_unknown_product_is_rejected_before_any_write(db):
    orders_before = db.query(Order).count()

    with pytest.raises(NotFoundError, match="Product"):
        place_order(db, _order(MICHAEL, (RICE, 1), (999, 1)))

    assert db.query(Order).count() == orders_before
    assert get_product_stock(db, RICE) == 500


# =========================================================
# READS / STATUS
# =========================================================
def test_recent_orders_newest_first(db):
    result = place_order(db, _order(DAVID, (RICE, 1)))

    orders = get_recent_orders(db, limit=2)

    assert [o.order_id for o in orders][0] == result.order_id
    assert orders[0].customer_name == "David Brown"
    assert len(orders) == 2


def test_order_details_include_product_names(db):
    details = get_order_details(db, 1)

    assert details.customer_name == "Michael Johnson"
    assert [i.product_name for i in details.items] == ["Rice", "Chicken", "Milk"]
    assert details.total_amount == sum(i.total_price for i in details.items)


def test_order_details_missing(db):
    assert get_order_details(db, 999) is None


def test_status_moves_forward(db):
    order = update_order_status(db, 3, OrderStatus.SHIPPED)
    assert order.order_status == "Shipped"

    order = update_order_status(db, 3, OrderStatus.DELIVERED)
    assert order.order_status == "Delivered"


def test_status_cannot_move_backwards(db):
    with pytest.raises(InvalidInputError, match="already Delivered"):
        update_order_status(db, 1, OrderStatus.PENDING)


def test_status_rejects_unknown_value(db):
    with pytest.raises(InvalidInputError, match="Unknown order status") as excinfo:
        update_order_status(db, 1, "Lost")

    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__

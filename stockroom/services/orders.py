# stockroom/services/orders.py

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.errors import InsufficientStockError, InvalidInputError
from stockroom.models.customers import Customer
from stockroom.models.order_items import OrderItem
from stockroom.models.orders import Order, OrderStatus
from stockroom.models.products import Product
from stockroom.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderItemResponse,
    OrderPlacementResult,
    OrderResponse,
)
from stockroom.services.common import commit, require_row
from stockroom.services.inventory import check_stock_availability, deduct_stock

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _to_order_response(order: Order, customer_name: str | None) -> OrderResponse:
    return OrderResponse.model_validate(order).model_copy(
        update={"customer_name": customer_name}
    )


def _to_item_response(item: OrderItem, product_name: str | None) -> OrderItemResponse:
    return OrderItemResponse.model_validate(item).model_copy(
        update={"product_name": product_name}
    )


# =========================================================
# READS
# =========================================================
def get_recent_orders(db: Session, limit: int | None = None) -> list[OrderResponse]:
    if limit is None:
        limit = settings.RECENT_ORDERS_LIMIT

    rows = (
        db.query(Order, Customer.name)
        .join(Customer, Order.customer_id == Customer.customer_id)
        .order_by(Order.order_date.desc(), Order.order_id.desc())
        .limit(limit)
        .all()
    )

    return [_to_order_response(order, customer_name) for order, customer_name in rows]


def get_order(db: Session, order_id: int) -> Order | None:
    return db.get(Order, order_id)


def get_order_details(db: Session, order_id: int) -> OrderDetailResponse | None:
    row = (
        db.query(Order, Customer.name)
        .join(Customer, Order.customer_id == Customer.customer_id)
        .filter(Order.order_id == order_id)
        .first()
    )

    if row is None:
        return None

    order, customer_name = row

    item_rows = (
        db.query(OrderItem, Product.product_name)
        .join(Product, OrderItem.product_id == Product.product_id)
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.order_item_id)
        .all()
    )

    return OrderDetailResponse(
        **_to_order_response(order, customer_name).model_dump(),
        items=[_to_item_response(item, product_name) for item, product_name in item_rows],
    )


# =========================================================
# INSERT BUILDING BLOCKS (FLUSH ONLY, CALLER COMMITS)
# =========================================================
def add_order(
    db: Session,
    customer_id: int,
    total_amount: Decimal,
    shipping_address: str | None = None,
    order_status: OrderStatus = OrderStatus.PENDING,
) -> Order:
    order = Order(
        customer_id=customer_id,
        total_amount=total_amount,
        shipping_address=shipping_address,
        order_status=OrderStatus(order_status).value,
    )

    db.add(order)
    db.flush()

    return order


def add_order_items(db: Session, order_id: int, lines) -> list[OrderItem]:
    """
    Insert order items from ``(product_id, quantity, item_price)`` lines.

    ``total_price`` is computed here, once; later price changes on the product
    never touch it.
    """
    items = []

    for product_id, quantity, item_price in lines:
        item_price = Decimal(item_price).quantize(CENTS)

        items.append(
            OrderItem(
                order_id=order_id,
                product_id=product_id,
                quantity_ordered=quantity,
                item_price=item_price,
                total_price=(item_price * quantity).quantize(CENTS),
            )
        )

    db.add_all(items)
    db.flush()

    return items


# =========================================================
# STATUS
# =========================================================
def update_order_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    order = require_row(db, Order, order_id, "Order")

    try:
        status = OrderStatus(status)
    except ValueError:
        raise InvalidInputError(f"Unknown order status: {status}") from None

    current = OrderStatus(order.order_status)

    if status.rank < current.rank:
        raise InvalidInputError(
            f"Order #{order_id} is already {current.value} and cannot go back to {status.value}"
        )

    order.order_status = status.value
    commit(db, order)

    logger.info(f"Order #{order_id} status: {current.value} -> {status.value}")
    return order


# =========================================================
# PLACE ORDER
# =========================================================
def place_order(db: Session, order_data: OrderCreate) -> OrderPlacementResult:
    """
    Place an order and take its stock out of inventory.

    1. Every line is checked against the product's total stock. If any line
       cannot be covered, InsufficientStockError is raised and nothing is
       written.
    2. The order and its items are inserted with the current product prices
       frozen on the items.
    3. Stock is deducted line by line across the product's inventory records.
    4. Steps 2 and 3 are committed together. A deduction that comes up short
       does not undo the order; the result carries success=False and a message
       naming the shortfall.
    """
    if not order_data.items:
        raise InvalidInputError("Order must contain items")

    customer = require_row(db, Customer, order_data.customer_id, "Customer")

    # ----------------------------
    # Availability gate
    # ----------------------------
    checks = [
        check_stock_availability(db, item.product_id, item.quantity)
        for item in order_data.items
    ]

    shortfalls = [check for check in checks if not check.is_available]
    if shortfalls:
        logger.warning(
            f"Rejected order for customer #{customer.customer_id}: "
            + "; ".join(check.message for check in shortfalls)
        )
        raise InsufficientStockError(shortfalls)

    products = {check.product_id: db.get(Product, check.product_id) for check in checks}

    try:
        # ----------------------------
        # Order + items
        # ----------------------------
        lines = [
            (item.product_id, item.quantity, products[item.product_id].price)
            for item in order_data.items
        ]

        total_amount = sum(
            (Decimal(price).quantize(CENTS) * quantity for _, quantity, price in lines),
            Decimal("0.00"),
        ).quantize(CENTS)

        order = add_order(
            db,
            customer_id=customer.customer_id,
            total_amount=total_amount,
            shipping_address=order_data.shipping_address or customer.shipping_address,
            order_status=order_data.order_status,
        )

        items = add_order_items(db, order.order_id, lines)

        # ----------------------------
        # Inventory
        # ----------------------------
        deductions = [
            deduct_stock(db, item.product_id, item.quantity)
            for item in order_data.items
        ]

        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise

    item_responses = [
        _to_item_response(item, products[item.product_id].product_name)
        for item in items
    ]

    degraded = [deduction for deduction in deductions if deduction.shortfall]

    if degraded:
        message = (
            f"Order #{order.order_id} placed, but inventory could not be fully adjusted: "
            + "; ".join(
                f"{products[d.product_id].product_name}: {d.shortfall} units short"
                for d in degraded
            )
        )
        logger.warning(message)
    else:
        message = (
            f"Order #{order.order_id} placed: {len(items)} items, "
            f"total {total_amount}"
        )
        logger.info(message)

    return OrderPlacementResult(
        order_id=order.order_id,
        total_amount=total_amount,
        items=item_responses,
        success=not degraded,
        message=message,
        shortfalls=degraded,
    )

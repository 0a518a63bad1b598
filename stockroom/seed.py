"""Demonstration rows loaded into a freshly opened store."""

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from stockroom.models.customers import Customer
from stockroom.models.inventory import InventoryRecord
from stockroom.models.order_items import OrderItem
from stockroom.models.orders import Order, OrderStatus
from stockroom.models.products import Product
from stockroom.models.suppliers import Supplier
from stockroom.models.warehouses import Warehouse

logger = logging.getLogger(__name__)

SUPPLIERS = [
    ("Fresh Foods Inc", "John", "Doe", "555-123-4567", "john@freshfoods.com", "123 Main St", "Boston", "MA", "USA"),
    ("Organic Farms", "Jane", "Smith", "555-765-4321", "jane@organicfarms.com", "456 Oak Ave", "Portland", "OR", "USA"),
    ("Global Grains", "Tom", "Wilson", "555-987-6543", "tom@globalgrains.com", "789 Pine Rd", "Chicago", "IL", "USA"),
]

WAREHOUSES = [
    ("Central Warehouse", "Downtown", "555-111-2222"),
    ("North Facility", "North District", "555-333-4444"),
    ("South Storage", "South District", "555-555-6666"),
]

# name, description, price, category, supplier index
PRODUCTS = [
    ("Rice", "Premium basmati rice", "12.99", "Grains", 3),
    ("Wheat Flour", "All-purpose wheat flour", "5.99", "Baking", 3),
    ("Tomatoes", "Fresh organic tomatoes", "3.99", "Vegetables", 2),
    ("Apples", "Red delicious apples", "4.99", "Fruits", 2),
    ("Chicken", "Free-range chicken", "8.99", "Meat", 1),
    ("Milk", "Organic whole milk", "3.49", "Dairy", 1),
]

# product, warehouse, quantity, days until expiry, supplier
INVENTORY = [
    (1, 1, 500, 270, 3),
    (2, 1, 300, 180, 3),
    (3, 2, 150, 21, 2),
    (4, 2, 200, 45, 2),
    (5, 3, 100, 14, 1),
    (6, 3, 250, 7, 1),
]

CUSTOMERS = [
    ("Michael", "Johnson", "555-111-3333", "michael@example.com", "123 Pine St, New York, NY"),
    ("Sarah", "Williams", "555-444-6666", "sarah@example.com", "456 Elm St, Los Angeles, CA"),
    ("David", "Brown", "555-777-9999", "david@example.com", "789 Maple St, Chicago, IL"),
]

# customer, days ago, time of day, status, [(product, quantity)]
ORDERS = [
    (1, 30, time(10, 30), OrderStatus.DELIVERED, [(1, 5), (5, 5), (6, 2)]),
    (2, 20, time(14, 45), OrderStatus.SHIPPED, [(2, 6), (4, 8)]),
    (3, 10, time(9, 15), OrderStatus.PENDING, [(3, 5), (6, 8)]),
]


def load_sample_data(db: Session, today: date | None = None) -> None:
    """
    Insert the demo suppliers, warehouses, products, stock, customers and
    orders. Does nothing if suppliers already exist.

    Expiry and order dates are relative to ``today`` so the expiring-soon and
    recent-order views have something to show whenever the store is opened.
    """
    if db.query(Supplier).first() is not None:
        logger.info("Sample data already present, skipping")
        return

    if today is None:
        today = date.today()

    suppliers = [
        Supplier(
            supplier_name=name,
            first_name=first_name,
            last_name=last_name,
            contact_phone=phone,
            email=email,
            address=address,
            city=city,
            state=state,
            country=country,
        )
        for name, first_name, last_name, phone, email, address, city, state, country in SUPPLIERS
    ]
    db.add_all(suppliers)

    warehouses = [
        Warehouse(warehouse_name=name, location=location, contact_number=contact)
        for name, location, contact in WAREHOUSES
    ]
    db.add_all(warehouses)
    db.flush()

    products = [
        Product(
            product_name=name,
            description=description,
            price=Decimal(price),
            category=category,
            supplier_id=suppliers[supplier - 1].supplier_id,
        )
        for name, description, price, category, supplier in PRODUCTS
    ]
    db.add_all(products)
    db.flush()

    db.add_all(
        [
            InventoryRecord(
                product_id=products[product - 1].product_id,
                warehouse_id=warehouses[warehouse - 1].warehouse_id,
                quantity_in_stock=quantity,
                expiry_date=today + timedelta(days=days),
                supplier_id=suppliers[supplier - 1].supplier_id,
            )
            for product, warehouse, quantity, days, supplier in INVENTORY
        ]
    )

    customers = [
        Customer(
            first_name=first_name,
            last_name=last_name,
            name=f"{first_name} {last_name}",
            phone_number=phone,
            email=email,
            shipping_address=address,
        )
        for first_name, last_name, phone, email, address in CUSTOMERS
    ]
    db.add_all(customers)
    db.flush()

    for customer, days_ago, at, status, lines in ORDERS:
        items = []
        for product, quantity in lines:
            price = products[product - 1].price
            items.append(
                OrderItem(
                    product_id=products[product - 1].product_id,
                    quantity_ordered=quantity,
                    item_price=price,
                    total_price=price * quantity,
                )
            )

        db.add(
            Order(
                customer_id=customers[customer - 1].customer_id,
                order_date=datetime.combine(today - timedelta(days=days_ago), at),
                total_amount=sum((item.total_price for item in items), Decimal("0.00")),
                shipping_address=customers[customer - 1].shipping_address,
                order_status=status.value,
                items=items,
            )
        )

    db.commit()

    logger.info(
        f"Sample data loaded: {len(products)} products, {len(suppliers)} suppliers, "
        f"{len(warehouses)} warehouses, {len(customers)} customers, {len(ORDERS)} orders"
    )

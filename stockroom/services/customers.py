# stockroom/services/customers.py

import logging

from sqlalchemy.orm import Session

from stockroom.models.customers import Customer
from stockroom.schemas.customer import CustomerCreate, CustomerUpdate
from stockroom.services.common import apply_updates, commit, require_row

logger = logging.getLogger(__name__)


def get_customers(db: Session) -> list[Customer]:
    return db.query(Customer).order_by(Customer.customer_id).all()


def get_customer(db: Session, customer_id: int) -> Customer | None:
    return db.get(Customer, customer_id)


def add_customer(db: Session, customer_data: CustomerCreate) -> Customer:
    customer = Customer(**customer_data.model_dump())

    if not customer.name:
        customer.name = f"{customer.first_name} {customer.last_name}"

    db.add(customer)
    commit(db, customer)

    logger.info(f"Added customer #{customer.customer_id} {customer.name}")
    return customer


def update_customer(db: Session, customer_id: int, customer_data: CustomerUpdate) -> Customer:
    customer = require_row(db, Customer, customer_id, "Customer")
    updates = customer_data.model_dump(exclude_unset=True)

    apply_updates(customer, updates, required=("first_name", "last_name"))

    # Keep the display name in step with renamed customers unless one was given
    if "name" not in updates and ("first_name" in updates or "last_name" in updates):
        customer.name = f"{customer.first_name} {customer.last_name}"

    commit(db, customer)
    return customer

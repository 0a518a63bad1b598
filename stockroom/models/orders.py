# stockroom/models/orders.py

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockroom.database import Base


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"

    @property
    def rank(self) -> int:
        return list(OrderStatus).index(self)


class Order(Base):
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.customer_id"), nullable=False, index=True)

    order_date = Column(DateTime, default=func.now(), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(String, nullable=True)
    order_status = Column(String, nullable=False, default=OrderStatus.PENDING.value)

    customer = relationship("Customer")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.order_item_id",
    )

    __table_args__ = (
        Index("ix_orders_order_date", "order_date"),
    )

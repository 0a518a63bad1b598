# stockroom/models/inventory.py

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockroom.database import Base


class InventoryRecord(Base):
    __tablename__ = "inventory_records"

    record_id = Column(Integer, primary_key=True, autoincrement=True)

    product_id = Column(Integer, ForeignKey("products.product_id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.warehouse_id"), nullable=False, index=True)

    quantity_in_stock = Column(Integer, nullable=False, default=0)

    last_updated = Column(
        DateTime,
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    expiry_date = Column(Date, nullable=True)

    supplier_id = Column(Integer, ForeignKey("suppliers.supplier_id"), nullable=True, index=True)

    product = relationship("Product", back_populates="inventory_records")
    warehouse = relationship("Warehouse")
    supplier = relationship("Supplier")

    __table_args__ = (
        Index("ix_inventory_records_expiry", "expiry_date"),
        CheckConstraint("quantity_in_stock >= 0", name="ck_inventory_quantity_non_negative"),
    )

# stockroom/models/products.py

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from stockroom.database import Base


class Product(Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True)
    product_name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=True, index=True)

    # Cleared, never cascaded, when the supplier is deleted
    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.supplier_id"),
        nullable=True,
        index=True,
    )

    supplier = relationship("Supplier")
    inventory_records = relationship("InventoryRecord", back_populates="product")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_product_price_positive"),
    )

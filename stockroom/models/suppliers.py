# stockroom/models/suppliers.py

from sqlalchemy import Column, Integer, String

from stockroom.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    supplier_id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_name = Column(String, nullable=False)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    email = Column(String, nullable=True)

    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    locality = Column(String, nullable=True)
    country = Column(String, nullable=True)

# stockroom/models/warehouses.py

from sqlalchemy import Column, Integer, String

from stockroom.database import Base


class Warehouse(Base):
    __tablename__ = "warehouses"

    warehouse_id = Column(Integer, primary_key=True, autoincrement=True)
    warehouse_name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    contact_number = Column(String, nullable=True)

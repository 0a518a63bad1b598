# stockroom/models/customers.py

from sqlalchemy import Column, Date, Integer, String

from stockroom.database import Base


class Customer(Base):
    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    # Display name, "first last" unless given explicitly
    name = Column(String, nullable=True)

    phone_number = Column(String, nullable=True)
    email = Column(String, nullable=True)
    shipping_address = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)

from sqlalchemy import Column, Float, Integer, Numeric, String
from shared.config.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    image = Column(String(500), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    rating = Column(Float, nullable=False, default=0)
    reviews = Column(Integer, nullable=False, default=0)
    warehouse = Column(String(100), nullable=True, index=True) # location tag, e.g. 'Cikarang'
    delivery_days = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)

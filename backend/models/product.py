# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, CheckConstraint
from database import Base

# Model Product
# A catalogue entry. `quantity` is the available stock, `discount` a percentage
# off `price`; `special_price` is the discounted unit price carts snapshot.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String)
    image = Column(String, nullable=True, default="default.png")

    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)
    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    discount = Column(Float, CheckConstraint("discount >= 0 AND discount <= 100"), nullable=False, default=0)
    special_price = Column(Float, nullable=False)

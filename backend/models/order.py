from datetime import date

from sqlalchemy import Column, Integer, String, Float, ForeignKey, Date
from sqlalchemy.orm import relationship
from database import Base
from models.coupon import order_coupons

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)
    order_date = Column(Date, nullable=False, default=date.today)
    total_amount = Column(Float, nullable=False, default=0.0)
    order_status = Column(String, nullable=False)

    # Filled in by the second save of placeOrder, once the payment row exists
    payment_id = Column(Integer, ForeignKey("payments.id"), nullable=True, unique=True)

    payment = relationship("Payment", back_populates="order", uselist=False)
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")
    coupons = relationship("Coupon", secondary=order_coupons, back_populates="orders")

class OrderItem(Base):
    __tablename__ = "order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    discount = Column(Float, nullable=False, default=0)
    ordered_product_price = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")

# backend/models/coupon.py
from sqlalchemy import Column, Integer, String, ForeignKey, Table, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Join table linking orders with the coupons applied to them
order_coupons = Table(
    "order_coupons",
    Base.metadata,
    Column("coupon_id", Integer, ForeignKey("coupons.id", ondelete="CASCADE"), primary_key=True),
    Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True),
)

# A discount code granting a percentage off an order total
class Coupon(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    discount_percentage = Column(
        Integer,
        CheckConstraint("discount_percentage >= 0 AND discount_percentage <= 100"),
        nullable=False,
        default=0,
    )

    orders = relationship("Order", secondary=order_coupons, back_populates="coupons")

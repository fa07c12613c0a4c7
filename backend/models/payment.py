from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database import Base

# Payment chosen for an order; one row per order
class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    payment_method = Column(String, nullable=False)

    order = relationship("Order", back_populates="payment", uselist=False)

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from database import Base

# Audit trail of state-changing shop actions (coupon admin, order placement, status changes)
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)

    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(50), index=True)    # e.g. ORDER_PLACE, COUPON_DELETE
    resource = Column(String(50), index=True)  # coupons | orders | carts | products | auth
    status = Column(String(20), index=True)
    ip = Column(String(64), nullable=True)

    # Identifiers of the touched rows
    meta = Column(JSON, nullable=True)

    user = relationship("User", lazy="joined", uselist=False)

# backend/deps.py
"""Service providers for FastAPI dependency injection.

Each provider builds a service around the request-scoped session from get_db,
so tests can swap the database with a single override of get_db.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from services.cart_service import CartService
from services.coupon_service import CouponService
from services.order_service import OrderService
from services.product_service import ProductService


def get_coupon_service(db: Session = Depends(get_db)) -> CouponService:
    return CouponService(db)


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db, CartService(db))


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)

from .users import User
from .product import Product
from .cart import Cart, CartItem
from .coupon import Coupon, order_coupons
from .payment import Payment
from .order import Order, OrderItem
from .log import Log

__all__ = [
    "User",
    "Product",
    "Cart",
    "CartItem",
    "Coupon",
    "order_coupons",
    "Payment",
    "Order",
    "OrderItem",
    "Log",
]

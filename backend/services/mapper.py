# backend/services/mapper.py
"""Entity to DTO mapping.

Each function copies the fields of one ORM entity into its transport schema.
Relationships are mapped by delegating to the matching function.
"""
from typing import Iterable, List, Optional

from models.cart import Cart, CartItem
from models.coupon import Coupon
from models.order import Order, OrderItem
from models.payment import Payment
from models.product import Product
from schemas.cart import CartDTO, CartItemDTO
from schemas.coupon import CouponDTO
from schemas.order import OrderDTO, OrderItemDTO, PaymentDTO
from schemas.product import ProductDTO


def coupon_to_dto(coupon: Coupon) -> CouponDTO:
    return CouponDTO(
        coupon_id=coupon.id,
        coupon_name=coupon.name,
        discount_percentage=coupon.discount_percentage,
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        product_id=product.id,
        product_name=product.name,
        image=product.image,
        description=product.description,
        quantity=product.quantity,
        price=product.price,
        discount=product.discount,
        special_price=product.special_price,
    )


def cart_item_to_dto(item: CartItem) -> CartItemDTO:
    return CartItemDTO(
        cart_item_id=item.id,
        product=product_to_dto(item.product),
        quantity=item.quantity,
        discount=item.discount,
        product_price=item.product_price,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        cart_id=cart.id,
        total_price=round(cart.total_price or 0.0, 2),
        products=[cart_item_to_dto(it) for it in cart.items],
    )


def payment_to_dto(payment: Optional[Payment]) -> Optional[PaymentDTO]:
    if payment is None:
        return None
    return PaymentDTO(payment_id=payment.id, payment_method=payment.payment_method)


def order_item_to_dto(item: OrderItem) -> OrderItemDTO:
    return OrderItemDTO(
        order_item_id=item.id,
        product=product_to_dto(item.product),
        quantity=item.quantity,
        discount=item.discount,
        ordered_product_price=item.ordered_product_price,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        order_id=order.id,
        email=order.email,
        order_items=[order_item_to_dto(it) for it in order.items],
        order_date=order.order_date,
        payment=payment_to_dto(order.payment),
        total_amount=round(order.total_amount, 2),
        order_status=order.order_status,
        coupons=[coupon_to_dto(c) for c in order.coupons],
    )


def orders_to_dtos(orders: Iterable[Order]) -> List[OrderDTO]:
    return [order_to_dto(o) for o in orders]

# backend/services/order_service.py
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from models.coupon import Coupon
from models.order import Order, OrderItem
from models.payment import Payment
from schemas.order import OrderDTO, OrderResponse
from services.cart_service import CartService, find_cart_by_email_and_id
from services.mapper import order_to_dto, orders_to_dtos
from utils.exceptions import APIException, ResourceNotFoundException
from utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)

ORDER_ACCEPTED = "Order Accepted!"

ORDER_SORT_FIELDS = {
    "orderId": Order.id,
    "order_id": Order.id,
    "email": Order.email,
    "orderDate": Order.order_date,
    "order_date": Order.order_date,
    "totalAmount": Order.total_amount,
    "total_amount": Order.total_amount,
    "orderStatus": Order.order_status,
    "order_status": Order.order_status,
}


def apply_coupon_discount(total_amount: float, discount_percentage: int) -> float:
    """Percentage off `total_amount`, never below zero."""
    discount_amount = (discount_percentage / 100.0) * total_amount
    return max(0.0, total_amount - discount_amount)


class OrderService:
    def __init__(self, db: Session, cart_service: Optional[CartService] = None):
        self.db = db
        self.cart_service = cart_service or CartService(db)

    def _find_order(self, email: str, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.email == email, Order.id == order_id).first()
        if order is None:
            raise ResourceNotFoundException("Order", "orderId", order_id)
        return order

    def place_order(self, email: str, cart_id: int, coupon_id: Optional[int], payment_method: str) -> OrderDTO:
        """Turn the cart into an order in a single transaction.

        Order, payment, item snapshots, stock decrements and cart cleanup are
        committed together; any error rolls all of them back.
        """
        try:
            cart = find_cart_by_email_and_id(self.db, email, cart_id)
            if cart is None:
                raise ResourceNotFoundException("Cart", "cartId", cart_id)
            if not cart.items:
                raise APIException("Cart is empty")

            # No row locking: two concurrent orders can both pass this check and oversell
            for item in cart.items:
                if item.product.quantity < item.quantity:
                    raise APIException(
                        f"Insufficient stock for {item.product.name}: "
                        f"requested {item.quantity}, available {item.product.quantity}"
                    )

            total_amount = sum(item.product_price * item.quantity for item in cart.items)

            order = Order(email=email, order_date=date.today())

            if coupon_id is not None:
                coupon = self.db.get(Coupon, coupon_id)
                if coupon is None:
                    raise ResourceNotFoundException("Coupon", "couponId", coupon_id)
                total_amount = apply_coupon_discount(total_amount, coupon.discount_percentage)
                # back_populates keeps coupon.orders in step
                order.coupons.append(coupon)

            order.total_amount = total_amount
            order.order_status = ORDER_ACCEPTED

            self.db.add(order)
            self.db.flush()

            # The payment needs the order persisted first, then the order is saved again with it
            payment = Payment(payment_method=payment_method)
            self.db.add(payment)
            self.db.flush()
            order.payment = payment
            self.db.flush()

            order_items = [
                OrderItem(
                    order=order,
                    product=item.product,
                    quantity=item.quantity,
                    discount=item.discount,
                    ordered_product_price=item.product_price,
                )
                for item in cart.items
            ]
            self.db.add_all(order_items)
            self.db.flush()

            for item in list(cart.items):
                item.product.quantity -= item.quantity
                self.cart_service.remove_item(cart, item)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(
            "Order %s placed by %s from cart %s: total=%.2f coupon=%s payment=%s",
            order.id, email, cart_id, order.total_amount, coupon_id, payment_method,
        )
        return order_to_dto(order)

    def get_order(self, email: str, order_id: int) -> OrderDTO:
        return order_to_dto(self._find_order(email, order_id))

    def get_orders_by_user(self, email: str) -> List[OrderDTO]:
        orders = self.db.query(Order).filter(Order.email == email).order_by(Order.id.asc()).all()
        if not orders:
            raise APIException(f"No orders placed yet by the user with email: {email}")
        return orders_to_dtos(orders)

    def get_orders_by_coupon(
        self, coupon_id: int, page_number: int, page_size: int, sort_by: str, sort_order: str
    ) -> OrderResponse:
        coupon = self.db.get(Coupon, coupon_id)
        if coupon is None:
            raise ResourceNotFoundException("Coupon", "couponId", coupon_id)

        order_by = resolve_sort(ORDER_SORT_FIELDS, sort_by, sort_order)
        query = self.db.query(Order).filter(Order.coupons.any(Coupon.id == coupon_id))
        rows, meta = paginate(query, page_number, page_size, order_by, Order.id.asc())
        if not rows:
            raise APIException(f"No orders found for the coupon: {coupon.name}")
        return OrderResponse(content=orders_to_dtos(rows), **meta)

    def get_all_orders(self, page_number: int, page_size: int, sort_by: str, sort_order: str) -> OrderResponse:
        order_by = resolve_sort(ORDER_SORT_FIELDS, sort_by, sort_order)
        rows, meta = paginate(self.db.query(Order), page_number, page_size, order_by, Order.id.asc())
        if not rows:
            raise APIException("No orders placed yet by the users")
        # Coupons are mapped into each DTO by the mapper
        return OrderResponse(content=orders_to_dtos(rows), **meta)

    def update_order(self, email: str, order_id: int, order_status: str) -> OrderDTO:
        order = self._find_order(email, order_id)
        old_status = order.order_status
        # Any status string is accepted; there is no transition table
        order.order_status = order_status
        self.db.commit()
        self.db.refresh(order)
        logger.info("Order %s status %r -> %r", order_id, old_status, order_status)
        return order_to_dto(order)

# backend/services/cart_service.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from models.cart import Cart, CartItem
from models.product import Product
from models.users import User
from schemas.cart import CartDTO
from services.mapper import cart_to_dto
from utils.exceptions import APIException, ResourceNotFoundException

logger = logging.getLogger(__name__)


def recompute_total(cart: Cart) -> None:
    # Summed from the current lines so an emptied cart is exactly 0
    cart.total_price = sum((it.product_price * it.quantity for it in cart.items), 0.0)


def find_cart_by_email_and_id(db: Session, email: str, cart_id: int) -> Optional[Cart]:
    return (
        db.query(Cart)
        .join(User, Cart.user_id == User.id)
        .filter(User.email == email, Cart.id == cart_id)
        .first()
    )


class CartService:
    """Cart maintenance. Methods that only stage changes leave committing to the caller."""

    def __init__(self, db: Session):
        self.db = db

    def _cart(self, cart_id: int) -> Cart:
        cart = self.db.get(Cart, cart_id)
        if cart is None:
            raise ResourceNotFoundException("Cart", "cartId", cart_id)
        return cart

    def _product(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise ResourceNotFoundException("Product", "productId", product_id)
        return product

    def _item(self, cart: Cart, product_id: int) -> CartItem:
        item = next((it for it in cart.items if it.product_id == product_id), None)
        if item is None:
            raise ResourceNotFoundException("Product", "productId", product_id)
        return item

    def create_cart(self, user: User) -> Cart:
        cart = Cart(user=user, total_price=0.0)
        self.db.add(cart)
        return cart

    def add_product_to_cart(self, cart_id: int, product_id: int, quantity: int) -> CartDTO:
        cart = self._cart(cart_id)
        product = self._product(product_id)

        if any(it.product_id == product_id for it in cart.items):
            raise APIException(f"Product {product.name} already exists in the cart")
        if product.quantity == 0:
            raise APIException(f"{product.name} is not available")
        if product.quantity < quantity:
            raise APIException(
                f"Please, make an order of the {product.name} less than or equal to the quantity {product.quantity}."
            )

        item = CartItem(
            product=product,
            quantity=quantity,
            discount=product.discount,
            product_price=product.special_price,
        )
        cart.items.append(item)
        recompute_total(cart)

        self.db.commit()
        self.db.refresh(cart)
        logger.info("Cart %s: added product %s x%s", cart_id, product_id, quantity)
        return cart_to_dto(cart)

    def get_cart(self, email: str, cart_id: int) -> CartDTO:
        cart = find_cart_by_email_and_id(self.db, email, cart_id)
        if cart is None:
            raise ResourceNotFoundException("Cart", "cartId", cart_id)
        return cart_to_dto(cart)

    def update_product_quantity_in_cart(self, cart_id: int, product_id: int, quantity: int) -> CartDTO:
        cart = self._cart(cart_id)
        product = self._product(product_id)
        item = self._item(cart, product_id)

        if product.quantity == 0:
            raise APIException(f"{product.name} is not available")
        if product.quantity < quantity:
            raise APIException(
                f"Please, make an order of the {product.name} less than or equal to the quantity {product.quantity}."
            )

        item.product_price = product.special_price
        item.discount = product.discount
        item.quantity = quantity
        recompute_total(cart)

        self.db.commit()
        self.db.refresh(cart)
        logger.info("Cart %s: product %s quantity set to %s", cart_id, product_id, quantity)
        return cart_to_dto(cart)

    def remove_item(self, cart: Cart, item: CartItem) -> None:
        """Stage removal of `item` from `cart` and recompute the cart total. Stock is untouched."""
        cart.items.remove(item)
        recompute_total(cart)

    def delete_product_from_cart(self, cart_id: int, product_id: int) -> str:
        cart = self._cart(cart_id)
        item = self._item(cart, product_id)
        product_name = item.product.name if item.product else str(product_id)

        self.remove_item(cart, item)
        self.db.commit()
        logger.info("Cart %s: removed product %s", cart_id, product_id)
        return f"Product {product_name} removed from the cart !!!"

"""Order placement: totals, coupon discount, snapshots, stock and cart side effects."""

import pytest

from models import Cart, Order, OrderItem, Payment, Product
from services.order_service import ORDER_ACCEPTED, OrderService, apply_coupon_discount
from utils.exceptions import APIException, ResourceNotFoundException


def _counts(db_session):
    return (
        db_session.query(Order).count(),
        db_session.query(Payment).count(),
        db_session.query(OrderItem).count(),
    )


def test_place_order_without_coupon(db_session, make_user, make_product, fill_cart):
    user = make_user()
    lamp = make_product("Desk Lamp", price=50.0, quantity=10)
    mug = make_product("Mug", price=12.5, quantity=5)
    cart = fill_cart(user, (lamp, 2), (mug, 4))

    dto = OrderService(db_session).place_order(user.email, cart.id, None, "card")

    assert dto.email == user.email
    assert dto.order_status == ORDER_ACCEPTED
    assert dto.total_amount == pytest.approx(150.0)
    assert dto.payment is not None
    assert dto.payment.payment_method == "card"
    assert dto.coupons == []
    assert sorted((i.product.product_name, i.quantity) for i in dto.order_items) == [("Desk Lamp", 2), ("Mug", 4)]

    order = db_session.get(Order, dto.order_id)
    assert order.payment_id == dto.payment.payment_id
    assert _counts(db_session) == (1, 1, 2)


def test_coupon_reduces_total_by_percentage(db_session, make_user, make_product, make_coupon, fill_cart):
    user = make_user()
    product = make_product(price=50.0, quantity=10)
    coupon = make_coupon("SPRING30", 30)
    cart = fill_cart(user, (product, 2))

    dto = OrderService(db_session).place_order(user.email, cart.id, coupon.id, "paypal")

    assert dto.total_amount == pytest.approx(70.0)
    assert [c.coupon_id for c in dto.coupons] == [coupon.id]

    db_session.refresh(coupon)
    assert [o.id for o in coupon.orders] == [dto.order_id]


def test_full_discount_floors_total_at_zero(db_session, make_user, make_product, make_coupon, fill_cart):
    user = make_user()
    product = make_product(price=19.99, quantity=3)
    coupon = make_coupon("FREE", 100)
    cart = fill_cart(user, (product, 3))

    dto = OrderService(db_session).place_order(user.email, cart.id, coupon.id, "card")

    assert dto.total_amount == 0.0


@pytest.mark.parametrize(
    "total, percentage, expected",
    [(100.0, 30, 70.0), (100.0, 0, 100.0), (80.0, 100, 0.0), (10.0, 150, 0.0)],
)
def test_apply_coupon_discount(total, percentage, expected):
    assert apply_coupon_discount(total, percentage) == pytest.approx(expected)


def test_cart_is_emptied_and_stock_decremented(db_session, make_user, make_product, fill_cart):
    user = make_user()
    lamp = make_product("Desk Lamp", price=50.0, quantity=10)
    mug = make_product("Mug", price=12.5, quantity=5)
    cart = fill_cart(user, (lamp, 3), (mug, 5))

    OrderService(db_session).place_order(user.email, cart.id, None, "card")

    db_session.expire_all()
    cart = db_session.get(Cart, cart.id)
    assert cart.items == []
    assert cart.total_price == 0.0
    assert db_session.get(Product, lamp.id).quantity == 7
    assert db_session.get(Product, mug.id).quantity == 0


def test_order_items_are_snapshots(db_session, make_user, make_product, fill_cart):
    user = make_user()
    product = make_product(price=40.0, quantity=10, discount=25.0)
    cart = fill_cart(user, (product, 2))

    dto = OrderService(db_session).place_order(user.email, cart.id, None, "card")

    # Later catalogue changes must not leak into the placed order
    product.price = 999.0
    product.special_price = 999.0
    product.discount = 0.0
    db_session.commit()

    item = db_session.query(OrderItem).filter(OrderItem.order_id == dto.order_id).one()
    assert item.ordered_product_price == pytest.approx(30.0)
    assert item.discount == pytest.approx(25.0)
    assert item.quantity == 2


def test_empty_cart_is_rejected_and_nothing_written(db_session, make_user):
    user = make_user()

    with pytest.raises(APIException, match="Cart is empty"):
        OrderService(db_session).place_order(user.email, user.cart.id, None, "card")

    assert _counts(db_session) == (0, 0, 0)


def test_unknown_cart_for_email(db_session, make_user, make_product, fill_cart):
    owner = make_user("owner@example.com")
    make_user("other@example.com")
    cart = fill_cart(owner, (make_product(), 1))

    with pytest.raises(ResourceNotFoundException) as exc_info:
        OrderService(db_session).place_order("other@example.com", cart.id, None, "card")

    assert exc_info.value.resource_name == "Cart"
    assert exc_info.value.field_value == cart.id


def test_unknown_coupon_rolls_back(db_session, make_user, make_product, fill_cart):
    user = make_user()
    product = make_product(quantity=10)
    cart = fill_cart(user, (product, 2))

    with pytest.raises(ResourceNotFoundException, match="Coupon not found with couponId: 404"):
        OrderService(db_session).place_order(user.email, cart.id, 404, "card")

    db_session.expire_all()
    assert _counts(db_session) == (0, 0, 0)
    assert len(db_session.get(Cart, cart.id).items) == 1
    assert db_session.get(Product, product.id).quantity == 10


def test_insufficient_stock_writes_nothing(db_session, make_user, make_product, fill_cart):
    user = make_user()
    product = make_product(quantity=5)
    cart = fill_cart(user, (product, 5))

    # Stock sold elsewhere after the item went into the cart
    product.quantity = 2
    db_session.commit()

    with pytest.raises(APIException, match="Insufficient stock"):
        OrderService(db_session).place_order(user.email, cart.id, None, "card")

    db_session.expire_all()
    assert _counts(db_session) == (0, 0, 0)
    assert db_session.get(Product, product.id).quantity == 2
    assert len(db_session.get(Cart, cart.id).items) == 1


def test_consumed_cart_total_is_exactly_zero(db_session, make_user, make_product, fill_cart):
    user = make_user()
    dime = make_product("Sticker", price=0.1, quantity=10)
    fifth = make_product("Pencil", price=0.2, quantity=10)
    cart = fill_cart(user, (dime, 3), (fifth, 1))

    OrderService(db_session).place_order(user.email, cart.id, None, "card")

    db_session.expire_all()
    assert db_session.get(Cart, cart.id).total_price == 0.0

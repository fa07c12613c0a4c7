"""Cart maintenance: adding, updating and removing lines."""

import pytest

from models import Cart, Product
from services.cart_service import CartService
from utils.exceptions import APIException, ResourceNotFoundException


def test_add_product_snapshots_special_price(db_session, make_user, make_product):
    user = make_user()
    product = make_product(price=80.0, quantity=5, discount=25.0)

    dto = CartService(db_session).add_product_to_cart(user.cart.id, product.id, 2)

    assert dto.total_price == pytest.approx(120.0)
    assert len(dto.products) == 1
    line = dto.products[0]
    assert line.product_price == pytest.approx(60.0)
    assert line.discount == pytest.approx(25.0)
    assert line.quantity == 2
    # Stock is only taken when the order is placed
    assert db_session.get(Product, product.id).quantity == 5


def test_add_rejects_duplicates_and_missing_stock(db_session, make_user, make_product):
    user = make_user()
    product = make_product("Chair", quantity=3)
    sold_out = make_product("Table", quantity=0)
    service = CartService(db_session)
    service.add_product_to_cart(user.cart.id, product.id, 1)

    with pytest.raises(APIException, match="Product Chair already exists in the cart"):
        service.add_product_to_cart(user.cart.id, product.id, 1)
    with pytest.raises(APIException, match="Table is not available"):
        service.add_product_to_cart(user.cart.id, sold_out.id, 1)


def test_add_more_than_stock(db_session, make_user, make_product):
    user = make_user()
    product = make_product("Chair", quantity=3)

    with pytest.raises(APIException, match="less than or equal to the quantity 3"):
        CartService(db_session).add_product_to_cart(user.cart.id, product.id, 4)


def test_add_to_unknown_cart_or_product(db_session, make_user, make_product):
    user = make_user()
    product = make_product()
    service = CartService(db_session)

    with pytest.raises(ResourceNotFoundException, match="Cart not found with cartId: 999"):
        service.add_product_to_cart(999, product.id, 1)
    with pytest.raises(ResourceNotFoundException, match="Product not found with productId: 999"):
        service.add_product_to_cart(user.cart.id, 999, 1)


def test_update_quantity_recomputes_total(db_session, make_user, make_product, fill_cart):
    user = make_user()
    lamp = make_product("Desk Lamp", price=50.0, quantity=10)
    mug = make_product("Mug", price=10.0, quantity=10)
    fill_cart(user, (lamp, 1), (mug, 2))
    service = CartService(db_session)

    dto = service.update_product_quantity_in_cart(user.cart.id, lamp.id, 3)

    assert dto.total_price == pytest.approx(170.0)
    assert {line.product.product_name: line.quantity for line in dto.products} == {"Desk Lamp": 3, "Mug": 2}

    with pytest.raises(APIException):
        service.update_product_quantity_in_cart(user.cart.id, lamp.id, 11)
    with pytest.raises(ResourceNotFoundException):
        service.update_product_quantity_in_cart(user.cart.id, make_product("Other").id, 1)


def test_delete_line_keeps_stock(db_session, make_user, make_product, fill_cart):
    user = make_user()
    product = make_product("Desk Lamp", price=50.0, quantity=10)
    fill_cart(user, (product, 4))
    service = CartService(db_session)

    message = service.delete_product_from_cart(user.cart.id, product.id)

    assert message == "Product Desk Lamp removed from the cart !!!"
    cart = service.get_cart(user.email, user.cart.id)
    assert cart.products == []
    assert cart.total_price == 0.0
    assert db_session.get(Product, product.id).quantity == 10

    with pytest.raises(ResourceNotFoundException):
        service.delete_product_from_cart(user.cart.id, product.id)


def test_get_cart_requires_matching_email(db_session, make_user):
    user = make_user()

    with pytest.raises(ResourceNotFoundException):
        CartService(db_session).get_cart("stranger@example.com", user.cart.id)


# --- HTTP ---

def test_cart_endpoints(test_client, make_user, make_product, headers_for):
    user = make_user()
    cart_id = user.cart.id
    product = make_product(price=20.0, quantity=5)
    headers = headers_for(user)

    added = test_client.post(f"/api/public/carts/{cart_id}/products/{product.id}/quantity/2", headers=headers)
    assert added.status_code == 201, added.text
    assert added.json()["totalPrice"] == 40.0
    assert added.json()["products"][0]["productPrice"] == 20.0

    updated = test_client.put(f"/api/public/carts/{cart_id}/products/{product.id}/quantity/5", headers=headers)
    assert updated.status_code == 200
    assert updated.json()["totalPrice"] == 100.0

    fetched = test_client.get(f"/api/public/users/{user.email}/carts/{cart_id}", headers=headers)
    assert fetched.json()["cartId"] == cart_id

    deleted = test_client.delete(f"/api/public/carts/{cart_id}/product/{product.id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json().endswith("removed from the cart !!!")


def test_cart_endpoint_errors(test_client, make_user, make_product, headers_for):
    owner = make_user("owner@example.com")
    other = make_user("other@example.com")
    product = make_product(quantity=1)

    too_many = test_client.post(
        f"/api/public/carts/{owner.cart.id}/products/{product.id}/quantity/2", headers=headers_for(owner)
    )
    zero = test_client.post(
        f"/api/public/carts/{owner.cart.id}/products/{product.id}/quantity/0", headers=headers_for(owner)
    )
    foreign = test_client.post(
        f"/api/public/carts/{owner.cart.id}/products/{product.id}/quantity/1", headers=headers_for(other)
    )

    assert too_many.status_code == 400
    assert zero.status_code == 422
    assert foreign.status_code == 403


def test_total_follows_the_lines(db_session, make_user, make_product, fill_cart):
    user = make_user()
    dime = make_product("Sticker", price=0.1, quantity=10)
    fifth = make_product("Pencil", price=0.2, quantity=10)
    fill_cart(user, (dime, 1), (fifth, 1))
    service = CartService(db_session)

    service.update_product_quantity_in_cart(user.cart.id, dime.id, 7)
    service.delete_product_from_cart(user.cart.id, fifth.id)
    service.delete_product_from_cart(user.cart.id, dime.id)

    db_session.expire_all()
    assert db_session.get(Cart, user.cart.id).total_price == 0.0

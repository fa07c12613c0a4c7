"""Registration, login and the current-user endpoint."""

from models import Cart, Log, User


def _register(test_client, email="new@example.com", password="secret123"):
    return test_client.post(
        "/api/register",
        json={"email": email, "password": password, "first_name": "Ada", "last_name": "Lovelace"},
    )


def test_register_creates_customer_with_empty_cart(test_client, db_session):
    response = _register(test_client, email="New@Example.com")

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["email"] == "new@example.com"
    assert body["role"] == "customer"

    user = db_session.query(User).filter(User.email == "new@example.com").one()
    cart = db_session.query(Cart).filter(Cart.user_id == user.id).one()
    assert body["cart_id"] == cart.id
    assert cart.total_price == 0.0
    assert cart.items == []


def test_register_duplicate_email(test_client, db_session):
    _register(test_client)

    response = _register(test_client, email="NEW@example.com")

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"
    assert db_session.query(Log).filter(Log.action == "REGISTER", Log.status == "FAIL").count() == 1


def test_register_short_password(test_client):
    assert _register(test_client, password="123").status_code == 422


def test_login_and_me(test_client):
    _register(test_client)

    login = test_client.post("/api/login", json={"email": "new@example.com", "password": "secret123"})
    assert login.status_code == 200
    token = login.json()["access_token"]
    assert login.json()["token_type"] == "bearer"

    me = test_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"
    assert me.json()["cart_id"] is not None


def test_login_wrong_password(test_client):
    _register(test_client)

    response = test_client.post("/api/login", json={"email": "new@example.com", "password": "wrong-one"})

    assert response.status_code == 401


def test_me_rejects_bad_token(test_client):
    response = test_client.get("/api/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401

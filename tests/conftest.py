"""Pytest configuration and fixtures shared by the service and API tests."""

import os

# Point the application at a throwaway database before config.py is imported
os.environ["DATABASE_URL"] = "sqlite://"

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import Cart, Coupon, Product, User
from services.cart_service import CartService
from services.product_service import special_price
from utils.hashing import get_password_hash
from utils.tokenJWT import create_access_token


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def test_engine():
    """Create test database engine with all tables."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create test database session."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)()
    yield session
    session.close()


@pytest.fixture
def test_client(db_session) -> Generator[TestClient, None, None]:
    """FastAPI test client whose requests run on the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(email: str = "buyer@example.com", role: str = "customer") -> User:
        user = User(
            email=email,
            password_hash=get_password_hash("secret123"),
            role=role,
            first_name="Test",
            last_name="User",
        )
        db_session.add(user)
        db_session.add(Cart(user=user, total_price=0.0))
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name: str = "Desk Lamp", price: float = 50.0, quantity: int = 10, discount: float = 0.0) -> Product:
        product = Product(
            name=name,
            description=f"{name} description",
            quantity=quantity,
            price=price,
            discount=discount,
            special_price=special_price(price, discount),
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_coupon(db_session):
    def _make(name: str = "WELCOME", discount_percentage: int = 10) -> Coupon:
        coupon = Coupon(name=name, discount_percentage=discount_percentage)
        db_session.add(coupon)
        db_session.commit()
        db_session.refresh(coupon)
        return coupon

    return _make


@pytest.fixture
def fill_cart(db_session):
    """Put (product, quantity) pairs into a user's cart through the cart service."""

    def _fill(user: User, *lines):
        service = CartService(db_session)
        for product, quantity in lines:
            service.add_product_to_cart(user.cart.id, product.id, quantity)
        db_session.refresh(user.cart)
        return user.cart

    return _fill


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin@example.com", role="admin")


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers(admin)


@pytest.fixture
def headers_for():
    return auth_headers

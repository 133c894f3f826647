import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from xsplatform.app.config import Config
from xsplatform.app.factory import create_app
from xsplatform.app.extensions import db
from xsplatform.app.models import User, CartItem, WishlistItem
from werkzeug.security import generate_password_hash

TEST_EMAIL = "test@test.com"
TEST_PASSWORD = "Test123!"


class TestingConfig(Config):
    TESTING = True
    # Use SQLite in tests for simplicity.
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    JWT_SECRET = "test-jwt-secret"
    CACHE_HEADER_SHELL = False


@pytest.fixture()
def make_app():
    """Build an app with per-test config overrides."""

    def _make(**overrides):
        config = type("OverrideConfig", (TestingConfig,), overrides)
        app = create_app(config)
        with app.app_context():
            db.create_all()
        return app

    return _make


@pytest.fixture()
def app(make_app):
    app = make_app()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def user(app):
    """A stored user with two cart lines (3 + 2) and one wishlist entry."""
    with app.app_context():
        u = User(
            email=TEST_EMAIL,
            password_hash=generate_password_hash(TEST_PASSWORD),
            first_name="Test",
            last_name="User",
        )
        db.session.add(u)
        db.session.flush()
        db.session.add_all([
            CartItem(user_id=u.id, product_id="p1", name="Product 1", price_cents=2999, quantity=3),
            CartItem(user_id=u.id, product_id="p2", name="Product 2", price_cents=4999, quantity=2),
            WishlistItem(user_id=u.id, product_id="p3", name="Product 3", price_cents=999),
        ])
        db.session.commit()
        return u.id


def login(client, email=TEST_EMAIL, password=TEST_PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})

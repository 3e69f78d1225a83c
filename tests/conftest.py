"""Pytest fixtures for the storefront service."""

import os
import tempfile

# must be in place before anything imports storefront settings
_TMP_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/storefront.db"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CARD_PAYMENT_DELAY_SECONDS"] = "0"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from storefront.api.deps import create_access_token, get_cart_store, get_payment_service
from storefront.data.database import Base, get_db, make_engine
from storefront.data.models import ProductModel, UserModel
from storefront.domain.schemas import Identity, OrderCreate
from storefront.services.cart_store import CartStore
from storefront.services.payment_service import PaymentService


class FakeRedis:
    """Dict-backed stand-in for the handful of Redis calls CartStore makes."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, name, value, ex=None):
        self.data[name] = value
        self.ttls[name] = ex
        return True

    def delete(self, key):
        existed = key in self.data
        self.data.pop(key, None)
        self.ttls.pop(key, None)
        return int(existed)


class RecordingNotifier:
    def __init__(self):
        self.placed = []
        self.status_changes = []

    def send_order_placed(self, user_id, order_id, total_price):
        self.placed.append((user_id, order_id, total_price))

    def send_status_changed(self, user_id, order_id, status):
        self.status_changes.append((user_id, order_id, status))


ADDRESS = {
    "fullName": "Jane Doe",
    "email": "jane@example.com",
    "addressLine1": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "postalCode": "62701",
    "country": "US",
}


def order_payload(*lines, total=None, **extra) -> dict:
    """lines are (product, quantity) or (product, quantity, size) tuples."""
    items = []
    for line in lines:
        product, quantity = line[0], line[1]
        item = {
            "productId": product.id,
            "name": product.name,
            "quantity": quantity,
            "price": product.price,
        }
        if len(line) > 2:
            item["size"] = line[2]
        items.append(item)
    if total is None:
        total = sum(i["price"] * i["quantity"] for i in items)
    data = {"items": items, "totalPrice": total, "shippingAddress": dict(ADDRESS)}
    data.update(extra)
    return data


def make_order(*lines, total=None, **extra) -> OrderCreate:
    return OrderCreate.model_validate(order_payload(*lines, total=total, **extra))


def auth_header(subject: str, email: str = "") -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject, email)}"}


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path}/test.db")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cart_store(fake_redis):
    return CartStore(client=fake_redis, ttl=3600)


def _add_user(db, subject, role="customer") -> Identity:
    user = UserModel(subject=subject, email=f"{subject}@example.com", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return Identity(id=user.id, role=user.role, email=user.email)


@pytest.fixture
def customer(db) -> Identity:
    return _add_user(db, "customer-1")


@pytest.fixture
def other_customer(db) -> Identity:
    return _add_user(db, "customer-2")


@pytest.fixture
def admin(db) -> Identity:
    return _add_user(db, "admin-1", role="admin")


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name="Linen Shirt", price=4999, stock=10, sizes=None, **kwargs):
        counter["n"] += 1
        product = ProductModel(
            name=name,
            slug=kwargs.pop("slug", f"product-{counter['n']}"),
            price=price,
            stock=stock,
            sizes=sizes or [],
            images=kwargs.pop("images", [f"https://cdn.example.com/{counter['n']}.jpg"]),
            **kwargs,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def stock_of(session_factory):
    """Reads stock through a fresh session so no cached state leaks in."""

    def _stock(product_id):
        session = session_factory()
        try:
            return session.get(ProductModel, product_id).stock
        finally:
            session.close()

    return _stock


@pytest.fixture
def client(session_factory, cart_store):
    from storefront.main import create_app

    app = create_app(create_tables=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cart_store] = lambda: cart_store
    app.dependency_overrides[get_payment_service] = lambda: PaymentService(delay_seconds=0)

    with TestClient(app) as c:
        yield c

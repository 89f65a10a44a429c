import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "0"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_notification_service
from storefront.data.database import Base, get_db
from storefront.data.seed import seed_db
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService
from storefront.domain.schemas import RegisterIn


class FakeRedis:
    """In-memory stand-in for the two Redis commands the checkout lock uses."""

    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, total):
        self.sent.append((user_id, order_id, total))


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded_db(db):
    seed_db(db)
    return db


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def lock_service(fake_redis):
    return LockService(client=fake_redis)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def cart_service(seeded_db):
    return CartService(seeded_db)


@pytest.fixture()
def order_service(seeded_db, lock_service, notifier):
    return OrderService(seeded_db, lock_service=lock_service, notification_service=notifier)


@pytest.fixture()
def customer(seeded_db):
    """A registered customer: (user id, token)."""
    auth = AuthService(seeded_db).register(
        RegisterIn(name="Alice", email="alice@example.com", password="secret-pw")
    )
    return auth.user.id, auth.token


@pytest.fixture()
def app(seeded_db, lock_service, notifier):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: seeded_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notifier
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)
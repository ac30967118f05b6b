import time
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.config as config_mod
import storefront.db as db
from storefront.identity import VerifiedIdentity
from storefront.limiter import limiter
from storefront.main import app
from storefront.models import Base, Category, MenuItem, User
from storefront.routes.cart import CART_STORAGE

TEST_JWT_KEY = "test-signing-key"

ADMIN_SUBJECT = "admin-1"
CUSTOMER_SUBJECT = "cust-1"
OTHER_SUBJECT = "cust-2"


def make_token(subject, key=TEST_JWT_KEY, expires_in=3600, **claims):
    """Mint an HS256 identity token like the identity provider would."""
    payload = {"sub": subject, "exp": int(time.time()) + expires_in}
    payload.update(claims)
    return jwt.encode(payload, key, algorithm="HS256")


@pytest.fixture(autouse=True)
def identity_config(monkeypatch):
    """Point token verification at the test key."""
    monkeypatch.setattr(config_mod, "IDENTITY_JWT_KEY", TEST_JWT_KEY)
    monkeypatch.setattr(config_mod, "IDENTITY_JWT_ALGORITHMS", ["HS256"])
    monkeypatch.setattr(config_mod, "IDENTITY_AUDIENCE", "")
    monkeypatch.setattr(config_mod, "IDENTITY_ISSUER", "")
    monkeypatch.setattr(config_mod, "STORE_TIMEZONE", "UTC")


@pytest.fixture
def engine():
    """In-memory SQLite engine. StaticPool so all sessions share one database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def menu(db_session):
    """
    Two categories and four items:

    - burger (5.00) and fries (3.50): available
    - soup (4.00): unavailable
    - lemonade (3.00): available, in the second category
    """
    mains = Category(name="Mains", description="Hot food", display_order=1, is_active=True)
    drinks = Category(name="Drinks", description=None, display_order=2, is_active=True)
    db_session.add_all([mains, drinks])
    db_session.flush()

    burger = MenuItem(name="Burger", description="Beef", price=Decimal("5.00"),
                      category_id=mains.id, is_available=True, is_featured=True)
    fries = MenuItem(name="Fries", description="", price=Decimal("3.50"),
                     category_id=mains.id, is_available=True, is_featured=False)
    soup = MenuItem(name="Soup", description="Tomato", price=Decimal("4.00"),
                    category_id=mains.id, is_available=False, is_featured=False)
    lemonade = MenuItem(name="Lemonade", description="", price=Decimal("3.00"),
                        category_id=drinks.id, is_available=True, is_featured=False)
    db_session.add_all([burger, fries, soup, lemonade])
    db_session.commit()

    return SimpleNamespace(
        mains_id=mains.id,
        drinks_id=drinks.id,
        burger_id=burger.id,
        fries_id=fries.id,
        soup_id=soup.id,
        lemonade_id=lemonade.id,
    )


@pytest.fixture
def people(db_session):
    """An admin and two customers, all with records."""
    admin = User(external_id=ADMIN_SUBJECT, email="admin@example.com", name="Ada Admin", is_admin=True)
    customer = User(external_id=CUSTOMER_SUBJECT, email="cust@example.com", name="Cara Customer",
                    phone="555-0100", address="1 Main St", is_admin=False)
    other = User(external_id=OTHER_SUBJECT, email="other@example.com", name="Otto Other", is_admin=False)
    db_session.add_all([admin, customer, other])
    db_session.commit()

    return SimpleNamespace(
        admin_id=admin.id,
        customer_id=customer.id,
        other_id=other.id,
        admin=VerifiedIdentity(subject=ADMIN_SUBJECT, email="admin@example.com", name="Ada Admin"),
        customer=VerifiedIdentity(subject=CUSTOMER_SUBJECT, email="cust@example.com", name="Cara Customer"),
        other=VerifiedIdentity(subject=OTHER_SUBJECT, email="other@example.com", name="Otto Other"),
    )


@pytest.fixture
def client(engine, session_factory, monkeypatch):
    """Shared FastAPI TestClient backed by the in-memory database."""
    # Patch the db module used by the app
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", session_factory)

    # Override FastAPI DB dependency
    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    CART_STORAGE.clear()
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    CART_STORAGE.clear()
    limiter.reset()


@pytest.fixture
def mint_token():
    """Returns the token minting function."""
    return make_token


@pytest.fixture
def auth_headers():
    """Returns a function building an Authorization header for a subject."""
    def _headers(subject, **claims):
        return {"Authorization": f"Bearer {make_token(subject, **claims)}"}
    return _headers

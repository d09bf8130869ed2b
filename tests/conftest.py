# tests/conftest.py
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import agrichain.models  # noqa: F401
from agrichain.core.security import create_access_token, hash_password
from agrichain.db.database import Base, get_db
from agrichain.main import app
from agrichain.models.account import Account, AccountRole
from agrichain.models.inventory import Farmer, Product
from agrichain.services.ledger import InventoryLedger
from agrichain.services.scope import for_caller

TEST_PASSWORD = "secret-pass"
# Hash once; bcrypt is deliberately slow.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _account(db_session, username: str, name: str, role: AccountRole) -> Account:
    account = Account(
        username=username,
        name=name,
        role=role,
        email=f"{username}@example.in",
        password_hash=TEST_PASSWORD_HASH,
        is_active=True,
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def cooperative(db_session):
    return _account(db_session, "greenvalley", "Green Valley FPO", AccountRole.FPO)


@pytest.fixture
def other_cooperative(db_session):
    return _account(db_session, "sunrise", "Sunrise FPO", AccountRole.FPO)


@pytest.fixture
def aggregator(db_session):
    return _account(db_session, "admin", "MAHAFPC Admin", AccountRole.MAHAFPC)


@pytest.fixture
def retailer(db_session):
    return _account(db_session, "raigad", "Raigad Market", AccountRole.RETAILER)


@pytest.fixture
def wheat(db_session):
    product = Product(name="Wheat", unit="kg", category="Grains")
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def rice(db_session):
    product = Product(name="Rice", unit="kg", category="Grains")
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture
def farmer(db_session, cooperative):
    record = Farmer(
        cooperative_id=cooperative.id,
        name="Ramesh Patil",
        mobile_number="9800000001",
        village_name="Khed",
    )
    db_session.add(record)
    db_session.commit()
    db_session.refresh(record)
    return record


@pytest.fixture
def other_farmer(db_session, other_cooperative):
    record = Farmer(
        cooperative_id=other_cooperative.id,
        name="Sunil Jadhav",
        mobile_number="9800000002",
        village_name="Sinnar",
    )
    db_session.add(record)
    db_session.commit()
    db_session.refresh(record)
    return record


@pytest.fixture
def cooperative_scope(cooperative):
    return for_caller(cooperative.role, cooperative.id)


@pytest.fixture
def other_cooperative_scope(other_cooperative):
    return for_caller(other_cooperative.role, other_cooperative.id)


@pytest.fixture
def aggregator_scope(aggregator):
    return for_caller(aggregator.role, aggregator.id)


@pytest.fixture
def retailer_scope(retailer):
    return for_caller(retailer.role, retailer.id)


@pytest.fixture
def stock_of(db_session):
    """Current quantity for (cooperative, product), zero when no row exists."""

    def _stock_of(cooperative_id: int, product_id: int) -> Decimal:
        return InventoryLedger(db_session).quantity_of(cooperative_id, product_id)

    return _stock_of


@pytest.fixture
def account_password():
    return TEST_PASSWORD


@pytest.fixture
def auth_headers():
    def _headers(account: Account) -> dict[str, str]:
        token = create_access_token(subject=str(account.id), role=account.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers

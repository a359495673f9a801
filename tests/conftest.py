"""
Pytest fixtures for the Zaiko test suite.

Each test gets its own file-backed SQLite database (WAL mode, so threads in
the concurrency tests can read while another writes) and a fresh lock
registry.
"""
import pytest
from fastapi.testclient import TestClient

from zaiko.core import Base, get_db, create_db_engine, create_session_factory
from zaiko.core.locks import StockLockRegistry
from zaiko.core.security import get_password_hash
from zaiko.models import AppUser, Category, Product, Warehouse
from zaiko.schemas.stock import StockMovementRequest
from zaiko.services import StockService

TEST_PASSWORD = "secret"


@pytest.fixture
def engine(tmp_path):
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'zaiko_test.db'}")
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def locks():
    return StockLockRegistry()


@pytest.fixture
def stock_service(db, locks):
    return StockService(db, locks)


@pytest.fixture
def user(db):
    user = AppUser(username="tester", hashed_password=get_password_hash(TEST_PASSWORD), is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def category(db):
    category = Category(name="Consumables")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def warehouse(db):
    warehouse = Warehouse(name="Tokyo Main", location="Koto-ku")
    db.add(warehouse)
    db.commit()
    db.refresh(warehouse)
    return warehouse


@pytest.fixture
def other_warehouse(db):
    warehouse = Warehouse(name="Osaka Annex")
    db.add(warehouse)
    db.commit()
    db.refresh(warehouse)
    return warehouse


@pytest.fixture
def product(db, category):
    product = Product(code="P-001", name="Printer Paper A4", unit="box", category_id=category.id)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def movement():
    """Build a StockMovementRequest from ids"""
    def _build(product_id, warehouse_id, quantity, note=None):
        return StockMovementRequest(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            note=note
        )
    return _build


@pytest.fixture
def client(session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.stock_locks = StockLockRegistry()
    # Not used as a context manager: lifespan would create tables on the configured engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client, user):
    response = client.post("/api/auth/login", json={"username": user.username, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_client(client, auth_headers):
    """TestClient that sends the signed-in user's bearer token on every request"""
    client.headers.update(auth_headers)
    return client

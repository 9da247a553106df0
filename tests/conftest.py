"""
Shared fixtures.

The environment is set before anything from storefront is imported:
sqlite file database, eager celery (no broker), no seeded catalog.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="donpico-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["SEED_CATALOG"] = "0"
os.environ["API_PREFIX"] = "/api"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.data.database import Base, engine, SessionLocal
from storefront.data.models import ProductModel
from storefront.api.routers.orders import get_submission_lock


class InMemorySubmissionLock:
    """Test double for the redis-backed SubmissionLock."""

    def __init__(self):
        self.keys = {}

    def acquire(self, idempotency_key: str, owner: str) -> bool:
        if idempotency_key in self.keys:
            return False
        self.keys[idempotency_key] = owner
        return True

    def complete(self, idempotency_key: str, owner: str, order_id: int) -> bool:
        if self.keys.get(idempotency_key) != owner:
            return False
        self.keys[idempotency_key] = f"order:{order_id}"
        return True

    def lookup(self, idempotency_key: str) -> int | None:
        value = self.keys.get(idempotency_key, "")
        if value.startswith("order:"):
            return int(value[len("order:"):])
        return None

    def release(self, idempotency_key: str, owner: str) -> bool:
        if self.keys.get(idempotency_key) == owner:
            del self.keys[idempotency_key]
            return True
        return False


@pytest.fixture(autouse=True)
def clean_database():
    """Every test starts with empty tables."""
    Base.metadata.create_all(bind=engine)
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def submission_lock():
    return InMemorySubmissionLock()


@pytest.fixture
def test_client(submission_lock):
    app.dependency_overrides[get_submission_lock] = lambda: submission_lock

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def catalog(db_session):
    """A small catalog, returns {name: id}."""
    rows = [
        ProductModel(name="Leche entera 1L", category="Lácteos", price=Decimal("4200"),
                     description="Leche entera pasteurizada", image="leche.jpg"),
        ProductModel(name="Queso campesino", category="Lácteos", price=Decimal("12500"),
                     description="Queso fresco", image="queso.jpg"),
        ProductModel(name="Pan tajado", category="Panadería", price=Decimal("6500"),
                     description="Pan blanco tajado", image="pan.jpg"),
        ProductModel(name="Café molido 500g", category="Despensa", price=Decimal("18500"),
                     description="Café colombiano", image="cafe.jpg"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return {p.name: p.id for p in rows}


@pytest.fixture
def make_order_payload():
    """Builds a checkout payload in wire format."""

    def _make(items=None, subtotal="20000", envio="6000", total="26000", metodo="efectivo"):
        if items is None:
            items = [{"productoId": "1", "nombre": "Arroz 1kg", "cantidad": 2, "precio": "10000"}]
        return {
            "items": items,
            "direccionEntrega": {
                "calle": "Calle 10 # 5-20",
                "numero": "",
                "colonia": "",
                "ciudad": "",
                "codigoPostal": "",
                "referencias": "Tocar el timbre",
            },
            "contacto": {"nombre": "Ana Gómez", "telefono": "3001234567"},
            "metodoPago": metodo,
            "totales": {"subtotal": subtotal, "envio": envio, "total": total},
            "instrucciones": "Tocar el timbre",
        }

    return _make

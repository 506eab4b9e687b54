# backend/product_service/tests/conftest.py

import itertools
import logging
import os
import tempfile

import pytest

# Point the app at a throwaway SQLite database and image directory before it is imported
_TEST_ROOT = tempfile.mkdtemp(prefix="product_service_tests_")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(_TEST_ROOT, 'test_products.db')}"
)
os.environ.setdefault("IMAGE_DIR", os.path.join(_TEST_ROOT, "image"))
os.environ.setdefault("DB_CONNECT_RETRY_DELAY_SECONDS", "1")

from app.db import Base, SessionLocal, engine, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.repository import ProductRepository  # noqa: E402
from app.services import ProductService  # noqa: E402
from app.storage import ImageStore, get_image_store  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64

RED_LIPSTICK = {
    "product_name": "Red Lipstick",
    "details": "Matte finish, long-lasting",
    "size": "M",
    "color": "Red",
    "category": "Cosmetics",
}


class TickingClock:
    """Returns a new whole second on every call so stored names never collide."""

    def __init__(self, start=1_700_000_000):
        self._ticks = itertools.count(start)

    def __call__(self):
        return float(next(self._ticks))


# --- Pytest Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def setup_database_for_tests():
    # Explicitly drop all tables first to ensure a clean slate for the session
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session_for_test():
    connection = engine.connect()
    transaction = connection.begin()
    db = SessionLocal(bind=connection)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    try:
        yield db
    finally:
        transaction.rollback()
        db.close()
        connection.close()
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture(scope="function")
def image_store(tmp_path):
    store = ImageStore(tmp_path / "image", base_url="/image", clock=TickingClock())
    app.dependency_overrides[get_image_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_image_store, None)


@pytest.fixture(scope="function")
def service(db_session_for_test, image_store):
    return ProductService(ProductRepository(db_session_for_test), image_store)


@pytest.fixture(scope="function")
def client(db_session_for_test, image_store):
    with TestClient(app) as test_client:
        yield test_client

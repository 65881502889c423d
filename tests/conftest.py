import os
import uuid

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

import mongomock_motor
import pytest
from httpx import ASGITransport, AsyncClient

from inventory_api.db.models import ProductCreate
from inventory_api.db.repositories.product_repository import ProductRepository
from inventory_api.main import app


@pytest.fixture
def mongo_db(monkeypatch):
    mock_client = mongomock_motor.AsyncMongoMockClient()
    test_db = mock_client[f"test_{uuid.uuid4().hex}"]

    monkeypatch.setattr("inventory_api.db.mongo_client._client", mock_client)
    monkeypatch.setattr("inventory_api.db.mongo_client.get_database", lambda: test_db)
    yield test_db


@pytest.fixture
def product_repo(mongo_db):
    return ProductRepository(mongo_db)


@pytest.fixture
def make_product(product_repo):
    async def _make(**fields) -> str:
        fields.setdefault("unit", "UNIT")
        doc = await product_repo.create(ProductCreate(**fields).to_document())
        return str(doc["_id"])
    return _make


@pytest.fixture
async def client(mongo_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

"""Pytest fixtures for the catalog client and products API tests."""

import json

import httpx
import pytest

from eyewear_catalog.api.products_handler import ProductsHandler
from eyewear_catalog.database.backup_store import InMemoryKeyValueStore, LocalBackupStore
from eyewear_catalog.database.postgres_real import ProductStore


@pytest.fixture
def store(tmp_path):
    """File-backed SQLite product store with the schema provisioned."""
    s = ProductStore(f"sqlite:///{tmp_path / 'catalog.db'}")
    s.ensure_schema()
    return s


@pytest.fixture
def handler(store):
    return ProductsHandler(store)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def backup(kv):
    return LocalBackupStore(kv)


def handler_transport(products_handler: ProductsHandler) -> httpx.MockTransport:
    """Route httpx requests straight into a ProductsHandler, like the deployed API would."""

    def _respond(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/health"):
            return httpx.Response(200, json={"status": "ok"})
        body = json.loads(request.content) if request.content else None
        result = products_handler.handle(request.method, dict(request.url.params), body)
        return httpx.Response(result.status_code, json=result.body)

    return httpx.MockTransport(_respond)


@pytest.fixture
def api_transport(handler):
    return handler_transport(handler)

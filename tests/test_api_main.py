import pytest
from fastapi.testclient import TestClient

from eyewear_catalog.api.main import create_app
from eyewear_catalog.utils.config_loader import CatalogConfig


@pytest.fixture
def client(store):
    return TestClient(create_app(config=CatalogConfig(), store=store))


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_crud_round_trip_over_http(client):
    created = client.post("/api/products", json={"name": "Aviator Classic", "price": 129.99})
    assert created.status_code == 201
    product_id = created.json()["data"]["id"]

    listing = client.get("/api/products")
    assert listing.status_code == 200
    assert listing.json()["count"] == 1

    updated = client.put("/api/products", params={"id": product_id}, json={"name": "Aviator II", "price": 99})
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Aviator II"

    deleted = client.delete("/api/products", params={"id": product_id})
    assert deleted.status_code == 200
    assert client.get("/api/products", params={"id": product_id}).status_code == 404


def test_put_unknown_id_is_404(client):
    response = client.put("/api/products", params={"id": 7}, json={"name": "Ghost", "price": 1})
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_delete_without_id_is_400(client):
    response = client.delete("/api/products")
    assert response.status_code == 400
    assert response.json()["error"] == "Product ID is required"


def test_plain_options_returns_empty_object(client):
    response = client.options("/api/products")
    assert response.status_code == 200
    assert response.json() == {}


def test_other_verbs_are_405(client):
    response = client.patch("/api/products", json={"name": "x"})
    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}


def test_invalid_json_body_is_500(client):
    response = client.post("/api/products", content=b"{broken", headers={"Content-Type": "application/json"})
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_cors_headers(client):
    response = client.get("/api/products", headers={"Origin": "https://shop.example.com"})
    assert response.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in response.headers

    preflight = client.options(
        "/api/products",
        headers={
            "Origin": "https://shop.example.com",
            "Access-Control-Request-Method": "DELETE",
            "Access-Control-Request-Headers": "X-Requested-With",
        },
    )
    assert preflight.status_code == 200
    assert "DELETE" in preflight.headers["access-control-allow-methods"]


def test_missing_database_url_is_reported_as_500():
    client = TestClient(create_app(config=CatalogConfig()))
    response = client.get("/api/products")
    assert response.status_code == 500
    assert "DATABASE_URL" in response.json()["message"]


def test_store_is_built_once_when_database_url_is_configured(tmp_path):
    config = CatalogConfig(server={"database_url": f"sqlite:///{tmp_path / 'catalog.db'}"})
    app = create_app(config=config)

    handler = app.state.products_handler
    client = TestClient(app)
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/products").status_code == 200
    assert app.state.products_handler is handler


def test_unknown_status_is_rejected(client):
    response = client.post("/api/products", json={"name": "Odd", "price": 5, "status": "discontinued"})
    assert response.status_code == 500
    assert "discontinued" in response.json()["message"]
    assert client.get("/api/products").json()["count"] == 0

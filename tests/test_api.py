"""Routing envelope: unknown paths, session handling, error shapes."""
import pytest
from sqlalchemy.exc import OperationalError

from services.product_service.service import ProductService
from shared.config import settings


def storage_down(*args, **kwargs):
    raise OperationalError("SELECT products", {}, Exception("connection refused"))


class TestRouting:

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"service": "shopbot", "status": "running"}

    async def test_metrics_exposed(self, client):
        response = await client.get("/metrics")
        assert response.status_code == 200
        assert "shop_cart_additions_total" in response.text

    @pytest.mark.parametrize("method, path", [
        ("GET", "nope"),
        ("POST", "products/explode"),
        ("GET", "conversations/unknown"),
        ("GET", "cart/add"),
    ])
    async def test_unknown_endpoint_envelope(self, client, method, path):
        response = await client.request(method, f"/api/{path}")
        assert response.status_code == 200
        assert response.json() == {"success": False, "message": f"Invalid endpoint: {path}"}

    async def test_session_routes_require_session(self, client):
        response = await client.post("/api/conversations/start", headers={"X-Session-Id": ""})
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_catalog_routes_do_not_need_session(self, client, products):
        response = await client.get("/api/products", headers={"X-Session-Id": ""})
        assert response.status_code == 200


class TestErrorEnvelopes:

    async def test_validation_message_names_field(self, client, products):
        response = await client.post("/api/cart/add", json={"quantity": 2})
        body = response.json()
        assert response.status_code == 422
        assert body["error"] == "Validation failed"
        assert body["fields"] == ["productId: Field required"]

    async def test_storage_failure_hides_detail_by_default(self, client, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", storage_down)
        monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAIL", False)

        response = await client.get("/api/products")

        assert response.status_code == 500
        assert response.json() == {
            "success": False, "error": "Server error", "message": "Internal storage error",
        }

    async def test_storage_failure_detail_when_enabled(self, client, monkeypatch):
        monkeypatch.setattr(ProductService, "list_products", storage_down)
        monkeypatch.setattr(settings, "EXPOSE_ERROR_DETAIL", True)

        response = await client.get("/api/products")

        assert response.status_code == 500
        assert "connection refused" in response.json()["message"]

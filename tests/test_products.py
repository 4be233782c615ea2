"""Catalog endpoints and ProductService queries."""
import pytest

from services.product_service.service import ProductService


class TestCatalogQueries:

    async def test_list_all_is_id_ordered(self, db, products):
        result = await ProductService.list_products(db)
        assert [p.id for p in result] == sorted(p.id for p in products)

    async def test_cheapest_orders_by_price_and_caps(self, db, products):
        result = await ProductService.list_cheapest(db, limit=2)
        assert [p.name for p in result] == ["Yoga Mat", "Wireless Mouse"]

    async def test_fastest_filters_by_warehouse(self, db, products):
        result = await ProductService.list_fastest(db, "Cikarang", 3)
        assert [p.name for p in result] == ["Football", "Gaming Laptop"]
        assert all(p.warehouse == "Cikarang" for p in result)

    async def test_best_rated_orders_descending(self, db, products):
        result = await ProductService.list_best_rated(db, 3)
        assert [p.rating for p in result] == [4.9, 4.7, 4.2]

    async def test_search_is_case_insensitive_on_name_and_category(self, db, products):
        by_name = await ProductService.search(db, "LAPTOP")
        by_category = await ProductService.search(db, "Sport")
        assert [p.name for p in by_name] == ["Gaming Laptop"]
        assert {p.name for p in by_category} == {"Football", "Yoga Mat"}

    async def test_blank_search_returns_nothing(self, db, products):
        assert await ProductService.search(db, "   ") == []

    async def test_search_treats_wildcards_literally(self, db, products):
        assert await ProductService.search(db, "%") == []
        assert await ProductService.search(db, "_") == []
        assert await ProductService.search(db, "mo_se") == []
        assert [p.name for p in await ProductService.search(db, "mouse")] == ["Wireless Mouse"]

    async def test_category_is_exact_match(self, db, products):
        assert len(await ProductService.list_by_category(db, "electronics")) == 2
        assert await ProductService.list_by_category(db, "electro") == []


class TestProductEndpoints:

    async def test_products_use_external_field_names(self, client, products):
        response = await client.get("/api/products")
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        first = body["data"][0]
        assert first["deliveryDays"] == 2
        assert "delivery_days" not in first
        assert first["price"] == pytest.approx(899.99)

    async def test_cheapest_default_limit_is_three(self, client, products):
        body = (await client.get("/api/products/cheapest")).json()
        assert len(body["data"]) == 3

    async def test_fastest_accepts_location_and_limit(self, client, products):
        body = (await client.get("/api/products/fastest", params={"location": "Jakarta", "limit": 5})).json()
        assert [p["name"] for p in body["data"]] == ["Wireless Mouse"]

    async def test_best_respects_limit(self, client, products):
        body = (await client.get("/api/products/best", params={"limit": 1})).json()
        assert [p["name"] for p in body["data"]] == ["Football"]

    async def test_search_and_category_routes(self, client, products):
        search = (await client.get("/api/products/search", params={"q": "mouse"})).json()
        category = (await client.get("/api/products/category/sports")).json()
        assert [p["name"] for p in search["data"]] == ["Wireless Mouse"]
        assert len(category["data"]) == 2

    async def test_add_product(self, client):
        response = await client.post("/api/products/add", json={
            "name": "Tennis Racket", "price": 120.0, "image": "https://img.example/racket.png",
            "category": "sports", "rating": 4.5, "reviews": 3, "warehouse": "Cikarang",
            "delivery_days": 3, "stock": 7,
        })
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["message"] == "Product added successfully"

        listed = (await client.get("/api/products")).json()["data"]
        assert [p["id"] for p in listed] == [body["productId"]]
        assert listed[0]["deliveryDays"] == 3

    async def test_add_product_rejects_non_numeric_price(self, client):
        response = await client.post("/api/products/add", json={
            "name": "Broken", "price": "cheap", "delivery_days": 1, "stock": 1,
        })
        body = response.json()

        assert response.status_code == 422
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert "price" in body["message"]

    async def test_add_product_requires_stock(self, client):
        response = await client.post("/api/products/add", json={
            "name": "No stock", "price": 1.0, "delivery_days": 1,
        })
        assert response.status_code == 422
        assert "stock" in response.json()["message"]

    async def test_delete_missing_product_is_a_no_op(self, client, products):
        response = await client.post("/api/products/delete", json={"productId": 9999})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product deleted successfully"}
        assert len((await client.get("/api/products")).json()["data"]) == 4

    async def test_delete_removes_product_and_its_cart_lines(self, client, products):
        laptop = products[0]
        await client.post("/api/cart/add", json={"productId": laptop.id, "quantity": 1})

        await client.post("/api/products/delete", json={"productId": laptop.id})

        names = [p["name"] for p in (await client.get("/api/products")).json()["data"]]
        cart = (await client.get("/api/cart")).json()["data"]
        assert "Gaming Laptop" not in names
        assert cart["count"] == 0

    async def test_update_stock(self, client, products):
        mat = products[3]
        response = await client.post("/api/products/update-stock", json={"productId": mat.id, "stock": 9})
        assert response.json()["success"] is True

        listed = {p["id"]: p for p in (await client.get("/api/products")).json()["data"]}
        assert listed[mat.id]["stock"] == 9

    async def test_update_stock_unknown_product_is_not_found(self, client, products):
        response = await client.post("/api/products/update-stock", json={"productId": 9999, "stock": 1})
        body = response.json()
        assert response.status_code == 404
        assert body["success"] is False
        assert body["error"] == "Not found"

    async def test_update_stock_rejects_negative(self, client, products):
        response = await client.post("/api/products/update-stock", json={"productId": products[0].id, "stock": -1})
        assert response.status_code == 422

"""HTTP-level tests for the Product Service."""

import pytest

from tests.conftest import assert_envelope

WIDGET = {"name": "Widget", "description": "A widget", "category": "Tools", "price": 10.0, "stock": 5}


def _add(api, **overrides):
    resp = api.post("/products", json={**WIDGET, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestCreate:

    def test_created(self, product_api):
        product = _add(product_api)
        assert product["name"] == "Widget"
        assert product["stock"] == 5

    def test_duplicate_name(self, product_api):
        _add(product_api)
        resp = product_api.post("/products", json={**WIDGET, "name": "WIDGET"})
        assert resp.status_code == 409

    @pytest.mark.parametrize("overrides", [{"name": ""}, {"category": ""}, {"price": 0}, {"stock": -1}])
    def test_invalid(self, product_api, product_repo, overrides):
        resp = product_api.post("/products", json={**WIDGET, **overrides})
        assert resp.status_code == 400
        assert_envelope(resp.json())
        assert product_repo.count() == 0


class TestQueries:

    def test_get(self, product_api):
        product = _add(product_api)
        body = product_api.get(f"/products/{product['id']}").json()
        assert body == {"success": True, "data": product}

    def test_get_missing(self, product_api):
        resp = product_api.get("/products/missing")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Product not found"

    def test_filters(self, product_api):
        _add(product_api)
        _add(product_api, name="Lamp", category="Home", price=40.0, stock=0)
        _add(product_api, name="Rug", category="home", price=120.0, stock=2)

        def names(query):
            return [p["name"] for p in product_api.get(f"/products{query}").json()["data"]]

        assert names("") == ["Widget", "Lamp", "Rug"]
        assert names("?category=HOME") == ["Lamp", "Rug"]
        assert names("?min_price=20&max_price=100") == ["Lamp"]
        assert names("?in_stock=true") == ["Widget", "Rug"]
        assert [p["name"] for p in product_api.get("/products/category/home").json()["data"]] == ["Lamp", "Rug"]


class TestUpdates:

    def test_partial_update(self, product_api):
        product = _add(product_api)
        resp = product_api.put(f"/products/{product['id']}", json={"price": 12.5})
        assert resp.status_code == 200
        updated = resp.json()["data"]
        assert updated["price"] == 12.5
        assert updated["name"] == "Widget"
        assert updated["created_at"] == product["created_at"]

    def test_update_missing(self, product_api):
        assert product_api.put("/products/missing", json={"price": 1.0}).status_code == 404

    def test_rename_to_taken_name(self, product_api):
        _add(product_api)
        lamp = _add(product_api, name="Lamp")
        resp = product_api.put(f"/products/{lamp['id']}", json={"name": "widget"})
        assert resp.status_code == 409
        assert_envelope(resp.json())
        assert product_api.get(f"/products/{lamp['id']}").json()["data"]["name"] == "Lamp"

    def test_rename_keeps_own_name(self, product_api):
        product = _add(product_api)
        resp = product_api.put(f"/products/{product['id']}", json={"name": "WIDGET"})
        assert resp.status_code == 200
        assert resp.json()["data"]["name"] == "WIDGET"

    @pytest.mark.parametrize("changes", [{"name": ""}, {"category": ""}, {"price": 0}, {"price": -5.0}, {"stock": -1}])
    def test_invalid_update(self, product_api, changes):
        product = _add(product_api)
        resp = product_api.put(f"/products/{product['id']}", json=changes)
        assert resp.status_code == 400
        assert_envelope(resp.json())
        assert product_api.get(f"/products/{product['id']}").json()["data"] == product

    def test_stock(self, product_api):
        product = _add(product_api)
        resp = product_api.patch(f"/products/{product['id']}/stock", json={"stock": 42})
        assert resp.status_code == 200
        body = resp.json()
        assert_envelope(body)
        assert body["message"] == "Stock updated successfully"
        assert body["data"]["id"] == product["id"]
        assert body["data"]["stock"] == 42
        assert product_api.get(f"/products/{product['id']}").json()["data"]["stock"] == 42

    def test_negative_stock(self, product_api):
        product = _add(product_api)
        resp = product_api.patch(f"/products/{product['id']}/stock", json={"stock": -3})
        assert resp.status_code == 400
        assert resp.json()["error"] == "stock quantity cannot be negative"

    def test_stock_missing_product(self, product_api):
        assert product_api.patch("/products/missing/stock", json={"stock": 1}).status_code == 404

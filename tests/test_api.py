"""
Component tests for the Storefront Service HTTP API

These tests run the real FastAPI app (lifespan included) against a temporary
data directory and check the status codes and bodies the storefront client
relies on.
"""
import json

import pytest
from fastapi.testclient import TestClient

from services.storefront_service.main import create_app


class TestHealthAndStartup:
    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "storefront-service", "version": "1.0.0"}

    def test_startup_creates_both_documents(self, test_client, settings):
        assert settings.products_path.exists()
        assert json.loads(settings.cart_path.read_text(encoding="utf-8")) == []

    def test_cross_origin_requests_are_allowed(self, test_client):
        response = test_client.get("/api/products", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_startup_fails_on_corrupt_catalog(self, settings):
        settings.data_dir.mkdir(parents=True)
        settings.products_path.write_text("not json", encoding="utf-8")

        with pytest.raises(Exception):
            with TestClient(create_app(settings)):
                pass


class TestCatalogEndpoints:
    def test_list_products(self, test_client):
        response = test_client.get("/api/products")

        assert response.status_code == 200
        products = response.json()
        assert [p["id"] for p in products] == [1, 2, 3, 4, 5, 6]
        assert products[0]["inStock"] is True
        assert products[0]["price"] == 299

    def test_get_product(self, test_client):
        response = test_client.get("/api/products/2")

        assert response.status_code == 200
        assert response.json()["name"] == "Professional Camera Lens"

    def test_get_unknown_product_is_404(self, test_client):
        response = test_client.get("/api/products/999")

        assert response.status_code == 404

    def test_non_integer_product_id_is_400(self, test_client):
        response = test_client.get("/api/products/abc")

        assert response.status_code == 400


class TestCartScenario:
    """
    Walk through the storefront flow:
    add 2 headphones, set quantity to 5, delete the line, clear the empty cart.
    """

    def test_add_update_remove_clear(self, test_client):
        # Add
        response = test_client.post("/api/cart", json={"productId": 1, "quantity": 2})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item added to cart"
        assert len(body["cart"]) == 1
        item = body["cart"][0]
        assert item["productId"] == 1
        assert item["quantity"] == 2
        assert item["product"]["price"] == 299
        assert "addedAt" in item
        item_id = item["id"]

        # Update replaces, does not increment
        response = test_client.put(f"/api/cart/{item_id}", json={"quantity": 5})
        assert response.status_code == 200
        assert response.json()["message"] == "Cart updated"
        assert response.json()["cart"][0]["quantity"] == 5

        # Remove
        response = test_client.delete(f"/api/cart/{item_id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Item removed from cart", "cart": []}

        # Clear an already-empty cart
        response = test_client.delete("/api/cart")
        assert response.status_code == 200
        assert response.json() == {"message": "Cart cleared"}
        assert test_client.get("/api/cart").json() == []

    def test_mutation_response_matches_following_list(self, test_client):
        """The client replaces its cache with GET /cart after each mutation; both must agree."""
        test_client.post("/api/cart", json={"productId": 3})
        mutation = test_client.post("/api/cart", json={"productId": 4, "quantity": 2})

        listed = test_client.get("/api/cart")

        assert mutation.json()["cart"] == listed.json()

    def test_add_merges_same_product(self, test_client):
        test_client.post("/api/cart", json={"productId": 1, "quantity": 2})
        response = test_client.post("/api/cart", json={"productId": 1, "quantity": 3})

        cart = response.json()["cart"]
        assert len(cart) == 1
        assert cart[0]["quantity"] == 5

    def test_quantity_defaults_to_one(self, test_client):
        response = test_client.post("/api/cart", json={"productId": 6})

        assert response.json()["cart"][0]["quantity"] == 1

    def test_update_to_zero_removes_line(self, test_client):
        item_id = test_client.post("/api/cart", json={"productId": 1}).json()["cart"][0]["id"]

        response = test_client.put(f"/api/cart/{item_id}", json={"quantity": 0})

        assert response.status_code == 200
        assert response.json()["cart"] == []

    def test_summary(self, test_client):
        test_client.post("/api/cart", json={"productId": 1, "quantity": 2})
        test_client.post("/api/cart", json={"productId": 5})

        response = test_client.get("/api/cart/summary")

        assert response.status_code == 200
        assert response.json() == {"itemCount": 3, "subtotal": 687.0, "lines": 2}


class TestCartErrors:
    def test_add_without_product_id_is_400(self, test_client):
        response = test_client.post("/api/cart", json={"quantity": 1})

        assert response.status_code == 400

    def test_add_unknown_product_is_404_and_cart_unchanged(self, test_client):
        response = test_client.post("/api/cart", json={"productId": 999999})

        assert response.status_code == 404
        assert test_client.get("/api/cart").json() == []

    def test_add_with_zero_quantity_is_400(self, test_client):
        response = test_client.post("/api/cart", json={"productId": 1, "quantity": 0})

        assert response.status_code == 400

    def test_malformed_body_is_400(self, test_client):
        response = test_client.post(
            "/api/cart", content=b"{productId: 1", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert test_client.get("/api/cart").json() == []

    def test_update_without_quantity_is_400(self, test_client):
        item_id = test_client.post("/api/cart", json={"productId": 1}).json()["cart"][0]["id"]

        response = test_client.put(f"/api/cart/{item_id}", json={})

        assert response.status_code == 400

    def test_update_with_negative_quantity_is_400(self, test_client):
        item_id = test_client.post("/api/cart", json={"productId": 1}).json()["cart"][0]["id"]

        response = test_client.put(f"/api/cart/{item_id}", json={"quantity": -1})

        assert response.status_code == 400

    def test_update_with_fractional_quantity_is_400(self, test_client):
        item_id = test_client.post("/api/cart", json={"productId": 1}).json()["cart"][0]["id"]

        response = test_client.put(f"/api/cart/{item_id}", json={"quantity": 2.5})

        assert response.status_code == 400

    def test_update_unknown_item_is_404(self, test_client):
        response = test_client.put("/api/cart/12345", json={"quantity": 1})

        assert response.status_code == 404

    def test_delete_unknown_item_is_404(self, test_client):
        response = test_client.delete("/api/cart/12345")

        assert response.status_code == 404

    def test_corrupt_cart_is_500(self, test_client, settings):
        settings.cart_path.write_text("[{", encoding="utf-8")

        assert test_client.get("/api/cart").status_code == 500
        assert test_client.post("/api/cart", json={"productId": 1}).status_code == 500

    def test_failed_write_is_500_and_keeps_cart(self, test_client, settings, monkeypatch):
        test_client.post("/api/cart", json={"productId": 1})
        before = settings.cart_path.read_bytes()

        def failing_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr("services.storefront_service.json_store.os.replace", failing_replace)
        assert test_client.delete("/api/cart").status_code == 500
        monkeypatch.undo()

        assert settings.cart_path.read_bytes() == before
        assert len(test_client.get("/api/cart").json()) == 1

    @pytest.mark.parametrize("body", [{"productId": True}, {"productId": 1, "quantity": True}])
    def test_add_with_boolean_field_is_400_and_cart_unchanged(self, test_client, body):
        response = test_client.post("/api/cart", json=body)

        assert response.status_code == 400
        assert test_client.get("/api/cart").json() == []

    def test_update_with_boolean_quantity_is_400(self, test_client):
        item_id = test_client.post("/api/cart", json={"productId": 1, "quantity": 2}).json()["cart"][0]["id"]

        response = test_client.put(f"/api/cart/{item_id}", json={"quantity": True})

        assert response.status_code == 400
        assert test_client.get("/api/cart").json()[0]["quantity"] == 2

    def test_add_with_product_id_zero_is_400(self, test_client):
        response = test_client.post("/api/cart", json={"productId": 0})

        assert response.status_code == 400
        assert response.json()["detail"] == "Product ID is required"

    def test_non_utf8_cart_is_500_with_detail(self, test_client, settings):
        settings.cart_path.write_bytes(b"[\xff\xfe]")

        response = test_client.get("/api/cart")

        assert response.status_code == 500
        assert "detail" in response.json()

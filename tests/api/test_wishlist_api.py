"""Tests for wishlist API endpoints."""

from fastapi import status


class TestWishlistMembership:
    """Tests for toggling, adding and removing wishlist items."""

    def test_empty_wishlist(self, client) -> None:
        """A new session has an empty wishlist."""
        assert client.get("/wishlist").json() == {"items": [], "count": 0}

    def test_toggle(self, client) -> None:
        """Toggling flips membership."""
        first = client.post("/wishlist/3/toggle").json()
        second = client.post("/wishlist/3/toggle").json()

        assert first == {"product_id": "3", "in_wishlist": True}
        assert second == {"product_id": "3", "in_wishlist": False}
        assert client.get("/wishlist").json()["count"] == 0

    def test_put_is_idempotent(self, client) -> None:
        """Adding twice keeps a single entry."""
        client.put("/wishlist/3")
        client.put("/wishlist/3")
        client.put("/wishlist/1")

        assert client.get("/wishlist").json() == {"items": ["3", "1"], "count": 2}

    def test_delete(self, client) -> None:
        """Removing works even for products not in the wishlist."""
        client.put("/wishlist/3")

        assert client.delete("/wishlist/3").json()["in_wishlist"] is False
        assert client.delete("/wishlist/3").status_code == status.HTTP_200_OK
        assert client.get("/wishlist").json()["items"] == []

    def test_unknown_product(self, client) -> None:
        """Only catalog products can be wishlisted."""
        response = client.post("/wishlist/404/toggle")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"
        assert client.put("/wishlist/404").status_code == status.HTTP_404_NOT_FOUND


class TestMoveToCart:
    """Tests for POST /wishlist/{id}/move-to-cart."""

    def test_move_to_cart(self, client) -> None:
        """The product moves into the cart with quantity one."""
        client.put("/wishlist/9")

        response = client.post("/wishlist/9/move-to-cart")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["wishlist"]["items"] == []
        assert data["cart"]["items"][0]["product_id"] == "9"
        assert data["cart"]["items"][0]["quantity"] == 1
        assert data["cart"]["undo_available"] == 1

    def test_move_merges_with_cart_line(self, client) -> None:
        """Moving a product already in the cart adds one unit."""
        client.post("/cart/items", json={"product_id": "9", "quantity": 2})
        client.put("/wishlist/9")

        data = client.post("/wishlist/9/move-to-cart").json()

        assert data["cart"]["items"][0]["quantity"] == 3

    def test_not_in_wishlist(self, client) -> None:
        """Products must be wishlisted first."""
        response = client.post("/wishlist/9/move-to-cart")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "NOT_IN_WISHLIST"

    def test_full_line_stays_wishlisted(self, client) -> None:
        """A full cart line rejects the move and keeps the wishlist entry."""
        client.post("/cart/items", json={"product_id": "9", "quantity": 99})
        client.put("/wishlist/9")

        response = client.post("/wishlist/9/move-to-cart")

        assert response.status_code == 422
        assert response.json()["error_code"] == "QUANTITY_LIMIT_EXCEEDED"
        assert client.get("/wishlist").json()["items"] == ["9"]

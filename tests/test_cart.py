from stash.data.models.cart_item import CartItemModel
from stash.repos.cart_repo import CartRepo
from tests.helpers import auth, register, user_id_of


class TestGetCart:
    def test_missing_cart_is_empty_not_error(self, client):
        token = register(client)
        response = client.get("/cart", headers=auth(token))

        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["updatedAt"] is None
        assert body["userId"]

    def test_requires_token(self, client):
        assert client.get("/cart").status_code == 401

    def test_every_route_requires_token(self, client):
        assert client.post("/cart/items", json={"productId": "p1"}).status_code == 401
        assert client.delete("/cart/items/p1").status_code == 401


class TestAddItem:
    def test_add_creates_cart(self, client):
        token = register(client)
        response = client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))

        assert response.status_code == 200
        assert response.json()["items"] == ["p1"]
        assert response.json()["updatedAt"] is not None

    def test_add_is_idempotent(self, client):
        token = register(client)
        client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))
        client.post("/cart/items", json={"productId": "p2"}, headers=auth(token))
        response = client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))

        assert response.json()["items"] == ["p1", "p2"]

    def test_unknown_product_is_accepted(self, client):
        token = register(client)
        response = client.post("/cart/items", json={"productId": "no-such-product"}, headers=auth(token))
        assert response.status_code == 200

    def test_long_product_id_is_accepted(self, client):
        token = register(client)
        product_id = "prod-" + "x" * 75
        response = client.post("/cart/items", json={"productId": product_id}, headers=auth(token))

        assert response.status_code == 200
        assert response.json()["items"] == [product_id]
        assert CartItemModel.__table__.c.product_id.type.length >= len(product_id)

    def test_product_id_longer_than_column_is_rejected(self, client):
        token = register(client)
        response = client.post("/cart/items", json={"productId": "p" * 256}, headers=auth(token))
        assert response.status_code == 400

    def test_product_id_required(self, client):
        token = register(client)
        response = client.post("/cart/items", json={}, headers=auth(token))
        assert response.status_code == 400

    def test_carts_are_per_user(self, client):
        alice = register(client, "alice@b.com")
        bob = register(client, "bob@b.com")
        client.post("/cart/items", json={"productId": "p1"}, headers=auth(alice))

        assert client.get("/cart", headers=auth(bob)).json()["items"] == []

    def test_concurrent_insert_counts_as_present(self, client, db, monkeypatch):
        token = register(client)
        client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))
        uid = user_id_of(client, token)

        # first lookup misses the cart another request already created
        original = CartRepo.get_cart
        calls = []

        def stale_get_cart(self, user_id):
            calls.append(user_id)
            if len(calls) == 1:
                return None
            return original(self, user_id)

        monkeypatch.setattr(CartRepo, "get_cart", stale_get_cart)
        repo = CartRepo(db)
        repo.add_item(uid, "p1")

        assert len(calls) == 2
        assert [item.product_id for item in repo.get_cart_items(uid)] == ["p1"]


class TestRemoveItem:
    def test_remove_member(self, client):
        token = register(client)
        client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))
        client.post("/cart/items", json={"productId": "p2"}, headers=auth(token))

        response = client.delete("/cart/items/p1", headers=auth(token))
        assert response.status_code == 200
        assert response.json()["items"] == ["p2"]

    def test_remove_non_member_is_not_an_error(self, client):
        token = register(client)
        client.post("/cart/items", json={"productId": "p1"}, headers=auth(token))

        response = client.delete("/cart/items/zzz", headers=auth(token))
        assert response.status_code == 200
        assert response.json()["items"] == ["p1"]

    def test_remove_from_missing_cart_returns_empty(self, client):
        token = register(client)
        response = client.delete("/cart/items/p1", headers=auth(token))

        assert response.status_code == 200
        assert response.json()["items"] == []

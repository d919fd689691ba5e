import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from stash.data.models.order import OrderModel
from stash.data.models.product import ProductModel
from stash.repos.cart_repo import CartRepo
from tests.helpers import add_product, auth, make_user, register


@pytest.fixture()
def artist_id(db):
    return make_user(db, "artist@b.com", ["artist"])[1]


def fill_cart(client, token, *product_ids):
    for pid in product_ids:
        client.post("/cart/items", json={"productId": pid}, headers=auth(token))


def order_count(db):
    db.expire_all()
    return len(db.execute(select(OrderModel)).scalars().all())


class TestCreateOrder:
    def test_order_totals_cart_and_clears_it(self, client, db, artist_id):
        p1 = add_product(db, artist_id, name="Emotes", price=500)
        p2 = add_product(db, artist_id, name="Overlay", price=700)
        token = register(client)
        fill_cart(client, token, p1, p2)

        response = client.post("/orders", headers=auth(token))

        assert response.status_code == 201
        order = response.json()
        assert order["id"].startswith("ord_")
        assert order["totalAmount"] == 1200
        assert order["status"] == "pending_payment"
        assert order["paymentIntentId"] is None
        assert order["items"] == [
            {"productId": p1, "name": "Emotes", "price": 500},
            {"productId": p2, "name": "Overlay", "price": 700},
        ]

        cart = client.get("/cart", headers=auth(token)).json()
        assert cart["items"] == []
        assert cart["updatedAt"] is None

    def test_missing_cart(self, client, db):
        token = register(client)
        response = client.post("/orders", headers=auth(token))

        assert response.status_code == 400
        assert response.json() == {"msg": "Cart is empty"}
        assert order_count(db) == 0

    def test_emptied_cart(self, client, db):
        token = register(client)
        fill_cart(client, token, "p1")
        client.delete("/cart/items/p1", headers=auth(token))

        response = client.post("/orders", headers=auth(token))
        assert response.status_code == 400
        assert order_count(db) == 0

    def test_missing_product_refuses_order_and_keeps_cart(self, client, db, artist_id):
        p1 = add_product(db, artist_id, price=500)
        p2 = add_product(db, artist_id, price=700)
        token = register(client)
        fill_cart(client, token, p1, p2)

        db.delete(db.get(ProductModel, p2))
        db.commit()

        response = client.post("/orders", headers=auth(token))

        assert response.status_code == 400
        assert response.json() == {"msg": "One or more products in the cart could not be found."}
        assert order_count(db) == 0
        assert client.get("/cart", headers=auth(token)).json()["items"] == [p1, p2]

    def test_price_is_snapshotted(self, client, db, artist_id):
        p1 = add_product(db, artist_id, price=500)
        token = register(client)
        fill_cart(client, token, p1)
        order_id = client.post("/orders", headers=auth(token)).json()["id"]

        product = db.get(ProductModel, p1)
        product.price = 9999
        db.commit()

        order = client.get(f"/orders/{order_id}", headers=auth(token)).json()
        assert order["totalAmount"] == 500
        assert order["items"][0]["price"] == 500

    def test_cart_clear_failure_keeps_order(self, client, db, artist_id, monkeypatch):
        p1 = add_product(db, artist_id, price=300)
        token = register(client)
        fill_cart(client, token, p1)

        def broken_delete(self, user_id):
            raise OperationalError("DELETE FROM carts", {}, Exception("store unavailable"))

        monkeypatch.setattr(CartRepo, "delete_cart", broken_delete)

        response = client.post("/orders", headers=auth(token))

        assert response.status_code == 201
        assert order_count(db) == 1
        assert client.get("/cart", headers=auth(token)).json()["items"] == [p1]

    def test_requires_token(self, client):
        assert client.post("/orders").status_code == 401


class TestReadOrders:
    def test_get_and_list_own_orders(self, client, db, artist_id):
        p1 = add_product(db, artist_id, price=100)
        token = register(client)
        fill_cart(client, token, p1)
        first = client.post("/orders", headers=auth(token)).json()
        fill_cart(client, token, p1)
        second = client.post("/orders", headers=auth(token)).json()

        assert client.get(f"/orders/{first['id']}", headers=auth(token)).json()["id"] == first["id"]
        listed = client.get("/orders", headers=auth(token)).json()
        assert {o["id"] for o in listed} == {first["id"], second["id"]}

    def test_someone_elses_order_is_not_found(self, client, db, artist_id):
        p1 = add_product(db, artist_id, price=100)
        owner = register(client, "owner@b.com")
        fill_cart(client, owner, p1)
        order_id = client.post("/orders", headers=auth(owner)).json()["id"]

        stranger = register(client, "stranger@b.com")
        response = client.get(f"/orders/{order_id}", headers=auth(stranger))
        assert response.status_code == 404

"""
Checkout: total calculation, cart clearing and all-or-nothing behaviour.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.domain.schemas import OrderLineIn
from storefront.repos.cart_repo import CartRepo
from storefront.services.order_service import order_total


@pytest.fixture
def filled_cart(test_client: TestClient, products):
    test_client.post("/api/cart", json={"userId": "alice", "productId": products["Keyboard"], "quantity": 2})
    test_client.post("/api/cart", json={"userId": "alice", "productId": products["Mouse"]})
    test_client.post("/api/cart", json={"userId": "bob", "productId": products["Mouse"]})


def checkout_body(products):
    return {
        "userId": "alice",
        "items": [
            {"productId": products["Keyboard"], "quantity": 2, "price": 100},
            {"productId": products["Mouse"], "quantity": 1, "price": 50},
        ],
    }


class TestOrderTotal:
    def test_sums_price_times_quantity(self):
        lines = [
            OrderLineIn(product_id=1, quantity=2, price=Decimal("100")),
            OrderLineIn(product_id=2, quantity=1, price=Decimal("50")),
        ]

        assert order_total(lines) == Decimal("250")

    def test_keeps_cents(self):
        lines = [OrderLineIn(product_id=1, quantity=3, price=Decimal("249.90"))]

        assert order_total(lines) == Decimal("749.70")


class TestPlaceOrder:
    def test_creates_order_items_and_clears_cart(self, test_client: TestClient, products, filled_cart, db_session):
        response = test_client.post("/api/orders", json=checkout_body(products))

        assert response.status_code == 200
        order = response.json()
        assert order["userId"] == "alice"
        assert Decimal(order["total"]) == Decimal("250")
        assert set(order) == {"id", "userId", "total", "createdAt"}

        items = db_session.query(OrderItemModel).filter_by(order_id=order["id"]).all()
        assert len(items) == 2

        assert test_client.get("/api/cart", params={"userId": "alice"}).json() == []
        # other users' carts are untouched
        assert len(test_client.get("/api/cart", params={"userId": "bob"}).json()) == 1

    def test_submitted_price_is_used_not_catalogue_price(self, test_client: TestClient, products):
        body = {"userId": "alice", "items": [{"productId": products["Monitor"], "quantity": 1, "price": "10.50"}]}

        order = test_client.post("/api/orders", json=body).json()

        assert Decimal(order["total"]) == Decimal("10.50")

    def test_user_id_is_required(self, test_client: TestClient, products):
        body = checkout_body(products)
        del body["userId"]

        assert test_client.post("/api/orders", json=body).status_code == 400

    def test_items_are_required(self, test_client: TestClient):
        response = test_client.post("/api/orders", json={"userId": "alice"})

        assert response.status_code == 400
        assert response.json()["detail"] == "items is required"

    def test_items_must_be_a_list(self, test_client: TestClient):
        response = test_client.post("/api/orders", json={"userId": "alice", "items": "nope"})

        assert response.status_code == 400

    def test_items_must_not_be_empty(self, test_client: TestClient):
        response = test_client.post("/api/orders", json={"userId": "alice", "items": []})

        assert response.status_code == 400

    def test_sub_cent_price_is_400(self, test_client: TestClient, products, db_session):
        body = {"userId": "alice", "items": [{"productId": products["Mouse"], "quantity": 2, "price": "0.005"}]}

        response = test_client.post("/api/orders", json=body)

        assert response.status_code == 400
        assert "price" in response.json()["detail"]
        assert db_session.query(OrderModel).count() == 0

    def test_price_with_too_many_digits_is_400(self, test_client: TestClient, products, db_session):
        body = {
            "userId": "alice",
            "items": [{"productId": products["Mouse"], "quantity": 1, "price": "123456789012.50"}],
        }

        response = test_client.post("/api/orders", json=body)

        assert response.status_code == 400
        assert db_session.query(OrderModel).count() == 0

    def test_total_beyond_column_range_is_400(self, test_client: TestClient, products, db_session):
        # each line fits, the sum does not
        body = {
            "userId": "alice",
            "items": [{"productId": products["Monitor"], "quantity": 3, "price": "99999999.99"}],
        }

        response = test_client.post("/api/orders", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Order total must not exceed 99999999.99"
        assert db_session.query(OrderModel).count() == 0

    def test_stored_total_matches_stored_lines(self, test_client: TestClient, products, db_session):
        body = {
            "userId": "alice",
            "items": [
                {"productId": products["Keyboard"], "quantity": 3, "price": "249.95"},
                {"productId": products["Mouse"], "quantity": 2, "price": "0.01"},
            ],
        }

        order_id = test_client.post("/api/orders", json=body).json()["id"]

        order = db_session.get(OrderModel, order_id)
        lines = db_session.query(OrderItemModel).filter_by(order_id=order_id).all()
        assert order.total == sum(line.price * line.quantity for line in lines)
        assert order.total == Decimal("749.87")

    def test_failed_cart_clear_rolls_back_everything(
        self, test_client: TestClient, products, filled_cart, db_session, monkeypatch
    ):
        def broken_clear(self, user_id):
            raise OperationalError("DELETE FROM cart_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(CartRepo, "clear_cart", broken_clear)

        response = test_client.post("/api/orders", json=checkout_body(products))

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

        assert db_session.query(OrderModel).count() == 0
        assert db_session.query(OrderItemModel).count() == 0

        monkeypatch.undo()
        cart = test_client.get("/api/cart", params={"userId": "alice"}).json()
        assert len(cart) == 2


class TestListOrders:
    def test_user_id_is_required(self, test_client: TestClient):
        assert test_client.get("/api/orders").status_code == 400

    def test_lists_orders_with_items_and_products(self, test_client: TestClient, products):
        test_client.post("/api/orders", json=checkout_body(products))
        test_client.post(
            "/api/orders",
            json={"userId": "bob", "items": [{"productId": products["Monitor"], "quantity": 1, "price": 899}]},
        )

        response = test_client.get("/api/orders", params={"userId": "alice"})

        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 1
        items = orders[0]["items"]
        assert [i["product"]["name"] for i in items] == ["Keyboard", "Mouse"]
        assert [i["quantity"] for i in items] == [2, 1]
        assert Decimal(items[0]["price"]) == Decimal("100")
        assert items[0]["orderId"] == orders[0]["id"]

    def test_newest_order_comes_first(self, test_client: TestClient, products):
        first = test_client.post(
            "/api/orders",
            json={"userId": "alice", "items": [{"productId": products["Keyboard"], "quantity": 1, "price": 100}]},
        ).json()
        second = test_client.post(
            "/api/orders",
            json={"userId": "alice", "items": [{"productId": products["Mouse"], "quantity": 1, "price": 50}]},
        ).json()

        orders = test_client.get("/api/orders", params={"userId": "alice"}).json()

        assert [o["id"] for o in orders] == [second["id"], first["id"]]
        assert [o["items"][0]["product"]["name"] for o in orders] == ["Mouse", "Keyboard"]

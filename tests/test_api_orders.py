"""Tests for the /orders HTTP surface."""
import uuid

import jwt
import pytest

from conftest import auth_header, order_payload


@pytest.fixture
def shirt(make_product):
    return make_product(name="Linen Shirt", price=4999, stock=10, sizes=["M"])


@pytest.fixture
def customer_headers(customer):
    return auth_header("customer-1")


@pytest.fixture
def other_headers(other_customer):
    return auth_header("customer-2")


@pytest.fixture
def admin_headers(admin):
    return auth_header("admin-1")


def _place(client, headers, *lines, **kwargs):
    return client.post("/orders", json=order_payload(*lines, **kwargs), headers=headers)


class TestAuth:
    def test_missing_bearer(self, client):
        response = client.get("/orders/mine")
        assert response.status_code == 401
        assert "Bearer" in response.json()["message"]

    def test_garbage_token(self, client):
        response = client.get("/orders/mine", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert "message" in response.json()

    def test_token_signed_with_other_secret(self, client):
        token = jwt.encode({"sub": "x"}, "other-secret", algorithm="HS256")
        response = client.get("/orders/mine", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_without_expiry(self, client, customer):
        token = jwt.encode({"sub": "customer-1"}, "test-secret", algorithm="HS256")
        response = client.get("/orders/mine", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_first_request_creates_customer(self, client):
        response = client.get("/users/me", headers=auth_header("brand-new", "New@Example.com"))
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["role"] == "customer"
        assert user["email"] == "new@example.com"


class TestCreateOrder:
    def test_created(self, client, customer, customer_headers, shirt, stock_of):
        response = _place(client, customer_headers, (shirt, 2, "M"), paymentMethod="card", isPaid=True)

        assert response.status_code == 201
        order = response.json()["order"]
        assert order["userId"] == customer.id
        assert order["status"] == "pending"
        assert order["totalPrice"] == 9998
        assert order["paymentMethod"] == "card"
        assert order["isPaid"] is True
        item = order["items"][0]
        assert item["productId"] == shirt.id
        assert item["name"] == "Linen Shirt"
        assert item["size"] == "M"
        assert item["quantity"] == 2
        assert item["price"] == 4999
        assert order["shippingAddress"]["addressLine1"] == "1 Main St"
        assert stock_of(shirt.id) == 8

    def test_owner_comes_from_token_not_body(self, client, customer, customer_headers, shirt):
        data = order_payload((shirt, 1))
        data["userId"] = "someone-else"

        response = client.post("/orders", json=data, headers=customer_headers)

        assert response.status_code == 201
        assert response.json()["order"]["userId"] == customer.id

    def test_empty_items(self, client, customer_headers, shirt, stock_of):
        data = order_payload((shirt, 1))
        data["items"] = []

        response = client.post("/orders", json=data, headers=customer_headers)

        assert response.status_code == 400
        assert "items" in response.json()["message"]
        assert stock_of(shirt.id) == 10

    def test_missing_total(self, client, customer_headers, shirt):
        data = order_payload((shirt, 1))
        del data["totalPrice"]

        response = client.post("/orders", json=data, headers=customer_headers)

        assert response.status_code == 400
        assert "totalPrice" in response.json()["message"]

    def test_missing_address(self, client, customer_headers, shirt):
        data = order_payload((shirt, 1))
        del data["shippingAddress"]

        assert client.post("/orders", json=data, headers=customer_headers).status_code == 400

    def test_float_total(self, client, customer_headers, shirt):
        response = _place(client, customer_headers, (shirt, 1), total=49.99)
        assert response.status_code == 400

    def test_oversized_integers(self, client, customer_headers, shirt, stock_of):
        huge_quantity = _place(client, customer_headers, (shirt, 2**63), total=4999)
        assert huge_quantity.status_code == 400
        assert "quantity" in huge_quantity.json()["message"]

        huge_total = _place(client, customer_headers, (shirt, 1), total=2**63)
        assert huge_total.status_code == 400
        assert "totalPrice" in huge_total.json()["message"]

        assert stock_of(shirt.id) == 10

    def test_out_of_stock(self, client, customer_headers, make_product, stock_of):
        sneakers = make_product(name="Canvas Sneakers", stock=2)

        response = _place(client, customer_headers, (sneakers, 5))

        assert response.status_code == 400
        assert response.json() == {"message": "Out of stock: Canvas Sneakers"}
        assert stock_of(sneakers.id) == 2

    def test_product_not_found(self, client, customer_headers, shirt, stock_of):
        data = order_payload((shirt, 1))
        data["items"].append(
            {"productId": str(uuid.uuid4()), "name": "Ghost Hat", "quantity": 1, "price": 100}
        )

        response = client.post("/orders", json=data, headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Product not found: Ghost Hat"}
        assert stock_of(shirt.id) == 10

    def test_mismatched_total_accepted(self, client, customer_headers, shirt):
        response = _place(client, customer_headers, (shirt, 2), total=5)

        assert response.status_code == 201
        assert response.json()["order"]["totalPrice"] == 5


class TestReadOrders:
    def test_list_all_admin_only(self, client, customer_headers, admin_headers, shirt):
        _place(client, customer_headers, (shirt, 1))

        assert client.get("/orders", headers=customer_headers).status_code == 403

        response = client.get("/orders", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()["orders"]) == 1

    def test_mine_filters_to_caller(self, client, customer_headers, other_headers, shirt):
        mine = _place(client, customer_headers, (shirt, 1)).json()["order"]
        _place(client, other_headers, (shirt, 1))

        response = client.get("/orders/mine", headers=customer_headers)

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [mine["id"]]

    def test_get_one(self, client, customer_headers, other_headers, admin_headers, shirt):
        order_id = _place(client, customer_headers, (shirt, 1)).json()["order"]["id"]

        assert client.get(f"/orders/{order_id}", headers=customer_headers).status_code == 200
        assert client.get(f"/orders/{order_id}", headers=admin_headers).status_code == 200

        forbidden = client.get(f"/orders/{order_id}", headers=other_headers)
        assert forbidden.status_code == 403
        assert forbidden.json() == {"message": "Forbidden: access denied."}

    def test_get_one_missing_and_malformed(self, client, customer_headers):
        assert client.get(f"/orders/{uuid.uuid4()}", headers=customer_headers).status_code == 404
        assert client.get("/orders/not-an-id", headers=customer_headers).status_code == 400


class TestUpdateStatus:
    def test_non_admin_forbidden_even_for_owner(self, client, customer_headers, shirt):
        order_id = _place(client, customer_headers, (shirt, 1)).json()["order"]["id"]

        response = client.put(f"/orders/{order_id}", json={"status": "shipped"}, headers=customer_headers)

        assert response.status_code == 403

    def test_invalid_status(self, client, customer_headers, admin_headers, shirt):
        order_id = _place(client, customer_headers, (shirt, 1)).json()["order"]["id"]

        response = client.put(f"/orders/{order_id}", json={"status": "lost"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid status. Allowed:")

    def test_non_string_status(self, client, customer_headers, admin_headers, shirt):
        order_id = _place(client, customer_headers, (shirt, 1)).json()["order"]["id"]

        as_owner = client.put(f"/orders/{order_id}", json={"status": 5}, headers=customer_headers)
        assert as_owner.status_code == 403

        as_admin = client.put(f"/orders/{order_id}", json={"status": 5}, headers=admin_headers)
        assert as_admin.status_code == 400
        assert as_admin.json()["message"].startswith("Invalid status. Allowed:")

    def test_admin_updates_status(self, client, customer_headers, admin_headers, shirt):
        order_id = _place(client, customer_headers, (shirt, 1)).json()["order"]["id"]

        response = client.put(f"/orders/{order_id}", json={"status": "shipped"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["order"]["status"] == "shipped"
        again = client.get(f"/orders/{order_id}", headers=customer_headers).json()["order"]
        assert again["status"] == "shipped"

    def test_missing_order(self, client, admin_headers):
        response = client.put(f"/orders/{uuid.uuid4()}", json={"status": "shipped"}, headers=admin_headers)
        assert response.status_code == 404

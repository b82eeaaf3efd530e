import pytest


def test_create_order_generates_id(make_order):
    order = make_order()
    assert len(order["orderId"]) == 6
    assert order["customerName"] == "Alice"
    assert order["orderStatus"] == "pending"
    assert order["totalAmount"] == 20


def test_order_ids_are_unique(make_order):
    ids = {make_order()["orderId"] for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("customerName", "   ", "Invalid customerName. It must be a non-empty string."),
        ("deliveryAddress", "", "Invalid deliveryAddress. It must be a non-empty string."),
        ("totalAmount", 0, "Invalid totalAmount. It must be a positive number."),
        ("totalAmount", -4.5, "Invalid totalAmount. It must be a positive number."),
    ],
)
def test_create_order_validation(client, auth, field, value, message):
    body = {"customerName": "Alice", "deliveryAddress": "1 Main St", "orderStatus": "pending", "totalAmount": 20}
    body[field] = value
    r = client.post("/api/orders", json=body, headers=auth("user"))
    assert r.status_code == 400
    assert r.json()["message"] == message


def test_unknown_order_status_is_rejected(client, auth):
    body = {"customerName": "Alice", "deliveryAddress": "1 Main St", "orderStatus": "shipped", "totalAmount": 20}
    assert client.post("/api/orders", json=body, headers=auth("admin")).status_code == 400


def test_partial_update_and_cancel(client, auth, make_order):
    order = make_order()
    url = f"/api/orders/{order['orderId']}"

    r = client.put(url, json={"orderStatus": "canceled"}, headers=auth("admin"))
    assert r.status_code == 200
    assert r.json()["orderStatus"] == "canceled"
    assert r.json()["customerName"] == "Alice"

    r = client.put(url, json={"totalAmount": -1}, headers=auth("driver"))
    assert r.status_code == 400

    assert client.put("/api/orders/zzzzzz", json={"orderStatus": "canceled"}, headers=auth("admin")).status_code == 404


def test_get_list_delete_order(client, auth, make_order):
    order = make_order()
    url = f"/api/orders/{order['orderId']}"

    assert client.get(url, headers=auth("driver")).json()["deliveryAddress"] == "1 Main St"
    assert len(client.get("/api/orders", headers=auth("admin")).json()) == 1

    assert client.delete(url, headers=auth("driver")).status_code == 403
    assert client.delete(url, headers=auth("admin")).json() == {"message": "Order deleted successfully"}
    assert client.get(url, headers=auth("admin")).status_code == 404

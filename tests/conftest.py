import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from delivery.core.config import Settings
from delivery.core.security import create_access_token
from delivery.main import create_app


@pytest.fixture
def settings():
    return Settings(
        mongo_url="mongodb://localhost:27017",
        mongo_db="delivery_test",
        jwt_secret="test-secret",
    )


@pytest.fixture
def mongo():
    return AsyncMongoMockClient()


@pytest.fixture
def client(settings, mongo):
    app = create_app(settings, client=mongo)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def stored(mongo, settings):
    """Read a document straight from the mock database."""
    def _find(collection, query):
        return asyncio.run(mongo[settings.mongo_db][collection].find_one(query, {"_id": 0}))
    return _find


@pytest.fixture
def auth(settings):
    def _headers(role, user_id="user-1"):
        token = create_access_token({"id": user_id}, role=role, settings=settings)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_driver(client, auth):
    def _make(**overrides):
        body = {
            "driverId": "drv001",
            "name": "Dana",
            "email": "dana@example.com",
            "phone": "5551234567",
            "vehicleType": "bike",
            "status": "active",
        }
        body.update(overrides)
        r = client.post("/api/drivers", json=body, headers=auth("driver"))
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_order(client, auth):
    def _make(**overrides):
        body = {
            "customerName": "Alice",
            "deliveryAddress": "1 Main St",
            "orderStatus": "pending",
            "totalAmount": 20,
        }
        body.update(overrides)
        r = client.post("/api/orders", json=body, headers=auth("admin"))
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def route_body():
    def _body(order_id, driver_id="drv001", route_id="route1", status="pending", steps=None):
        return {
            "routeId": route_id,
            "orderId": order_id,
            "driverId": driver_id,
            "steps": steps if steps is not None else [
                {"location": "Depot", "timestamp": "2026-01-05T09:00:00Z"},
            ],
            "status": status,
        }
    return _body

import os

# Must be set before the application modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from delivery_ledger.clock import get_clock
from delivery_ledger.db import Base, SessionLocal, engine
from delivery_ledger.main import app
from delivery_ledger.payment_service import PaymentRates, load_payment_rates
from delivery_ledger.store import Store


class FixedClock:
    def __init__(self, now):
        self.current = now

    def now(self):
        return self.current


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def rates():
    return PaymentRates(per_order=50, per_kilometer=10, per_hour=20)


@pytest.fixture
def client(clock, rates):
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[load_payment_rates] = lambda: rates
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def store():
    db = SessionLocal()
    yield Store(db)
    db.close()


@pytest.fixture
def make_driver(client):
    counter = {"n": 0}

    def _make(name="Driver", **overrides):
        counter["n"] += 1
        payload = {
            "name": name,
            "email": f"driver{counter['n']}@example.com",
            "phone": "0123456789",
            "vehicle_type": "van",
        }
        payload.update(overrides)
        response = client.post("/drivers", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_order(client):
    def _make(customer_name="Customer"):
        response = client.post("/orders", json={"customer_name": customer_name})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_route(client, make_driver, make_order):
    def _make(points, driver=None, order=None):
        driver = driver or make_driver()
        order = order or make_order()
        response = client.post("/routes", json={
            "order_id": order["id"],
            "driver_id": driver["id"],
            "steps": [{"location": {"latitude": lat, "longitude": lng}} for lat, lng in points],
        })
        assert response.status_code == 201, response.text
        return response.json()

    return _make

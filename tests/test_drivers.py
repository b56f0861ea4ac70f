import pytest


def test_register_driver(client):
    response = client.post("/drivers", json={
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "0123456789",
        "vehicle_type": "bike",
    })
    assert response.status_code == 201
    driver = response.json()
    assert driver["status"] == "active"
    assert driver["online_time"] == 0


def test_register_rejects_invalid_email(client):
    response = client.post("/drivers", json={
        "name": "Ada", "email": "not-an-email", "phone": "0123456789", "vehicle_type": "bike",
    })
    assert response.status_code == 422


def test_register_rejects_duplicate_email(client, make_driver):
    make_driver(email="same@example.com")
    response = client.post("/drivers", json={
        "name": "Other", "email": "same@example.com", "phone": "0123456789", "vehicle_type": "car",
    })
    assert response.status_code == 409
    assert response.json()["error"] == "InvalidState"


def test_list_and_get_drivers(client, make_driver):
    first = make_driver("First")
    make_driver("Second")
    assert [d["name"] for d in client.get("/drivers").json()] == ["First", "Second"]
    assert client.get(f"/drivers/{first['id']}").json()["name"] == "First"


def test_missing_driver_is_404(client):
    response = client.get("/drivers/123")
    assert response.status_code == 404
    assert response.json() == {"detail": "Driver 123 not found", "error": "DriverNotFound"}


# ============================================================================
# Status and profile
# ============================================================================

def test_status_toggles_freely(client, make_driver):
    driver = make_driver()
    for value in ["inactive", "active", "inactive"]:
        response = client.put(f"/drivers/{driver['id']}", json={"status": value})
        assert response.status_code == 200
        assert response.json()["status"] == value


def test_update_profile_fields(client, make_driver):
    driver = make_driver()
    response = client.put(f"/drivers/{driver['id']}", json={"vehicle_type": "truck", "phone": "0987654321"})
    assert response.json()["vehicle_type"] == "truck"
    assert response.json()["phone"] == "0987654321"
    assert response.json()["status"] == "active"


def test_update_unknown_driver(client):
    assert client.put("/drivers/9", json={"status": "inactive"}).status_code == 404


# ============================================================================
# Online time
# ============================================================================

def test_online_time_accumulates(client, make_driver):
    one_by_one = make_driver()
    at_once = make_driver()

    for _ in range(3):
        client.patch(f"/drivers/{one_by_one['id']}/online-time", json={"online_time": 1})
    response = client.patch(f"/drivers/{at_once['id']}/online-time", json={"online_time": 3})

    assert response.json()["online_time"] == 3
    assert client.get(f"/drivers/{one_by_one['id']}").json()["online_time"] == 3


def test_fractional_online_time(client, make_driver):
    driver = make_driver()
    client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 1.5})
    response = client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 0.25})
    assert response.json()["online_time"] == pytest.approx(1.75)


@pytest.mark.parametrize("hours", [0, -1, -0.5])
def test_non_positive_online_time_is_rejected(client, make_driver, hours):
    driver = make_driver()
    client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 2})

    response = client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": hours})

    assert response.status_code == 422
    assert response.json()["error"] == "InvalidAmount"
    assert client.get(f"/drivers/{driver['id']}").json()["online_time"] == 2


def test_online_time_for_unknown_driver(client):
    response = client.patch("/drivers/77/online-time", json={"online_time": 1})
    assert response.status_code == 404
    assert response.json()["error"] == "DriverNotFound"


def test_reset_online_time_is_idempotent(client, make_driver):
    driver = make_driver()
    client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 8})

    first = client.post(f"/drivers/{driver['id']}/online-time/reset")
    second = client.post(f"/drivers/{driver['id']}/online-time/reset")

    assert first.json()["online_time"] == 0
    assert second.json()["online_time"] == 0
    assert client.get(f"/drivers/{driver['id']}").json()["online_time"] == 0


def test_online_time_accumulates_again_after_reset(client, make_driver):
    driver = make_driver()
    client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 8})
    client.post(f"/drivers/{driver['id']}/online-time/reset")
    response = client.patch(f"/drivers/{driver['id']}/online-time", json={"online_time": 2})
    assert response.json()["online_time"] == 2


# ============================================================================
# Deletion
# ============================================================================

def test_delete_driver_detaches_routes(client, make_driver, make_route):
    driver = make_driver()
    route = make_route([(0.0, 0.0), (0.0, 1.0)], driver=driver)

    assert client.delete(f"/drivers/{driver['id']}").status_code == 204

    kept = client.get(f"/routes/{route['id']}").json()
    assert kept["driver_id"] == driver["id"]
    assert kept["driver_detached"] is True
    assert client.get(f"/drivers/{driver['id']}").status_code == 404


def test_delete_unknown_driver(client):
    response = client.delete("/drivers/5")
    assert response.status_code == 404


def test_deleted_driver_shows_in_leaderboard(client, make_driver, make_route):
    gone = make_driver("Gone")
    stays = make_driver("Stays")
    make_route([(0.0, 0.0)], driver=gone)
    client.delete(f"/drivers/{gone['id']}")

    leaders = client.get("/dashboard/top-drivers").json()

    assert leaders == [
        {"name": "<deleted>", "completed_orders": 1},
        {"name": stays["name"], "completed_orders": 0},
    ]


def test_new_driver_does_not_inherit_deleted_history(client, make_driver, make_route):
    gone = make_driver("Gone")
    route = make_route([(0.0, 0.0), (1.0, 0.0)], driver=gone)
    client.put(f"/routes/{route['id']}", json={"status": "in-progress"})
    client.put(f"/routes/{route['id']}", json={"status": "completed"})
    client.delete(f"/drivers/{gone['id']}")

    fresh = make_driver("Fresh")
    quote = client.get(f"/drivers/{fresh['id']}/payment").json()
    leaders = client.get("/dashboard/top-drivers").json()

    assert fresh["id"] != gone["id"]
    assert quote["completed_orders"] == 0
    assert quote["total_distance"] == 0
    assert quote["total_payment"] == 0
    assert leaders == [
        {"name": "<deleted>", "completed_orders": 1},
        {"name": "Fresh", "completed_orders": 0},
    ]

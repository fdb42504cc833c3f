from __future__ import annotations

from datetime import datetime

import pytest

from field_attendance.container import Container
from field_attendance.main import create_app

from conftest import ABC_CORP, GLOBAL_SERVICES, MANAGER_ID, RAHUL, XYZ_LTD


@pytest.fixture
def client(monkeypatch, attendance_service, report_service):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(Container(attendance_service=attendance_service, report_service=report_service))
    return app.test_client()


def sign_in(client, user_id, role="employee", manager_id=None):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role
        sess["manager_id"] = manager_id


def test_health_needs_no_identity(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["timestamp"]


def test_requests_without_identity_are_unauthenticated(client):
    resp = client.get("/api/checkin/active")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_assigned_clients(client):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    resp = client.get("/api/checkin/clients")

    assert resp.status_code == 200
    assert {c["client_id"] for c in resp.get_json()["data"]} == {1, 2, 3}


def test_checkin_then_checkout(client):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    resp = client.post("/api/checkin", json={"client_id": XYZ_LTD, "latitude": 28.4595, "longitude": 77.0266})
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["distance_from_client"] == 0.0
    assert data["warning"] is None
    assert data["session"]["status"] == "checked_in"

    active = client.get("/api/checkin/active").get_json()["data"]
    assert active["session_id"] == data["id"]
    assert active["client_name"] == "XYZ Ltd"
    assert active["client_address"] == "Sector 44, Gurugram"

    resp = client.put("/api/checkin/checkout")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "checked_out"

    resp = client.put("/api/checkin/checkout")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"

    assert client.get("/api/checkin/active").get_json()["data"] is None


def test_checkin_error_statuses(client):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    assert client.post("/api/checkin", json={"client_id": XYZ_LTD}).status_code == 400
    assert client.post(
        "/api/checkin", json={"client_id": GLOBAL_SERVICES, "latitude": 28.5011, "longitude": 77.0838}
    ).status_code == 403

    client.post("/api/checkin", json={"client_id": ABC_CORP, "latitude": 28.4946, "longitude": 77.0887})
    resp = client.post("/api/checkin", json={"client_id": XYZ_LTD, "latitude": 28.4595, "longitude": 77.0266})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"


def test_checkin_rejects_body_that_is_not_an_object(client, store):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    resp = client.post("/api/checkin", json=[XYZ_LTD, 28.4595, 77.0266])

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"
    assert store.sessions == {}


def test_checkin_rejects_non_finite_numbers_as_bad_input(client, store):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    resp = client.post("/api/checkin", json={"client_id": float("inf"), "latitude": 28.4595, "longitude": 77.0266})
    assert resp.status_code == 400

    resp = client.post(
        "/api/checkin",
        data='{"client_id": 2, "latitude": 1e400, "longitude": 77.0266}',
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert store.sessions == {}


def test_history_validates_dates(client, store):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)
    store.add_session(RAHUL, ABC_CORP, datetime(2024, 1, 15, 9, 15), datetime(2024, 1, 15, 11, 30))

    resp = client.get("/api/checkin/history?start_date=2024-01-15&end_date=2024-01-15")
    assert resp.status_code == 200
    [entry] = resp.get_json()["data"]
    assert entry["client_name"] == "ABC Corp"
    assert entry["check_in_time"] == "2024-01-15 09:15:00"

    resp = client.get("/api/checkin/history?start_date=2024-01-15'--")
    assert resp.status_code == 400


def test_daily_summary_requires_manager(client):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    assert client.get("/api/reports/daily-summary?date=2024-01-15").status_code == 403


def test_daily_summary_for_manager(client, store):
    sign_in(client, MANAGER_ID, role="manager")
    store.add_session(RAHUL, ABC_CORP, datetime(2024, 1, 15, 9, 0), datetime(2024, 1, 15, 11, 0))

    resp = client.get("/api/reports/daily-summary?date=2024-01-15")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["date"] == "2024-01-15"
    assert data["team_summary"]["total_checkins"] == 1
    assert data["team_summary"]["total_working_hours"] == 2.0
    assert len(data["employees"]) == 3

    assert client.get("/api/reports/daily-summary?date=15-01-2024").status_code == 400


def test_dashboards(client, store):
    sign_in(client, MANAGER_ID, role="manager")
    resp = client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["team_size"] == 3

    sign_in(client, RAHUL, manager_id=MANAGER_ID)
    resp = client.get("/api/dashboard/employee")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["today_checkins"] == []
    assert len(data["assigned_clients"]) == 3


def test_unexpected_errors_are_internal(client, attendance_service, monkeypatch):
    sign_in(client, RAHUL, manager_id=MANAGER_ID)

    def boom(employee_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(attendance_service, "get_active_session", boom)

    resp = client.get("/api/checkin/active")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "internal_error"

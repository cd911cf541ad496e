from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest
from flask import Flask

from src.workforce.workforce.attendance import controller as attendance_controller
from src.workforce.workforce.attendance.service import AttendanceService
from src.workforce.workforce.common.datetime_utils import FixedClock


@pytest.fixture
def client(attendance_repo, workers_repo, shifts_repo):
    clock = FixedClock(datetime(2025, 3, 6, 9, 5))
    container = SimpleNamespace(
        attendance_service=AttendanceService(attendance_repo, workers_repo, shifts_repo, clock=clock)
    )
    app = Flask(__name__)
    attendance_controller.register(app, container)
    return app.test_client()


def test_punch_returns_record_with_display_status(client):
    resp = client.post("/api/attendance/punch", json={"worker_id": "w1"}, headers={"X-Tenant-Id": "t1"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["record"]["record_id"] == "t1_w1_2025-03-06"
    assert body["record"]["display_status"] == "PENDING"
    assert body["record"]["timeline"][0]["type"] == "IN"


def test_missing_tenant_header_is_a_bad_request(client):
    resp = client.post("/api/attendance/punch", json={"worker_id": "w1"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_unknown_worker_is_404(client):
    resp = client.post("/api/attendance/punch", json={"worker_id": "nobody"}, headers={"X-Tenant-Id": "t1"})

    assert resp.status_code == 404


def test_regulate_validates_time_format(client):
    resp = client.post(
        "/api/attendance/regulate",
        json={"worker_id": "w1", "date": "2025-03-05", "type": "OUT", "time": "6pm"},
        headers={"X-Tenant-Id": "t1"},
    )

    assert resp.status_code == 400
    assert "HH:MM" in resp.get_json()["message"]


def test_regulate_then_list_month(client):
    headers = {"X-Tenant-Id": "t1"}
    client.post(
        "/api/attendance/regulate",
        json={"worker_id": "w1", "date": "2025-03-05", "type": "in", "time": "09:00"},
        headers=headers,
    )
    client.post(
        "/api/attendance/regulate",
        json={"worker_id": "w1", "date": "2025-03-05", "type": "OUT", "time": "18:00"},
        headers=headers,
    )

    resp = client.get("/api/workers/w1/attendance/2025-03", headers=headers)

    records = resp.get_json()["records"]
    assert [r["status"] for r in records] == ["PRESENT"]
    assert records[0]["hours"]["net"] == 9.0

from datetime import datetime, timezone

import pytest

from conftest import auth_header
import services.admin_service as admin_service
from models import Mission, Payment, UserAccount
from services.admin_service import AdminService
from utils.collection_store import SqlCollectionStore


@pytest.fixture
def admin():
    return auth_header(user_id="admin-1", role="ADMIN")


def test_admin_routes_require_admin_role(client):
    assert client.get("/api/admin/creators").status_code == 401
    assert client.get("/api/admin/creators", headers=auth_header(role="USER")).status_code == 403


def test_list_creators_mock_and_store(client, db, admin):
    assert client.get("/api/admin/creators", headers=admin).json()["source"] == "mock"

    db.add(UserAccount(email="c@example.com", user_type="creator", first_name="Cora"))
    db.commit()
    body = client.get("/api/admin/creators", headers=admin).json()
    assert body["source"] == "store"
    assert body["data"][0]["firstName"] == "Cora"


def test_mock_missions_respect_status_filter(client, admin):
    body = client.get("/api/admin/missions?status=pending", headers=admin).json()
    assert body["source"] == "mock"
    assert [m["status"] for m in body["data"]] == ["pending"]


def test_update_mission_status(client, db, admin):
    db.add(Mission(id="m1", title="Launch", brand_id="b1", status="pending"))
    db.commit()

    response = client.patch("/api/admin/missions/m1/status", json={"status": "inProgress"}, headers=admin)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "inProgress"

    listed = client.get("/api/admin/missions?status=inProgress", headers=admin).json()
    assert listed["source"] == "store"
    assert [m["id"] for m in listed["data"]] == ["m1"]


def test_update_mission_status_validation(client, db, admin):
    assert client.patch("/api/admin/missions/missing/status", json={"status": "completed"}, headers=admin).status_code == 404
    assert client.patch("/api/admin/missions/m1/status", json={"status": "done"}, headers=admin).status_code == 422


def test_process_payment(client, db, admin):
    db.add(Payment(id="p1", mission_id="m1", creator_id="c1", amount=500,
                   created_at=datetime(2026, 2, 1, tzinfo=timezone.utc)))
    db.commit()

    pending = client.get("/api/admin/payments?status=pending", headers=admin).json()
    assert [p["id"] for p in pending["data"]] == ["p1"]

    response = client.post("/api/admin/payments/p1/process", headers=admin)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "processed"
    assert data["processedAt"] is not None

    assert client.post("/api/admin/payments/p1/process", headers=admin).status_code == 409
    assert client.post("/api/admin/payments/nope/process", headers=admin).status_code == 404


def test_mock_payments_filter(client, admin):
    body = client.get("/api/admin/payments?status=processed", headers=admin).json()
    assert body["source"] == "mock"
    assert [p["status"] for p in body["data"]] == ["processed"]


class RecordingLogger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)


def test_mock_fallbacks_log_under_their_operation(db, monkeypatch):
    loggers = {}

    def recording_logger(label):
        return loggers.setdefault(label, RecordingLogger())

    monkeypatch.setattr(admin_service, "new_logger", recording_logger)
    service = AdminService(SqlCollectionStore(db, UserAccount), SqlCollectionStore(db, Mission), SqlCollectionStore(db, Payment))

    service.list_creators()
    service.list_missions(status="pending")
    service.list_payments()

    assert loggers["list_creators"].messages == ["No creators in store, using mock data"]
    assert loggers["list_missions"].messages == ["No missions in store (status=pending), using mock data"]
    assert loggers["list_payments"].messages == ["No payments in store (status=None), using mock data"]

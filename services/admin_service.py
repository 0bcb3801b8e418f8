from typing import Any, Callable, Dict, Optional

from fastapi import HTTPException

from models.mission import Mission, MISSION_STATUSES
from models.payment import Payment
from models.user_account import UserAccount
from services import mock_data
from services.dashboard_service import creator_card
from services.verification_code_service import utc_now
from utils.collection_store import CollectionStore
from utils.logger_factory import new_logger


class AdminService:
    """Back-office screens: creators, missions and payments."""

    def __init__(
        self,
        users: CollectionStore[UserAccount],
        missions: CollectionStore[Mission],
        payments: CollectionStore[Payment],
        clock: Callable = utc_now,
    ):
        self.users = users
        self.missions = missions
        self.payments = payments
        self.clock = clock

    def list_creators(self) -> Dict[str, Any]:
        log = new_logger("list_creators")
        creators = self.users.query({"user_type": "creator"}, order_by="created_at", descending=True)
        if creators:
            return {"success": True, "data": [creator_card(u) for u in creators], "source": "store"}
        log.info("No creators in store, using mock data")
        return {"success": True, "data": mock_data.mock_creators(), "source": "mock"}

    def list_missions(self, status: Optional[str] = None) -> Dict[str, Any]:
        log = new_logger("list_missions")
        filters = {"status": status} if status else None
        missions = self.missions.query(filters, order_by="created_at", descending=True)
        if missions:
            return {"success": True, "data": [m.to_dict() for m in missions], "source": "store"}
        log.info(f"No missions in store (status={status}), using mock data")
        data = [m for m in mock_data.mock_missions(self.clock()) if not status or m["status"] == status]
        return {"success": True, "data": data, "source": "mock"}

    def list_payments(self, status: Optional[str] = None) -> Dict[str, Any]:
        log = new_logger("list_payments")
        filters = {"status": status} if status else None
        payments = self.payments.query(filters, order_by="created_at", descending=True)
        if payments:
            return {"success": True, "data": [p.to_dict() for p in payments], "source": "store"}
        log.info(f"No payments in store (status={status}), using mock data")
        data = [p for p in mock_data.mock_payments(self.clock()) if not status or p["status"] == status]
        return {"success": True, "data": data, "source": "mock"}

    def update_mission_status(self, mission_id: str, status: str) -> Mission:
        log = new_logger("update_mission_status")
        if status not in MISSION_STATUSES:
            raise HTTPException(status_code=422, detail=f"status must be one of {', '.join(MISSION_STATUSES)}")
        mission = self.missions.update(mission_id, status=status)
        if mission is None:
            raise HTTPException(status_code=404, detail="Mission not found")
        log.info(f"Mission {mission_id} moved to {status}")
        return mission

    def process_payment(self, payment_id: str) -> Payment:
        log = new_logger("process_payment")
        payment = self.payments.get(payment_id)
        if payment is None:
            raise HTTPException(status_code=404, detail="Payment not found")
        if payment.status == "processed":
            raise HTTPException(status_code=409, detail="Payment already processed")
        payment = self.payments.update(payment_id, status="processed", processed_at=self.clock())
        log.info(f"Payment {payment_id} processed ({payment.amount} {payment.currency})")
        return payment

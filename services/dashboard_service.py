"""
Dashboard reads for brands and creators.

Each read answers {"success": True, "data": ..., "source": "store" | "mock"}.
When the store has nothing for the query the canned data set from
services.mock_data is returned instead. Store failures are not masked.
"""
from typing import Any, Callable, Dict, List

from models.activity import Activity
from models.dashboard_stats import DashboardStats, stats_id
from models.mission import Mission
from models.notification import Notification
from models.user_account import UserAccount
from services import mock_data
from services.verification_code_service import as_utc, utc_now
from utils.collection_store import CollectionStore
from utils.logger_factory import new_logger

RECOMMENDED_CREATORS_LIMIT = 5
RECENT_ACTIVITIES_LIMIT = 10


def _from_store(data) -> Dict[str, Any]:
    return {"success": True, "data": data, "source": "store"}


def _from_mock(data) -> Dict[str, Any]:
    return {"success": True, "data": data, "source": "mock"}


def creator_card(user: UserAccount) -> Dict[str, Any]:
    card = user.to_dict()
    card["id"] = user.id
    return card


class DashboardService:
    def __init__(
        self,
        users: CollectionStore[UserAccount],
        missions: CollectionStore[Mission],
        activities: CollectionStore[Activity],
        notifications: CollectionStore[Notification],
        stats: CollectionStore[DashboardStats],
        clock: Callable = utc_now,
    ):
        self.users = users
        self.missions = missions
        self.activities = activities
        self.notifications = notifications
        self.stats = stats
        self.clock = clock

    def fetch_user_profile(self, user_id: str, user_type: str = "creator") -> Dict[str, Any]:
        log = new_logger("fetch_user_profile")
        user = self.users.get(user_id)
        if user is not None:
            return _from_store(user.to_dict())
        log.info(f"User {user_id} not found in store, using mock {user_type} profile")
        return _from_mock(mock_data.mock_user_profile(user_type, self.clock()))

    def fetch_brand_missions(self, brand_id: str) -> Dict[str, Any]:
        log = new_logger("fetch_brand_missions")
        missions = self.missions.query({"brand_id": brand_id}, order_by="created_at", descending=True)
        if missions:
            return _from_store([m.to_dict() for m in missions])
        log.info(f"No missions found for brand {brand_id}, using mock data")
        return _from_mock(mock_data.mock_missions(self.clock()))

    def fetch_recommended_creators(self, category: str) -> Dict[str, Any]:
        log = new_logger("fetch_recommended_creators")
        # Category membership lives in a JSON list, so it is matched here rather than in SQL
        creators: List[UserAccount] = [
            u for u in self.users.query({"user_type": "creator"}, order_by="created_at")
            if category in (u.categories or [])
        ][:RECOMMENDED_CREATORS_LIMIT]
        if creators:
            return _from_store([creator_card(u) for u in creators])
        log.info(f"No creators found for category {category}, using mock data")
        return _from_mock(mock_data.mock_creators())

    def fetch_creator_missions(self, creator_id: str) -> Dict[str, Any]:
        log = new_logger("fetch_creator_missions")
        missions = [m for m in self.missions.query() if creator_id in (m.assigned_creators or [])]
        if missions:
            missions.sort(key=lambda m: (m.deadline is None, as_utc(m.deadline) if m.deadline else None))
            return _from_store([m.to_dict() for m in missions])
        log.info(f"No missions found for creator {creator_id}, using mock data")
        return _from_mock(mock_data.mock_missions(self.clock()))

    def fetch_dashboard_stats(self, user_id: str, user_type: str) -> Dict[str, Any]:
        log = new_logger("fetch_dashboard_stats")
        record = self.stats.get(stats_id(user_type, user_id))
        if record is not None:
            return _from_store(record.to_dict())
        log.info(f"No {user_type} stats found for {user_id}, using mock data")
        return _from_mock(mock_data.mock_dashboard_stats(user_type))

    def fetch_recent_activities(self, user_id: str) -> Dict[str, Any]:
        log = new_logger("fetch_recent_activities")
        activities = self.activities.query(
            {"user_id": user_id}, order_by="timestamp", descending=True, limit=RECENT_ACTIVITIES_LIMIT
        )
        if activities:
            return _from_store([a.to_dict() for a in activities])
        log.info(f"No activities found for {user_id}, using mock data")
        return _from_mock(mock_data.mock_activities(self.clock()))

    def fetch_notifications(self, user_id: str) -> Dict[str, Any]:
        log = new_logger("fetch_notifications")
        notifications = self.notifications.query({"user_id": user_id}, order_by="timestamp", descending=True)
        if notifications:
            return _from_store([n.to_dict() for n in notifications])
        log.info(f"No notifications found for {user_id}, using mock data")
        return _from_mock(mock_data.mock_notifications(self.clock()))

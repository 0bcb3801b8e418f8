from typing import Any, Dict, Optional

from fastapi import HTTPException

from models.user_account import UserAccount, REQUIRED_PROFILE_FIELDS
from utils.collection_store import CollectionStore
from utils.logger_factory import new_logger

OPTIONAL_PROFILE_FIELDS = ("display_name", "user_type", "categories", "photo_url")
USER_TYPES = ("brand", "creator")


class ProfileService:
    """Reads and completes the profile attached to an account."""

    def __init__(self, users: CollectionStore[UserAccount]):
        self.users = users

    def get_profile(self, user_id: str) -> UserAccount:
        user = self.users.get(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def is_profile_complete(self, user_id: str) -> bool:
        return bool(self.get_profile(user_id).profile_complete)

    def complete_profile(self, user_id: str, fields: Dict[str, Any]) -> UserAccount:
        log = new_logger("complete_profile")
        self.get_profile(user_id)

        changes: Dict[str, Optional[Any]] = {}
        for name in REQUIRED_PROFILE_FIELDS:
            changes[name] = (fields.get(name) or "").strip()
        missing = [name for name in REQUIRED_PROFILE_FIELDS if not changes[name]]
        if missing:
            log.info(f"Profile for {user_id} is missing {missing}")
            raise HTTPException(status_code=422, detail=f"Missing required profile fields: {', '.join(missing)}")

        for name in OPTIONAL_PROFILE_FIELDS:
            if fields.get(name) is not None:
                changes[name] = fields[name]
        if changes.get("user_type") is not None and changes["user_type"] not in USER_TYPES:
            raise HTTPException(status_code=422, detail=f"user_type must be one of {', '.join(USER_TYPES)}")
        if not changes.get("display_name"):
            changes["display_name"] = f"{changes['first_name']} {changes['last_name']}".strip()

        changes["profile_complete"] = True
        user = self.users.update(user_id, **changes)
        log.info(f"Profile completed for {user_id}")
        return user

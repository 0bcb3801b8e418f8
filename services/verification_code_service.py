"""
Verification codes for passwordless login and password reset.

A code is six random digits, valid for CODE_EXPIRY_MINUTES and consumable
once. Issuing a new code for an email removes every earlier code for it.
"""
import os
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from models.verification_code import VerificationCode
from utils.collection_store import CollectionStore
from utils.logger_factory import new_logger
from utils.short_id import generate_verification_code

CODE_EXPIRY_MINUTES = 15
CODE_PATTERN = re.compile(r"^\d{6}$")

INVALID_CODE = "Invalid code"
EXPIRED_CODE = "Code has expired"

APP_ENV = os.environ.get("APP_ENV", "production").lower()

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass
class VerificationResult:
    valid: bool
    reason: Optional[str] = None


# Issuance is serialized per email through a fixed pool of locks; two emails
# may share a stripe, which only costs some extra waiting.
LOCK_STRIPES = 64
_lock_stripes = [threading.Lock() for _ in range(LOCK_STRIPES)]


def _lock_for(email: str) -> threading.Lock:
    return _lock_stripes[hash(email) % LOCK_STRIPES]


class CodeIssuer:
    def __init__(self, codes: CollectionStore[VerificationCode], clock: Clock = utc_now):
        self.codes = codes
        self.clock = clock

    def issue(self, email: str) -> VerificationCode:
        """
        Create and store a fresh code for email.

        Earlier codes for the same email are deleted in the same transaction
        that inserts the new one, so there is never more than one active code.
        Store failures raise StoreError and leave the previous codes in place.
        """
        log = new_logger("issue_code")
        email = normalize_email(email)
        now = self.clock()
        record = VerificationCode(
            email=email,
            code=generate_verification_code(),
            created_at=now,
            expires_at=now + timedelta(minutes=CODE_EXPIRY_MINUTES),
            used=False,
        )
        with _lock_for(email):
            stored = self.codes.replace_where({"email": email}, record)
        log.info(f"Verification code issued [{stored.to_dict()}]")
        if APP_ENV == "development":
            log.info(f"Development code for {email}: {stored.code}")
        return stored


class CodeVerifier:
    def __init__(self, codes: CollectionStore[VerificationCode], clock: Clock = utc_now):
        self.codes = codes
        self.clock = clock

    def verify(self, email: str, code: str) -> VerificationResult:
        log = new_logger("verify_code")
        email = normalize_email(email)
        code = (code or "").strip()
        if not CODE_PATTERN.match(code):
            log.info(f"Rejected malformed code for {email}")
            return VerificationResult(valid=False, reason=INVALID_CODE)

        candidates = self.codes.query({"email": email, "code": code, "used": False}, order_by="id")
        if not candidates:
            log.info(f"Verification code not found for {email}")
            return VerificationResult(valid=False, reason=INVALID_CODE)

        now = self.clock()
        match = next((c for c in candidates if as_utc(c.expires_at) > now), None)
        if match is None:
            log.info(f"Verification code expired for {email}")
            return VerificationResult(valid=False, reason=EXPIRED_CODE)

        consumed = self.codes.update_where({"id": match.id, "used": False}, {"used": True})
        if consumed == 0:
            log.info(f"Verification code for {email} was consumed concurrently")
            return VerificationResult(valid=False, reason=INVALID_CODE)

        log.info(f"Verification code verified [id={match.id}, email={email}]")
        return VerificationResult(valid=True)

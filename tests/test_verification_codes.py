from datetime import timedelta

import pytest
from sqlalchemy.exc import DatabaseError

from models.verification_code import VerificationCode
import services.verification_code_service as verification_code_service
from models.user_account import UserAccount
from services.verification_code_service import (
    CodeIssuer, CodeVerifier, CODE_EXPIRY_MINUTES, as_utc, INVALID_CODE, EXPIRED_CODE,
)
from utils.collection_store import SqlCollectionStore, StoreConflictError, StoreError


@pytest.fixture
def codes(db):
    return SqlCollectionStore(db, VerificationCode)


@pytest.fixture
def issuer(codes, clock):
    return CodeIssuer(codes, clock=clock)


@pytest.fixture
def verifier(codes, clock):
    return CodeVerifier(codes, clock=clock)


def active_codes(db, email):
    return db.query(VerificationCode).filter_by(email=email, used=False).all()


def test_issue_stores_unused_code_expiring_in_fifteen_minutes(issuer, db, clock):
    record = issuer.issue("creator@example.com")

    assert len(record.code) == 6 and record.code.isdigit()
    assert 100000 <= int(record.code) <= 999999
    assert record.used is False
    assert as_utc(record.expires_at) == clock.now + timedelta(minutes=CODE_EXPIRY_MINUTES)
    assert len(active_codes(db, "creator@example.com")) == 1


def test_issue_normalizes_email(issuer, db):
    issuer.issue("  Creator@Example.COM ")
    assert len(active_codes(db, "creator@example.com")) == 1


def test_reissue_leaves_a_single_record(issuer, db):
    first_id = issuer.issue("brand@example.com").id
    second_id = issuer.issue("brand@example.com").id

    records = db.query(VerificationCode).filter_by(email="brand@example.com").all()
    assert [r.id for r in records] == [second_id]
    assert first_id != second_id


def test_reissue_does_not_touch_other_emails(issuer, db):
    issuer.issue("a@example.com")
    issuer.issue("b@example.com")
    issuer.issue("a@example.com")

    assert len(active_codes(db, "a@example.com")) == 1
    assert len(active_codes(db, "b@example.com")) == 1


def test_verify_consumes_code_once(issuer, verifier, db):
    record = issuer.issue("creator@example.com")

    first = verifier.verify("creator@example.com", record.code)
    assert first.valid is True

    db.expire_all()
    assert db.get(VerificationCode, record.id).used is True

    second = verifier.verify("creator@example.com", record.code)
    assert second.valid is False
    assert second.reason == INVALID_CODE


def test_expired_code_is_rejected_and_stays_unused(issuer, verifier, db, clock):
    record = issuer.issue("creator@example.com")
    clock.advance(minutes=CODE_EXPIRY_MINUTES + 1)

    result = verifier.verify("creator@example.com", record.code)

    assert result.valid is False
    assert result.reason == EXPIRED_CODE
    db.expire_all()
    assert db.get(VerificationCode, record.id).used is False


def test_code_is_still_valid_just_before_expiry(issuer, verifier, clock):
    record = issuer.issue("creator@example.com")
    clock.advance(minutes=CODE_EXPIRY_MINUTES - 1)

    assert verifier.verify("creator@example.com", record.code).valid is True


def test_never_issued_code_mutates_nothing(issuer, verifier, db):
    record = issuer.issue("creator@example.com")
    wrong = "111111" if record.code != "111111" else "222222"

    result = verifier.verify("creator@example.com", wrong)

    assert result.valid is False
    assert result.reason == INVALID_CODE
    db.expire_all()
    assert db.get(VerificationCode, record.id).used is False


def test_code_for_another_email_is_invalid(issuer, verifier):
    record = issuer.issue("creator@example.com")
    assert verifier.verify("someone-else@example.com", record.code).valid is False


def test_old_code_is_invalid_after_reissue(issuer, verifier):
    first_code = issuer.issue("creator@example.com").code
    second_code = issuer.issue("creator@example.com").code
    if first_code == second_code:
        pytest.skip("random codes collided")

    assert verifier.verify("creator@example.com", first_code).valid is False
    assert verifier.verify("creator@example.com", second_code).valid is True


class ExplodingStore:
    def query(self, *args, **kwargs):
        raise AssertionError("store must not be queried")


@pytest.mark.parametrize("code", ["", "12345", "1234567", "abcdef", "12 456"])
def test_malformed_codes_are_rejected_without_a_lookup(code, clock):
    verifier = CodeVerifier(ExplodingStore(), clock=clock)
    result = verifier.verify("creator@example.com", code)
    assert result.valid is False
    assert result.reason == INVALID_CODE


def test_only_one_duplicate_record_is_consumed(verifier, db, clock):
    for _ in range(2):
        db.add(VerificationCode(
            email="dup@example.com", code="123456", created_at=clock.now,
            expires_at=clock.now + timedelta(minutes=15), used=False,
        ))
    db.commit()

    assert verifier.verify("dup@example.com", "123456").valid is True
    db.expire_all()
    used_flags = sorted(r.used for r in db.query(VerificationCode).filter_by(email="dup@example.com"))
    assert used_flags == [False, True]


def test_concurrently_consumed_code_is_invalid(codes, clock):
    issuer = CodeIssuer(codes, clock=clock)
    record = issuer.issue("race@example.com")

    class LosingRaceStore:
        def query(self, *args, **kwargs):
            return codes.query(*args, **kwargs)

        def update_where(self, filters, values):
            return 0

    result = CodeVerifier(LosingRaceStore(), clock=clock).verify("race@example.com", record.code)
    assert result.valid is False
    assert result.reason == INVALID_CODE


def test_failed_reissue_keeps_previous_code(issuer, verifier, db, monkeypatch):
    original = issuer.issue("creator@example.com")
    original_id, original_code = original.id, original.code

    real_commit = db.commit

    def failing_commit():
        raise DatabaseError("COMMIT", {}, Exception("disk full"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(StoreError):
        issuer.issue("creator@example.com")
    monkeypatch.setattr(db, "commit", real_commit)

    db.expire_all()
    remaining = db.query(VerificationCode).filter_by(email="creator@example.com").all()
    assert [r.id for r in remaining] == [original_id]
    assert verifier.verify("creator@example.com", original_code).valid is True


def test_issuance_locks_stay_bounded(issuer):
    stripes = list(verification_code_service._lock_stripes)

    for i in range(200):
        issuer.issue(f"user{i}@example.com")

    assert verification_code_service._lock_stripes == stripes
    assert len(stripes) == verification_code_service.LOCK_STRIPES
    first = verification_code_service._lock_for("user7@example.com")
    assert verification_code_service._lock_for("user7@example.com") is first
    assert not first.locked()


def test_duplicate_email_put_is_a_conflict(db):
    users = SqlCollectionStore(db, UserAccount)
    users.put(UserAccount(email="dup@example.com"))

    with pytest.raises(StoreConflictError):
        users.put(UserAccount(email="dup@example.com"))
    # The session is usable again after the rollback
    assert len(users.query({"email": "dup@example.com"})) == 1

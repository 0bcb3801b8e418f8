import pytest
from sqlalchemy.exc import DatabaseError

from conftest import auth_header
from models.user_account import UserAccount
from models.verification_code import VerificationCode
import utils.google_identity as google_identity
from utils.collection_store import SqlCollectionStore, StoreConflictError, StoreError
from utils.passwords import hash_password


@pytest.fixture(autouse=True)
def no_smtp(monkeypatch):
    monkeypatch.delenv("EMAIL_SERVER_USER", raising=False)
    monkeypatch.delenv("EMAIL_SERVER_PASS", raising=False)


def stored_code(db, email):
    db.expire_all()
    return db.query(VerificationCode).filter_by(email=email, used=False).one().code


def test_login_code_flow(client, db):
    response = client.post("/api/auth/login_code", json={"email": "creator@example.com"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Verification code sent successfully"}

    code = stored_code(db, "creator@example.com")
    response = client.post("/api/auth/verify_login_code", json={"email": "creator@example.com", "code": code})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["valid"] is True
    assert body["isNewUser"] is True
    assert body["tokenType"] == "bearer"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "creator@example.com"
    assert me.json()["displayName"] == "User"
    assert me.json()["signInMethods"] == ["password"]


def test_reused_code_is_invalid(client, db):
    client.post("/api/auth/login_code", json={"email": "creator@example.com"})
    code = stored_code(db, "creator@example.com")
    client.post("/api/auth/verify_login_code", json={"email": "creator@example.com", "code": code})

    response = client.post("/api/auth/verify_login_code", json={"email": "creator@example.com", "code": code})
    assert response.status_code == 200
    assert response.json() == {"success": True, "valid": False, "message": "Invalid code"}


def test_reset_password_flow(client, db):
    db.add(UserAccount(email="reset@example.com", password_hash=hash_password("old-pass")))
    db.commit()

    client.post("/api/auth/reset_code", json={"email": "reset@example.com"})
    code = stored_code(db, "reset@example.com")
    response = client.post(
        "/api/auth/reset_password",
        json={"email": "reset@example.com", "code": code, "newPassword": "new-pass"},
    )
    assert response.status_code == 200
    assert response.json()["valid"] is True

    login = client.post("/api/auth/login", json={"email": "reset@example.com", "password": "new-pass"})
    assert login.status_code == 200
    assert login.json()["accessToken"]


def test_reset_password_unknown_account_is_404(client, db):
    client.post("/api/auth/reset_code", json={"email": "ghost@example.com"})
    code = stored_code(db, "ghost@example.com")
    response = client.post(
        "/api/auth/reset_password",
        json={"email": "ghost@example.com", "code": code, "newPassword": "new-pass"},
    )
    assert response.status_code == 404
    assert response.json() == {"success": False, "valid": True, "error": "No user found with this email address."}


def test_reset_password_requires_six_characters(client):
    response = client.post(
        "/api/auth/reset_password",
        json={"email": "reset@example.com", "code": "123456", "newPassword": "123"},
    )
    assert response.status_code == 422


def test_store_failure_is_503(client, monkeypatch):
    def unavailable(self, filters, record):
        raise StoreError("replace_where", "verification_codes")

    monkeypatch.setattr(SqlCollectionStore, "replace_where", unavailable)
    response = client.post("/api/auth/login_code", json={"email": "creator@example.com"})
    assert response.status_code == 503
    assert response.json() == {"success": False, "error": "Storage backend unavailable. Please try again later."}


def test_register_login_and_duplicate(client):
    response = client.post("/api/auth/register", json={"name": "Sam Brand", "email": "sam@example.com", "password": "secret1"})
    assert response.status_code == 201
    assert response.json()["isNewUser"] is True

    duplicate = client.post("/api/auth/register", json={"name": "Sam", "email": "sam@example.com", "password": "secret1"})
    assert duplicate.status_code == 409

    bad = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json()["error"] == "Invalid email or password"


@pytest.fixture
def google_tokens(monkeypatch):
    """Replaces Google's signature check; only tokens registered here verify."""
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "test-client.apps.googleusercontent.com")
    tokens = {}

    def verify_oauth2_token(token, request, audience):
        assert audience == "test-client.apps.googleusercontent.com"
        if token not in tokens:
            raise ValueError("Could not verify token signature.")
        return tokens[token]

    monkeypatch.setattr(google_identity.google_id_token, "verify_oauth2_token", verify_oauth2_token)
    return tokens


def test_google_sign_in(client, google_tokens):
    google_tokens["token-gina"] = {
        "email": "G@example.com", "email_verified": True, "sub": "g-1",
        "name": "Gina Google", "picture": "https://img/g.png",
    }
    response = client.post("/api/auth/google", json={"idToken": "token-gina"})
    assert response.status_code == 200
    body = response.json()
    assert body["isNewUser"] is True
    assert body["user"]["email"] == "g@example.com"
    assert body["user"]["photoURL"] == "https://img/g.png"


def test_google_sign_in_rejects_forged_token(client, db, google_tokens):
    db.add(UserAccount(email="victim@example.com", password_hash=hash_password("secret1")))
    db.commit()

    response = client.post("/api/auth/google", json={"idToken": "forged"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid Google token."}

    # Client-asserted identity fields are not accepted at all
    response = client.post("/api/auth/google", json={"email": "victim@example.com", "googleId": "attacker"})
    assert response.status_code == 422

    db.expire_all()
    assert db.query(UserAccount).filter_by(email="victim@example.com").one().google_id is None


def test_google_sign_in_requires_verified_email(client, google_tokens):
    google_tokens["token-unverified"] = {"email": "g@example.com", "email_verified": False, "sub": "g-1"}
    response = client.post("/api/auth/google", json={"idToken": "token-unverified"})
    assert response.status_code == 401
    assert response.json()["error"] == "Unverified Google email."


def test_google_sign_in_without_client_id_is_503(client, monkeypatch):
    monkeypatch.delenv("GOOGLE_CLIENT_ID", raising=False)
    response = client.post("/api/auth/google", json={"idToken": "anything"})
    assert response.status_code == 503
    assert response.json()["success"] is False


def test_google_id_collision_is_409(client, db, google_tokens):
    db.add(UserAccount(email="owner@example.com", auth_provider="google", google_id="g-1"))
    db.add(UserAccount(email="other@example.com", password_hash=hash_password("secret1")))
    db.commit()

    google_tokens["token-other"] = {"email": "other@example.com", "email_verified": True, "sub": "g-1"}
    response = client.post("/api/auth/google", json={"idToken": "token-other"})
    assert response.status_code == 409
    assert response.json()["error"] == "This Google account is already linked to another user"


def test_unique_constraint_violation_is_409(client, monkeypatch):
    def conflicting(self, record):
        raise StoreConflictError("put", "users")

    monkeypatch.setattr(SqlCollectionStore, "put", conflicting)
    response = client.post("/api/auth/register", json={"name": "Sam", "email": "sam@example.com", "password": "secret1"})
    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "An account with this email already exists"}


def test_conflict_outside_account_creation_uses_generic_409(client, monkeypatch):
    def conflicting(self, filters, record):
        raise StoreConflictError("replace_where", "verification_codes")

    monkeypatch.setattr(SqlCollectionStore, "replace_where", conflicting)
    response = client.post("/api/auth/login_code", json={"email": "creator@example.com"})
    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "The request conflicts with an existing record."}


def test_users_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Token abc"}).status_code == 401


def test_users_me_unknown_account(client):
    assert client.get("/api/users/me", headers=auth_header(user_id="missing")).status_code == 404


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["environment"] == "test"
    assert body["latencyMs"] >= 0


def test_health_reports_unreachable_store(client, db, monkeypatch):
    def broken_execute(*args, **kwargs):
        raise DatabaseError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "execute", broken_execute)
    response = client.get("/api/health")
    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["status"] == "unhealthy"
    assert body["environment"] == "test"

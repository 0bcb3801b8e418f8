import pytest

from conftest import auth_header
from models.user_account import UserAccount


@pytest.fixture
def account(db):
    user = UserAccount(email="creator@example.com", display_name="User", password_hash="x")
    db.add(user)
    db.commit()
    return user.id


PROFILE = {
    "firstName": "Sarah",
    "lastName": "Creator",
    "phoneNumber": "+1 555 0100",
    "address": "1 Main St",
    "location": "Austin, TX",
    "userType": "creator",
    "categories": ["fashion", "beauty"],
}


def test_profile_starts_incomplete(client, account):
    response = client.get("/api/users/me/profile_complete", headers=auth_header(user_id=account))
    assert response.status_code == 200
    assert response.json() == {"profileComplete": False}


def test_complete_profile(client, account):
    headers = auth_header(user_id=account)
    response = client.put("/api/users/me/profile", json=PROFILE, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["profileComplete"] is True
    assert body["firstName"] == "Sarah"
    assert body["userType"] == "creator"
    assert body["categories"] == ["fashion", "beauty"]
    assert body["displayName"] == "Sarah Creator"

    assert client.get("/api/users/me/profile_complete", headers=headers).json() == {"profileComplete": True}


def test_blank_required_field_is_rejected(client, account):
    payload = dict(PROFILE, address="   ")
    response = client.put("/api/users/me/profile", json=payload, headers=auth_header(user_id=account))
    assert response.status_code == 422
    assert "address" in response.json()["detail"]


def test_missing_required_field_is_rejected(client, account):
    payload = {k: v for k, v in PROFILE.items() if k != "phoneNumber"}
    response = client.put("/api/users/me/profile", json=payload, headers=auth_header(user_id=account))
    assert response.status_code == 422


def test_unknown_user_type_is_rejected(client, account):
    payload = dict(PROFILE, userType="agency")
    response = client.put("/api/users/me/profile", json=payload, headers=auth_header(user_id=account))
    assert response.status_code == 422

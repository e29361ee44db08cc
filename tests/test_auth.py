from connext.core.security import create_access_token, verify_password
from connext.models import UserRole

from conftest import TEST_PASSWORD, make_user


def test_login_returns_token_and_user(client, pm):
    response = client.post("/api/auth/login", json={"email": "PM@mirae.com", "password": TEST_PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["email"] == pm.email
    assert body["mustChangePassword"] is False

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.json()["id"] == pm.id


def test_login_with_wrong_password(client, pm):
    response = client.post("/api/auth/login", json={"email": pm.email, "password": "wrong-password"})
    assert response.status_code == 401


def test_inactive_user_cannot_log_in(client, db):
    user = make_user(db, UserRole.PM, email="former@mirae.com", is_active=False)
    response = client.post("/api/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
    assert response.status_code == 403


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401


def test_change_password(client, db, pm, pm_headers):
    wrong = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "nope", "newPassword": "a-new-password"},
        headers=pm_headers,
    )
    assert wrong.status_code == 400

    same = client.post(
        "/api/auth/change-password",
        json={"currentPassword": TEST_PASSWORD, "newPassword": TEST_PASSWORD},
        headers=pm_headers,
    )
    assert same.status_code == 400

    ok = client.post(
        "/api/auth/change-password",
        json={"currentPassword": TEST_PASSWORD, "newPassword": "a-new-password"},
        headers=pm_headers,
    )
    assert ok.status_code == 200
    db.refresh(pm)
    assert verify_password("a-new-password", pm.hashed_password)


def test_employee_created_with_temporary_password(client, db, admin_headers):
    response = client.post(
        "/api/employees",
        json={"email": "new.ra@mirae.com", "fullName": "New Recruiter", "role": "ra"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["mustChangePassword"] is True
    temp_password = body["tempPassword"]
    assert temp_password

    login = client.post("/api/auth/login", json={"email": "new.ra@mirae.com", "password": temp_password})
    assert login.status_code == 200
    assert login.json()["mustChangePassword"] is True

    duplicate = client.post(
        "/api/employees",
        json={"email": "New.RA@mirae.com", "fullName": "Someone", "role": "ra"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 400


def test_reset_password_forces_change(client, db, admin_headers, ra):
    response = client.post(
        f"/api/employees/{ra.id}/reset-password", json={"tempPassword": "Temporary123"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["tempPassword"] == "Temporary123"
    db.refresh(ra)
    assert ra.must_change_password is True
    assert verify_password("Temporary123", ra.hashed_password)


def test_admin_cannot_delete_themselves(client, admin, admin_headers):
    assert client.delete(f"/api/employees/{admin.id}", headers=admin_headers).status_code == 400


def test_token_must_match_user_id_and_email(client, pm, ra):
    token = create_access_token(subject=ra.email, user_id=pm.id, role="ra")
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401

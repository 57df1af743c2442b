"""
API tests for /api/auth.
"""
import pytest

from app.core.security import verify_access_token
from app.models.user import User, Role
from tests.conftest import DEFAULT_PASSWORD, auth_headers


def register(client, email="jane@example.com", name="Jane", surname="Doe", password=DEFAULT_PASSWORD):
    return client.post("/api/auth/register", json={
        "email": email,
        "name": name,
        "surname": surname,
        "password": password,
    })


def assert_no_password(body):
    text = str(body).lower()
    assert "password" not in text
    assert "argon2" not in text


class TestRegister:

    def test_register_creates_user(self, client, db):
        response = register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "jane@example.com"
        assert body["user"]["name"] == "Jane"
        assert body["user"]["surname"] == "Doe"
        assert body["user"]["role"] == "USER"
        assert "token" not in body
        assert_no_password(body)

        db_user = db.query(User).filter(User.id == body["user"]["id"]).first()
        assert db_user.role == Role.USER
        assert db_user.hashed_password != DEFAULT_PASSWORD

    def test_register_normalizes_fields(self, client):
        response = register(client, email="  Jane@Example.COM ", name=" Jane ", surname=" Doe  ")

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "jane@example.com"
        assert user["name"] == "Jane"
        assert user["surname"] == "Doe"

    @pytest.mark.parametrize("second_email", [
        "jane@example.com",
        "JANE@EXAMPLE.COM",
        "  jane@example.com  ",
        "Jane@Example.com ",
    ])
    def test_duplicate_email_conflicts(self, client, second_email):
        assert register(client).status_code == 201

        response = register(client, email=second_email)

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    @pytest.mark.parametrize("missing", ["email", "name", "surname", "password"])
    def test_missing_field(self, client, missing):
        payload = {"email": "jane@example.com", "name": "Jane", "surname": "Doe", "password": "secret123"}
        del payload[missing]

        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_blank_field_counts_as_missing(self, client):
        response = register(client, name="   ")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_role_cannot_be_chosen(self, client):
        response = client.post("/api/auth/register", json={
            "email": "jane@example.com",
            "name": "Jane",
            "surname": "Doe",
            "password": "secret123",
            "role": "ADMIN",
        })

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FORMAT"

    def test_missing_body(self, client):
        response = client.post("/api/auth/register")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"


class TestLogin:

    def test_login_after_register(self, client):
        created = register(client, email="A@B.com ", name=" N", surname=" S", password="x").json()["user"]

        response = client.post("/api/auth/login", json={"email": "a@b.com", "password": "x"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"] == {
            "id": created["id"],
            "email": "a@b.com",
            "name": "N",
            "surname": "S",
            "role": "USER",
        }
        assert_no_password(body)

        claims = verify_access_token(body["token"])
        assert claims.id == created["id"]
        assert claims.email == "a@b.com"
        assert claims.role == Role.USER

    def test_login_is_case_insensitive(self, client, user):
        response = client.post("/api/auth/login", json={"email": "  USER@example.com ", "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    def test_wrong_password_and_unknown_email_look_the_same(self, client, user):
        wrong_password = client.post("/api/auth/login", json={"email": "user@example.com", "password": "nope"})
        unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope"})

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["code"] == "INVALID_CREDENTIALS"

    @pytest.mark.parametrize("payload", [
        {"email": "user@example.com"},
        {"password": "secret123"},
        {"email": "", "password": "secret123"},
        {},
    ])
    def test_missing_fields(self, client, payload):
        response = client.post("/api/auth/login", json=payload)

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_admin_login_carries_role(self, client, admin):
        response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "ADMIN"
        assert verify_access_token(response.json()["token"]).role == Role.ADMIN


class TestLogout:

    def test_logout_without_token(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully"}

    def test_logout_with_token(self, client, user):
        response = client.post("/api/auth/logout", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_logout_with_invalid_token(self, client):
        response = client.post("/api/auth/logout", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200


class TestCredentialEdges:

    def test_whitespace_password_is_kept(self, client):
        response = register(client, password="   ")

        assert response.status_code == 201
        login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "   "})
        assert login.status_code == 200
        wrong = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "  "})
        assert wrong.status_code == 401

    def test_unknown_email_still_checks_a_hash(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr("app.routes.auth.dummy_verify_password", lambda: calls.append(True))

        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope"})

        assert response.status_code == 401
        assert calls == [True]

    def test_known_email_skips_dummy_check(self, client, user, monkeypatch):
        calls = []
        monkeypatch.setattr("app.routes.auth.dummy_verify_password", lambda: calls.append(True))

        response = client.post("/api/auth/login", json={"email": "user@example.com", "password": "nope"})

        assert response.status_code == 401
        assert calls == []

"""
Tests for the access control dependencies on a throwaway app.
"""
from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app.core.dependencies import CurrentUser, get_optional_user, require_owner_or_admin
from app.core.errors import ApiError
from main import api_error_handler
from tests.conftest import auth_headers


@pytest.fixture
def gated_client():
    gated_app = FastAPI()
    gated_app.add_exception_handler(ApiError, api_error_handler)

    @gated_app.get("/users/{user_id}/profile")
    def profile(current_user: CurrentUser = Depends(require_owner_or_admin("user_id"))):
        return {"caller": current_user.id}

    @gated_app.get("/whoami")
    def whoami(current_user: Optional[CurrentUser] = Depends(get_optional_user)):
        return {"caller": current_user.id if current_user else None}

    return TestClient(gated_app)


class TestOwnerOrAdmin:

    def test_owner_passes(self, gated_client, user):
        response = gated_client.get(f"/users/{user.id}/profile", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json() == {"caller": user.id}

    def test_other_user_forbidden(self, gated_client, user, make_user):
        other = make_user(email="other@example.com")

        response = gated_client.get(f"/users/{other.id}/profile", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_admin_passes_for_anyone(self, gated_client, user, admin):
        response = gated_client.get(f"/users/{user.id}/profile", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {"caller": admin.id}

    def test_non_numeric_target_never_owned(self, gated_client, user):
        response = gated_client.get("/users/me/profile", headers=auth_headers(user))

        assert response.status_code == 403

    def test_non_ascii_digit_target_never_owned(self, gated_client, user):
        response = gated_client.get("/users/\u0661/profile", headers=auth_headers(user))

        assert response.status_code == 403

    def test_anonymous(self, gated_client, user):
        response = gated_client.get(f"/users/{user.id}/profile")

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"


class TestOptionalUser:

    def test_without_token(self, gated_client):
        assert gated_client.get("/whoami").json() == {"caller": None}

    def test_with_token(self, gated_client, user):
        assert gated_client.get("/whoami", headers=auth_headers(user)).json() == {"caller": user.id}

    def test_with_invalid_token(self, gated_client):
        response = gated_client.get("/whoami", headers={"Authorization": "Bearer nope"})

        assert response.json() == {"caller": None}

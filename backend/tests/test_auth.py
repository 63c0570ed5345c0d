"""Tests for the authentication API."""

from unittest.mock import patch

from fastapi import status
from fastapi.testclient import TestClient

from flashgen import models
from tests.conftest import TEST_PASSWORD

REGISTRATIONS_FLAG = (
    "flashgen.application.identity.use_cases.register_user_use_case"
    ".is_user_registrations_enabled"
)


class TestSignIn:
    """Test suite for POST /api/v1/auth in login mode."""

    def test_login_returns_token_and_sets_cookie(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        response = anonymous_client.post(
            "/api/v1/auth",
            json={"email": test_user.email, "password": TEST_PASSWORD, "mode": "login"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Authentication successful"
        assert data["data"]["userId"] == test_user.id
        assert data["data"]["token"]
        assert "access_token" in response.cookies

    def test_cookie_authenticates_later_requests(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        anonymous_client.post(
            "/api/v1/auth",
            json={"email": test_user.email, "password": TEST_PASSWORD, "mode": "login"},
        )

        response = anonymous_client.get("/api/v1/flashcards")

        assert response.status_code == status.HTTP_200_OK

    def test_wrong_password(self, anonymous_client: TestClient, test_user: models.User) -> None:
        response = anonymous_client.post(
            "/api/v1/auth",
            json={"email": test_user.email, "password": "not-the-password", "mode": "login"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Invalid email or password"

    def test_unknown_email(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(
            "/api/v1/auth",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD, "mode": "login"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_invalid_email_and_short_password(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(
            "/api/v1/auth",
            json={"email": "not-an-email", "password": "123", "mode": "login"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error"] == "Invalid request data"
        fields = {detail["field"]: detail["message"] for detail in data["details"]}
        assert "email" in fields
        assert fields["password"] == "Password must be at least 6 characters long"

    def test_missing_token(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/api/v1/flashcards")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Could not validate credentials"}

    def test_garbage_token(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get(
            "/api/v1/flashcards", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestRegister:
    """Test suite for account creation."""

    def test_register_through_auth_endpoint(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(
            "/api/v1/auth",
            json={"email": "new@example.com", "password": "secret123", "mode": "register"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Registration successful"
        assert data["data"]["userId"] > 0

        token = data["data"]["token"]
        follow_up = anonymous_client.get(
            "/api/v1/flashcards", headers={"Authorization": f"Bearer {token}"}
        )
        assert follow_up.status_code == status.HTTP_200_OK

    def test_register_endpoint(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(
            "/api/v1/auth/register",
            json={"email": "second@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["email"] == "second@example.com"
        assert data["needsConfirmation"] is False

    def test_duplicate_email(self, anonymous_client: TestClient, test_user: models.User) -> None:
        response = anonymous_client.post(
            "/api/v1/auth/register",
            json={"email": test_user.email, "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already registered" in response.json()["error"]

    def test_registration_disabled(self, anonymous_client: TestClient) -> None:
        with patch(REGISTRATIONS_FLAG, return_value=False):
            response = anonymous_client.post(
                "/api/v1/auth",
                json={"email": "late@example.com", "password": "secret123", "mode": "register"},
            )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"] == "User registration is currently disabled"


class TestLogout:
    """Test suite for POST /api/v1/auth/logout."""

    def test_logout_clears_cookie(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        anonymous_client.post(
            "/api/v1/auth",
            json={"email": test_user.email, "password": TEST_PASSWORD, "mode": "login"},
        )

        response = anonymous_client.post("/api/v1/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "message": "Logout successful"}
        assert anonymous_client.get("/api/v1/flashcards").status_code == (
            status.HTTP_401_UNAUTHORIZED
        )

"""Tests for the application root, health and settings endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from flashgen.config import Settings, get_settings
from flashgen.main import app


class TestRootEndpoints:
    """Test suite for endpoints that need no authentication."""

    def test_root(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Welcome to flashgen API"}

    def test_health(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "healthy"}

    def test_api_root(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/api/v1/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "flashgen API v1"
        assert data["docs"] == "/api/v1/docs"

    def test_settings_exposes_feature_flags(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/api/v1/settings")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "feature_flags": {"ai": True, "user_registrations": True},
            "proposals_start_accepted": False,
        }

    def test_settings_publishes_proposals_start_accepted(
        self, anonymous_client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROPOSALS_START_ACCEPTED", "true")
        app.dependency_overrides[get_settings] = lambda: Settings()

        response = anonymous_client.get("/api/v1/settings")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["proposals_start_accepted"] is True

    def test_unknown_route_uses_error_body(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get("/api/v1/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not Found"}

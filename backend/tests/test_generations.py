"""Tests for the generations and generation error logs API."""

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flashgen import models
from flashgen.application.generation.prompts import FLASHCARDS_SCHEMA
from flashgen.application.generation.protocols import (
    ChatCompletion,
    ChatMessage,
    JsonSchemaFormat,
)
from flashgen.config import Settings, get_settings
from flashgen.core import container
from flashgen.exceptions import GatewayErrorKind, UpstreamGatewayError
from flashgen.main import app
from tests.conftest import FakeLLMGateway, make_source_text

PROPOSALS = {
    "flashcards": [
        {"front": "What does photosynthesis produce?", "back": "Glucose and oxygen"},
        {"front": "Where does photosynthesis happen?", "back": "In the chloroplasts"},
    ]
}


class SlowLLMGateway:
    """Gateway that never answers in time."""

    async def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        *,
        model_name: str | None = None,
        params: Mapping[str, Any] | None = None,
        response_format: JsonSchemaFormat | None = None,
    ) -> ChatCompletion:
        await asyncio.sleep(5)
        return ChatCompletion(data=PROPOSALS)


def generate(client: TestClient, source_text: str | None = None) -> Any:
    return client.post(
        "/api/v1/generations", json={"source_text": source_text or make_source_text()}
    )


class TestGenerateFlashcards:
    """Test suite for POST /api/v1/generations."""

    def test_returns_proposals(
        self, client: TestClient, db_session: Session, fake_gateway: FakeLLMGateway
    ) -> None:
        fake_gateway.replies.append(PROPOSALS)

        response = generate(client)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["generated_count"] == 2
        assert data["flashcards_proposals"] == [
            {**card, "source": "ai-full"} for card in PROPOSALS["flashcards"]
        ]

        generation = db_session.get(models.Generation, data["generation_id"])
        assert generation is not None
        assert generation.generated_count == 2
        assert generation.source_text_length == 1500
        assert len(generation.source_text_hash) == 64
        assert generation.generation_duration >= 0

    def test_asks_for_structured_output_first(
        self, client: TestClient, fake_gateway: FakeLLMGateway
    ) -> None:
        fake_gateway.replies.append(PROPOSALS)

        generate(client)

        assert len(fake_gateway.calls) == 1
        assert fake_gateway.calls[0]["response_format"] == FLASHCARDS_SCHEMA
        assert fake_gateway.calls[0]["model_name"] == get_settings().OPENROUTER_DEFAULT_MODEL

    def test_falls_back_to_plain_json(
        self, client: TestClient, fake_gateway: FakeLLMGateway
    ) -> None:
        fake_gateway.replies.extend(
            [
                UpstreamGatewayError(
                    "OpenRouter API error (400): response_format not supported",
                    GatewayErrorKind.SCHEMA_REJECTED,
                    upstream_status=400,
                ),
                '```json\n{"flashcards": [{"front": "What is ATP?", "back": "Energy"}]}\n```',
            ]
        )

        response = generate(client)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["flashcards_proposals"] == [
            {"front": "What is ATP?", "back": "Energy", "source": "ai-full"}
        ]
        assert len(fake_gateway.calls) == 2
        assert fake_gateway.calls[1]["response_format"] is None

    def test_gateway_failure_is_logged(
        self, client: TestClient, db_session: Session, fake_gateway: FakeLLMGateway
    ) -> None:
        fake_gateway.replies.append(
            UpstreamGatewayError(
                "OpenRouter API error (502): Bad Gateway",
                GatewayErrorKind.HTTP_ERROR,
                upstream_status=502,
            )
        )

        response = generate(client)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["error"] == "OpenRouter API error (502): Bad Gateway"
        assert body["details"] == {"error_kind": "http_error", "upstream_status": 502}

        logs = db_session.query(models.GenerationErrorLog).all()
        assert len(logs) == 1
        assert logs[0].error_code == "http_error"
        assert logs[0].source_text_length == 1500

    def test_unparseable_reply(
        self, client: TestClient, db_session: Session, fake_gateway: FakeLLMGateway
    ) -> None:
        fake_gateway.replies.extend(
            [
                UpstreamGatewayError("schema rejected", GatewayErrorKind.SCHEMA_REJECTED),
                "Sure! Here are some flashcards about plants.",
            ]
        )

        response = generate(client)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert db_session.query(models.GenerationErrorLog).one().error_code == "invalid_response"

    @pytest.mark.parametrize(
        ("length", "expected_status"),
        [
            (999, status.HTTP_400_BAD_REQUEST),
            (1000, status.HTTP_200_OK),
            (10000, status.HTTP_200_OK),
            (10001, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_source_text_length_bounds(
        self,
        client: TestClient,
        fake_gateway: FakeLLMGateway,
        length: int,
        expected_status: int,
    ) -> None:
        fake_gateway.replies.append(PROPOSALS)

        response = generate(client, make_source_text(length))

        assert response.status_code == expected_status

    def test_short_text_never_reaches_gateway(
        self, client: TestClient, fake_gateway: FakeLLMGateway
    ) -> None:
        response = generate(client, make_source_text(999))

        assert response.json()["details"] == [
            {
                "field": "source_text",
                "message": "Source text must be at least 1000 characters long",
            }
        ]
        assert fake_gateway.calls == []

    def test_ai_disabled(self, client: TestClient, fake_gateway: FakeLLMGateway) -> None:
        app.dependency_overrides[get_settings] = lambda: Settings(OPENROUTER_API_KEY=None)

        response = generate(client)

        assert response.status_code == status.HTTP_410_GONE
        assert response.json() == {"error": "AI features are not enabled on this server"}
        assert fake_gateway.calls == []

    def test_timeout(self, client: TestClient, db_session: Session) -> None:
        app.dependency_overrides[get_settings] = lambda: Settings(GENERATION_TIMEOUT_SECONDS=0.1)

        with container.llm_gateway.override(providers.Object(SlowLLMGateway())):
            response = generate(client)

        assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT
        assert response.json()["error"] == "Generation timed out"
        assert db_session.query(models.GenerationErrorLog).one().error_code == "timeout"

    def test_requires_authentication(self, anonymous_client: TestClient) -> None:
        response = generate(anonymous_client)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestGenerationQueries:
    """Test suite for reading generations and their error logs."""

    def test_list_generations(
        self, client: TestClient, test_generation: models.Generation
    ) -> None:
        response = client.get("/api/v1/generations")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [generation["id"] for generation in data["data"]] == [test_generation.id]
        assert data["pagination"]["total"] == 1

    def test_list_excludes_foreign_generations(
        self, client: TestClient, foreign_generation: models.Generation
    ) -> None:
        response = client.get("/api/v1/generations")

        assert response.json()["data"] == []

    def test_get_generation_with_saved_flashcards(
        self, client: TestClient, test_generation: models.Generation
    ) -> None:
        client.post(
            "/api/v1/flashcards",
            json={
                "flashcards": [
                    {
                        "front": "What is chlorophyll?",
                        "back": "A green pigment",
                        "source": "ai-full",
                        "generation_id": test_generation.id,
                    }
                ]
            },
        )

        response = client.get(f"/api/v1/generations/{test_generation.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["generated_count"] == 3
        assert data["generation_duration"] == 1200
        assert [card["front"] for card in data["flashcards"]] == ["What is chlorophyll?"]

    def test_foreign_generation_looks_missing(
        self, client: TestClient, foreign_generation: models.Generation
    ) -> None:
        response = client.get(f"/api/v1/generations/{foreign_generation.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_error_logs(self, client: TestClient, fake_gateway: FakeLLMGateway) -> None:
        fake_gateway.replies.append(
            UpstreamGatewayError("Could not reach OpenRouter API", GatewayErrorKind.NETWORK_ERROR)
        )
        generate(client)

        response = client.get("/api/v1/generation-error-logs")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["pagination"]["total"] == 1
        assert data["data"][0]["error_code"] == "network_error"
        assert data["data"][0]["model"] == get_settings().OPENROUTER_DEFAULT_MODEL

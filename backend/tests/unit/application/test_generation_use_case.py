"""Tests for GenerationUseCase."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from flashgen.application.generation.prompts import (
    FALLBACK_SYSTEM_PROMPT,
    FLASHCARDS_SCHEMA,
    SYSTEM_PROMPT,
)
from flashgen.application.generation.protocols import ChatCompletion
from flashgen.application.generation.use_cases.generation_use_case import GenerationUseCase
from flashgen.domain.common.value_objects import ContentHash, GenerationId
from flashgen.domain.generation.entities import FlashcardProposal, Generation
from flashgen.exceptions import GatewayErrorKind, PersistenceError, UpstreamGatewayError

SOURCE_TEXT = "Mitochondria are the powerhouse of the cell. " * 30
MODEL = "openai/gpt-4o-mini"


def _assign_id(generation: Generation) -> Generation:
    if not generation.id.is_persisted:
        generation.id = GenerationId(11)
    return generation


@pytest.fixture
def generation_repository() -> MagicMock:
    repository = MagicMock()
    repository.save.side_effect = _assign_id
    return repository


@pytest.fixture
def error_log_repository() -> MagicMock:
    return MagicMock()


@pytest.fixture
def gateway() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def use_case(
    generation_repository: MagicMock, error_log_repository: MagicMock, gateway: AsyncMock
) -> GenerationUseCase:
    return GenerationUseCase(
        generation_repository=generation_repository,
        error_log_repository=error_log_repository,
        llm_gateway=gateway,
        model_name=MODEL,
    )


def _schema_rejected() -> UpstreamGatewayError:
    return UpstreamGatewayError(
        "OpenRouter API error (422): unsupported", GatewayErrorKind.SCHEMA_REJECTED
    )


class TestGenerateFlashcards:
    async def test_structured_reply(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        generation_repository: MagicMock,
        error_log_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.return_value = ChatCompletion(
            data={"flashcards": [{"front": " What is ATP? ", "back": "Energy currency "}]}
        )

        outcome = await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert outcome.generation_id == 11
        assert outcome.generated_count == 1
        assert outcome.proposals == [
            FlashcardProposal(front="What is ATP?", back="Energy currency")
        ]

        messages = gateway.chat_completion.call_args.args[0]
        assert messages[0].content == SYSTEM_PROMPT
        assert SOURCE_TEXT in messages[1].content
        assert gateway.chat_completion.call_args.kwargs["response_format"] == FLASHCARDS_SCHEMA

        stored: Generation = generation_repository.save.call_args.args[0]
        assert stored.generated_count == 1
        assert stored.source_text_hash == ContentHash.compute(SOURCE_TEXT)
        assert stored.source_text_length == len(SOURCE_TEXT)
        assert generation_repository.save.call_count == 2
        error_log_repository.save.assert_not_called()

    async def test_hashes_source_text_once(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        generation_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.return_value = ChatCompletion(
            data={"flashcards": [{"front": "Q?", "back": "A"}]}
        )

        with patch.object(ContentHash, "compute", wraps=ContentHash.compute) as compute:
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        compute.assert_called_once_with(SOURCE_TEXT)
        stored: Generation = generation_repository.save.call_args.args[0]
        assert stored.source_text_hash == ContentHash.compute(SOURCE_TEXT)

    async def test_falls_back_when_schema_rejected(
        self, use_case: GenerationUseCase, gateway: AsyncMock
    ) -> None:
        gateway.chat_completion.side_effect = [
            _schema_rejected(),
            ChatCompletion(data='[{"front": "Q1?", "back": "A1"}, {"front": "Q2?", "back": "A2"}]'),
        ]

        outcome = await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert [p.front for p in outcome.proposals] == ["Q1?", "Q2?"]
        fallback = gateway.chat_completion.call_args_list[1]
        assert fallback.args[0][0].content == FALLBACK_SYSTEM_PROMPT
        assert fallback.kwargs.get("response_format") is None

    async def test_falls_back_when_structured_reply_has_wrong_shape(
        self, use_case: GenerationUseCase, gateway: AsyncMock
    ) -> None:
        gateway.chat_completion.side_effect = [
            ChatCompletion(data="not an object"),
            ChatCompletion(data={"flashcards": [{"front": "Q?", "back": "A"}]}),
        ]

        outcome = await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert outcome.generated_count == 1
        assert gateway.chat_completion.await_count == 2

    async def test_fenced_json_reply(
        self, use_case: GenerationUseCase, gateway: AsyncMock
    ) -> None:
        gateway.chat_completion.side_effect = [
            _schema_rejected(),
            ChatCompletion(data='```json\n{"flashcards": [{"front": "Q?", "back": "A"}]}\n```'),
        ]

        outcome = await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert outcome.proposals == [FlashcardProposal(front="Q?", back="A")]

    async def test_skips_malformed_items(
        self, use_case: GenerationUseCase, gateway: AsyncMock
    ) -> None:
        gateway.chat_completion.return_value = ChatCompletion(
            data={
                "flashcards": [
                    {"front": "Q?", "back": "A"},
                    {"front": "   ", "back": "A"},
                    {"front": "Q?"},
                    "not a card",
                    {"front": 3, "back": "A"},
                ]
            }
        )

        outcome = await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert outcome.generated_count == 1

    async def test_other_gateway_errors_are_not_retried(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        error_log_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.side_effect = UpstreamGatewayError(
            "Could not reach OpenRouter API", GatewayErrorKind.NETWORK_ERROR
        )

        with pytest.raises(UpstreamGatewayError):
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert gateway.chat_completion.await_count == 1
        log = error_log_repository.save.call_args.args[0]
        assert log.error_code == "network_error"
        assert log.error_message == "Could not reach OpenRouter API"
        assert log.model == MODEL
        assert log.source_text_hash == ContentHash.compute(SOURCE_TEXT)

    async def test_invalid_plain_reply(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        error_log_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.side_effect = [_schema_rejected(), ChatCompletion(data="nope")]

        with pytest.raises(UpstreamGatewayError) as exc_info:
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert exc_info.value.error_kind is GatewayErrorKind.INVALID_RESPONSE
        assert error_log_repository.save.call_args.args[0].error_code == "invalid_response"

    async def test_persistence_failure_is_logged(
        self,
        use_case: GenerationUseCase,
        generation_repository: MagicMock,
        error_log_repository: MagicMock,
    ) -> None:
        generation_repository.save.side_effect = PersistenceError("Could not save generation")

        with pytest.raises(PersistenceError):
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert error_log_repository.save.call_args.args[0].error_code == "persistence_error"

    async def test_unexpected_error_uses_generic_code(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        error_log_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

        assert error_log_repository.save.call_args.args[0].error_code == "GEN_ERROR"

    async def test_error_log_failure_does_not_hide_original_error(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        error_log_repository: MagicMock,
    ) -> None:
        gateway.chat_completion.side_effect = UpstreamGatewayError(
            "OpenRouter API error (500): oops", GatewayErrorKind.HTTP_ERROR
        )
        error_log_repository.save.side_effect = PersistenceError("Could not save error log")

        with pytest.raises(UpstreamGatewayError):
            await use_case.generate_flashcards(SOURCE_TEXT, user_id=1)

    async def test_cancellation_is_logged_as_timeout(
        self,
        use_case: GenerationUseCase,
        gateway: AsyncMock,
        error_log_repository: MagicMock,
    ) -> None:
        async def hang(*args: object, **kwargs: object) -> ChatCompletion:
            await asyncio.sleep(5)
            return ChatCompletion(data={"flashcards": []})

        gateway.chat_completion.side_effect = hang

        with pytest.raises(TimeoutError):
            await asyncio.wait_for(use_case.generate_flashcards(SOURCE_TEXT, user_id=1), 0.05)

        assert error_log_repository.save.call_args.args[0].error_code == "timeout"

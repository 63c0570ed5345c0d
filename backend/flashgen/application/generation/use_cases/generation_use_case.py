"""Use case for AI flashcard generation."""

import asyncio
import json
import re
import time
from typing import Any

import structlog

from flashgen.application.generation.prompts import (
    FALLBACK_SYSTEM_PROMPT,
    FLASHCARDS_SCHEMA,
    SYSTEM_PROMPT,
    build_user_prompt,
)
from flashgen.application.generation.protocols import (
    ChatMessage,
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
    LLMGatewayProtocol,
)
from flashgen.application.generation.use_cases.dtos import GenerationOutcome
from flashgen.domain.common.value_objects import ContentHash, UserId
from flashgen.domain.generation.entities import (
    GENERIC_ERROR_CODE,
    FlashcardProposal,
    Generation,
    GenerationErrorLog,
)
from flashgen.exceptions import GatewayErrorKind, PersistenceError, UpstreamGatewayError

logger = structlog.get_logger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)

TIMEOUT_ERROR_CODE = "timeout"
PERSISTENCE_ERROR_CODE = "persistence_error"


class GenerationUseCase:
    """Turns source text into flashcard proposals and records every attempt."""

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        error_log_repository: GenerationErrorLogRepositoryProtocol,
        llm_gateway: LLMGatewayProtocol,
        model_name: str,
    ) -> None:
        """Initialize use case with repositories, the gateway and the model to ask."""
        self.generation_repository = generation_repository
        self.error_log_repository = error_log_repository
        self.llm_gateway = llm_gateway
        self.model_name = model_name

    async def generate_flashcards(self, source_text: str, user_id: int) -> GenerationOutcome:
        """
        Generate flashcard proposals for a text.

        A Generation row is stored before the model is asked and updated with
        the proposal count and duration afterwards. Proposals themselves are
        returned for review, not stored.

        Args:
            source_text: Text to learn from (already validated for length)
            user_id: ID of the requesting user

        Returns:
            GenerationOutcome with the generation ID and the proposals

        Raises:
            UpstreamGatewayError: If the model could not be reached or answered badly
            PersistenceError: If the generation could not be recorded
        """
        started = time.perf_counter()
        user_id_vo = UserId(user_id)
        source_text_hash = ContentHash.compute(source_text)

        logger.info(
            "generation_started",
            user_id=user_id,
            model=self.model_name,
            source_text_length=len(source_text),
        )

        try:
            generation = self.generation_repository.save(
                Generation.create(
                    user_id=user_id_vo,
                    model=self.model_name,
                    source_text_hash=source_text_hash,
                    source_text_length=len(source_text),
                )
            )

            proposals = await self._request_proposals(source_text)

            duration_ms = round((time.perf_counter() - started) * 1000)
            generation.record_outcome(generated_count=len(proposals), duration_ms=duration_ms)
            generation = self.generation_repository.save(generation)
        except asyncio.CancelledError:
            self._log_failure(
                TIMEOUT_ERROR_CODE,
                "Generation was cancelled before it finished",
                user_id_vo,
                source_text_hash,
                len(source_text),
            )
            raise
        except Exception as e:
            self._log_failure(
                self._error_code_for(e), str(e), user_id_vo, source_text_hash, len(source_text)
            )
            raise

        logger.info(
            "generation_completed",
            generation_id=generation.id.value,
            generated_count=generation.generated_count,
            duration_ms=generation.generation_duration,
        )

        return GenerationOutcome(
            generation_id=generation.id.value,
            generated_count=generation.generated_count,
            proposals=proposals,
        )

    async def _request_proposals(self, source_text: str) -> list[FlashcardProposal]:
        user_message = ChatMessage(role="user", content=build_user_prompt(source_text))

        try:
            completion = await self.llm_gateway.chat_completion(
                [ChatMessage(role="system", content=SYSTEM_PROMPT), user_message],
                model_name=self.model_name,
                response_format=FLASHCARDS_SCHEMA,
            )
            return self._parse_structured(completion.data)
        except UpstreamGatewayError as e:
            if e.error_kind is not GatewayErrorKind.SCHEMA_REJECTED:
                raise
            logger.warning(
                "structured_output_rejected",
                model=self.model_name,
                upstream_status=e.upstream_status,
                error=e.message,
            )

        completion = await self.llm_gateway.chat_completion(
            [ChatMessage(role="system", content=FALLBACK_SYSTEM_PROMPT), user_message],
            model_name=self.model_name,
        )
        return self._parse_plain(completion.data)

    def _parse_structured(self, data: Any) -> list[FlashcardProposal]:
        if not isinstance(data, dict) or not isinstance(data.get("flashcards"), list):
            raise UpstreamGatewayError(
                "Structured reply does not match the flashcards schema",
                GatewayErrorKind.SCHEMA_REJECTED,
            )
        return self._to_proposals(data["flashcards"])

    def _parse_plain(self, data: Any) -> list[FlashcardProposal]:
        if isinstance(data, str):
            text = data.strip()
            fenced = _CODE_FENCE.match(text)
            if fenced:
                text = fenced.group(1)
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise UpstreamGatewayError(
                    "Model reply is not valid JSON", GatewayErrorKind.INVALID_RESPONSE
                ) from e

        if isinstance(data, list):
            return self._to_proposals(data)
        if isinstance(data, dict) and isinstance(data.get("flashcards"), list):
            return self._to_proposals(data["flashcards"])
        raise UpstreamGatewayError(
            "Model reply does not contain a flashcards list", GatewayErrorKind.INVALID_RESPONSE
        )

    @staticmethod
    def _to_proposals(items: list[Any]) -> list[FlashcardProposal]:
        proposals = []
        for item in items:
            if not isinstance(item, dict):
                continue
            front, back = item.get("front"), item.get("back")
            if not isinstance(front, str) or not isinstance(back, str):
                continue
            front, back = front.strip(), back.strip()
            if front and back:
                proposals.append(FlashcardProposal(front=front, back=back))
        return proposals

    @staticmethod
    def _error_code_for(error: Exception) -> str:
        if isinstance(error, UpstreamGatewayError):
            return error.error_kind.value
        if isinstance(error, PersistenceError):
            return PERSISTENCE_ERROR_CODE
        return GENERIC_ERROR_CODE

    def _log_failure(
        self,
        error_code: str,
        error_message: str,
        user_id: UserId,
        source_text_hash: ContentHash,
        source_text_length: int,
    ) -> None:
        logger.error(
            "generation_failed",
            user_id=user_id.value,
            model=self.model_name,
            error_code=error_code,
            error=error_message,
        )
        try:
            self.error_log_repository.save(
                GenerationErrorLog.create(
                    user_id=user_id,
                    error_code=error_code,
                    error_message=error_message,
                    model=self.model_name,
                    source_text_hash=source_text_hash,
                    source_text_length=source_text_length,
                )
            )
        except Exception:
            logger.exception("generation_error_log_failed", error_code=error_code)

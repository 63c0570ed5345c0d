"""OpenRouter chat-completion client."""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from flashgen.application.generation.protocols import (
    ChatCompletion,
    ChatMessage,
    JsonSchemaFormat,
)
from flashgen.config import Settings
from flashgen.exceptions import (
    GatewayConfigurationError,
    GatewayErrorKind,
    UpstreamGatewayError,
)

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 55.0

# Statuses OpenRouter answers with when a model cannot honour `response_format`
SCHEMA_REJECTION_STATUSES = frozenset({400, 404, 422})


def _default_params() -> dict[str, Any]:
    return {"temperature": 0.7, "top_p": 0.9, "max_tokens": 1000}


@dataclass(frozen=True)
class OpenRouterConfig:
    """Connection settings for OpenRouter."""

    api_key: str | None
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    default_params: Mapping[str, Any] = field(default_factory=_default_params)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenRouterConfig":
        return cls(
            api_key=settings.OPENROUTER_API_KEY,
            base_url=settings.OPENROUTER_BASE_URL,
            default_model=settings.OPENROUTER_DEFAULT_MODEL,
            timeout_seconds=settings.OPENROUTER_TIMEOUT_SECONDS,
        )


class OpenRouterClient:
    """
    Thin async client for the OpenRouter chat-completion API.

    Every failure is raised as UpstreamGatewayError with a GatewayErrorKind
    telling the caller what went wrong. The client never retries.
    """

    def __init__(
        self,
        config: OpenRouterConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.api_key:
            raise GatewayConfigurationError("OpenRouter API key is required")
        self.api_key = config.api_key
        self.base_url = config.base_url.rstrip("/")
        self.default_model = config.default_model
        self.default_params = dict(config.default_params)
        self.timeout_seconds = config.timeout_seconds
        self._transport = transport

    def set_default_model(self, model_name: str) -> None:
        self.default_model = model_name

    def set_default_params(self, params: Mapping[str, Any]) -> None:
        """Merge params into the defaults sent with every request."""
        self.default_params = {**self.default_params, **params}

    async def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        *,
        model_name: str | None = None,
        params: Mapping[str, Any] | None = None,
        response_format: JsonSchemaFormat | None = None,
    ) -> ChatCompletion:
        """
        Send one chat-completion request.

        Args:
            messages: Conversation in order
            model_name: Model to use instead of the default
            params: Sampling parameters overriding the defaults
            response_format: JSON schema the reply has to follow

        Returns:
            ChatCompletion with the reply (parsed if it is a JSON object) and
            the raw response body

        Raises:
            UpstreamGatewayError: If the request fails or the reply is unusable
        """
        payload: dict[str, Any] = {
            "model": model_name or self.default_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            **self.default_params,
            **(params or {}),
        }
        if response_format is not None:
            payload["response_format"] = response_format.to_payload()

        response = await self._send("POST", "/chat/completions", json=payload)

        if not response.is_success:
            body = response.text
            kind = (
                GatewayErrorKind.SCHEMA_REJECTED
                if response_format is not None
                and response.status_code in SCHEMA_REJECTION_STATUSES
                else GatewayErrorKind.HTTP_ERROR
            )
            logger.warning(
                "openrouter_request_failed",
                status_code=response.status_code,
                error_kind=kind.value,
                model=payload["model"],
            )
            raise UpstreamGatewayError(
                f"OpenRouter API error ({response.status_code}): {body}",
                kind,
                upstream_status=response.status_code,
                body=body,
            )

        raw = self._json_body(response)
        content = self._message_content(raw)

        data: Any = content
        if content.strip().startswith("{"):
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = content

        return ChatCompletion(data=data, raw=raw)

    async def list_models(self) -> list[str]:
        """Get the IDs of the models OpenRouter offers."""
        response = await self._send("GET", "/models")
        if not response.is_success:
            raise UpstreamGatewayError(
                f"Failed to fetch models ({response.status_code})",
                GatewayErrorKind.HTTP_ERROR,
                upstream_status=response.status_code,
                body=response.text,
            )
        raw = self._json_body(response)
        models = raw.get("data")
        if not isinstance(models, list):
            raise UpstreamGatewayError(
                "Invalid model list from OpenRouter API", GatewayErrorKind.INVALID_RESPONSE
            )
        return [model["id"] for model in models if isinstance(model, dict) and "id" in model]

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                return await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("openrouter_unreachable", path=path, error=str(e))
            raise UpstreamGatewayError(
                f"Could not reach OpenRouter API: {e}", GatewayErrorKind.NETWORK_ERROR
            ) from e

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            raw = response.json()
        except ValueError as e:
            raise UpstreamGatewayError(
                "OpenRouter API returned a non-JSON body",
                GatewayErrorKind.INVALID_RESPONSE,
                upstream_status=response.status_code,
                body=response.text,
            ) from e
        if not isinstance(raw, dict):
            raise UpstreamGatewayError(
                "Invalid response from OpenRouter API", GatewayErrorKind.INVALID_RESPONSE
            )
        return raw

    @staticmethod
    def _message_content(raw: Mapping[str, Any]) -> str:
        choices = raw.get("choices")
        if not isinstance(choices, list) or not choices:
            raise UpstreamGatewayError(
                "Invalid response from OpenRouter API", GatewayErrorKind.INVALID_RESPONSE
            )
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str) or not content:
            raise UpstreamGatewayError(
                "Invalid response from OpenRouter API", GatewayErrorKind.INVALID_RESPONSE
            )
        return content

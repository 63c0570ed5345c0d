from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

ChatRole = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str


@dataclass(frozen=True)
class JsonSchemaFormat:
    """Structured-output contract: the reply must match `schema`."""

    name: str
    schema: Mapping[str, Any]
    strict: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {"name": self.name, "strict": self.strict, "schema": self.schema},
        }


@dataclass(frozen=True)
class ChatCompletion:
    """
    Parsed answer of a chat completion.

    `data` is a dict when the reply was a JSON object, otherwise the raw
    reply text. `raw` is the full response body.
    """

    data: Any
    raw: Mapping[str, Any] = field(default_factory=dict)


class LLMGatewayProtocol(Protocol):
    async def chat_completion(
        self,
        messages: Sequence[ChatMessage],
        *,
        model_name: str | None = None,
        params: Mapping[str, Any] | None = None,
        response_format: JsonSchemaFormat | None = None,
    ) -> ChatCompletion: ...

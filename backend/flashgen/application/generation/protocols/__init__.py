from .generation_repository import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from .llm_gateway import ChatCompletion, ChatMessage, JsonSchemaFormat, LLMGatewayProtocol

__all__ = [
    "ChatCompletion",
    "ChatMessage",
    "GenerationErrorLogRepositoryProtocol",
    "GenerationRepositoryProtocol",
    "JsonSchemaFormat",
    "LLMGatewayProtocol",
]

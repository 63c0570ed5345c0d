"""flashgen REST API client."""

import logging
from collections.abc import Sequence
from typing import Any, Self

import httpx

from flashgen.domain.learning.services import FlashcardDraft

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class FlashgenApiError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, message: str, details: object | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "FlashgenApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return cls(response.status_code, str(body["error"]), body.get("details"))
        return cls(response.status_code, f"Request failed with status {response.status_code}")


class FlashgenClient:
    """HTTP client for the flashgen REST API.

    Signs in once and sends the access token as a Bearer header on every
    later call.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._access_token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        response = await self._client.request(
            method, f"{API_PREFIX}{path}", headers=headers, **kwargs
        )
        if response.is_error:
            error = FlashgenApiError.from_response(response)
            logger.warning(f"{method} {path} failed with {error.status_code}: {error.message}")
            raise error
        return response.json()

    # --- Auth endpoints ---

    async def sign_in(self, email: str, password: str) -> int:
        """Sign in and keep the access token. Returns the user ID."""
        body = await self._request(
            "POST", "/auth", json={"email": email, "password": password, "mode": "login"}
        )
        self._access_token = body["data"]["token"]
        logger.info("Authenticated with flashgen API")
        return body["data"]["userId"]

    async def register(self, email: str, password: str) -> int:
        """Create an account and sign in with it. Returns the user ID."""
        body = await self._request(
            "POST", "/auth", json={"email": email, "password": password, "mode": "register"}
        )
        self._access_token = body["data"]["token"]
        return body["data"]["userId"]

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")
        self._access_token = None

    # --- Settings ---

    async def get_app_settings(self) -> dict:
        """Get the public settings: feature flags and review defaults."""
        return await self._request("GET", "/settings")

    # --- Generation endpoints ---

    async def generate(self, source_text: str) -> dict:
        """Ask for flashcard proposals for a 1000-10000 character text."""
        return await self._request("POST", "/generations", json={"source_text": source_text})

    async def get_generation(self, generation_id: int) -> dict:
        return await self._request("GET", f"/generations/{generation_id}")

    # --- Flashcard endpoints ---

    async def create_flashcards(self, drafts: Sequence[FlashcardDraft]) -> list[dict]:
        """Store a batch of flashcards. Returns the created flashcards."""
        payload = {
            "flashcards": [
                {
                    "front": draft.front,
                    "back": draft.back,
                    "source": draft.source.value,
                    "generation_id": draft.generation_id,
                }
                for draft in drafts
            ]
        }
        body = await self._request("POST", "/flashcards", json=payload)
        return body["flashcards"]

    async def list_flashcards(self, page: int = 1, limit: int = 20) -> dict:
        """Get one page of flashcards with pagination info."""
        return await self._request("GET", "/flashcards", params={"page": page, "limit": limit})

    async def get_flashcard(self, flashcard_id: int) -> dict:
        return await self._request("GET", f"/flashcards/{flashcard_id}")

    async def update_flashcard(self, flashcard_id: int, **changes: Any) -> dict:
        """Change some of front, back, source and generation_id."""
        return await self._request("PUT", f"/flashcards/{flashcard_id}", json=changes)

    async def delete_flashcard(self, flashcard_id: int) -> None:
        await self._request("DELETE", f"/flashcards/{flashcard_id}")

"""
Client-side review of generated flashcards.

ReviewSession keeps the review state for one text: it asks the API for
proposals, lets the user accept, reject or edit them, and saves the
chosen ones as one batch.

Example:
    async with FlashgenClient("http://localhost:8000", token=token) as client:
        session = ReviewSession(client)
        await session.generate(text)
        session.accept(0)
        session.edit(1, "What is H2O?", "Water")
        await session.save_accepted()
"""

import logging

from flashgen.client.api_client import FlashgenApiError, FlashgenClient
from flashgen.domain.common.exceptions import ValidationError
from flashgen.domain.generation.entities import FlashcardProposal
from flashgen.domain.generation.services import (
    ReviewState,
    accept,
    edit,
    prepare_for_save,
    reject,
    start_review,
)

logger = logging.getLogger(__name__)


class ReviewSession:
    """Generation and review flow on top of the REST API."""

    def __init__(self, client: FlashgenClient, *, start_accepted: bool | None = None) -> None:
        """Use the server's `proposals_start_accepted` unless start_accepted is given."""
        self.client = client
        self.start_accepted = start_accepted
        self.state = ReviewState()
        self.pending_text = ""
        self.error: str | None = None
        self.success_message: str | None = None
        self.is_generating = False
        self.is_saving = False

    @property
    def source_text(self) -> str:
        return self.pending_text

    @property
    def generation_id(self) -> int | None:
        return self.state.generation_id

    def clear_messages(self) -> None:
        self.error = None
        self.success_message = None

    def dismiss_error(self) -> None:
        self.error = None

    async def generate(self, source_text: str) -> bool:
        """
        Ask for proposals and open a fresh review for them.

        Returns:
            True on success; on failure `error` holds the API's message,
            the previous review is kept and `source_text` still holds the
            submitted text
        """
        self.clear_messages()
        self.pending_text = source_text
        self.is_generating = True
        try:
            if self.start_accepted is None:
                app_settings = await self.client.get_app_settings()
                self.start_accepted = bool(app_settings.get("proposals_start_accepted", False))
            body = await self.client.generate(source_text)
        except FlashgenApiError as e:
            self.error = e.message
            return False
        finally:
            self.is_generating = False

        proposals = [
            FlashcardProposal(front=proposal["front"], back=proposal["back"])
            for proposal in body["flashcards_proposals"]
        ]
        self.state = start_review(
            body["generation_id"], source_text, proposals, start_accepted=self.start_accepted
        )
        self.success_message = f"Successfully generated {body['generated_count']} flashcards."
        return True

    def accept(self, index: int) -> None:
        self.clear_messages()
        self.state = accept(self.state, index)

    def reject(self, index: int) -> None:
        self.clear_messages()
        self.state = reject(self.state, index)

    def edit(self, index: int, front: str, back: str) -> bool:
        """Change a proposal's text; an invalid text is reported through `error`."""
        self.clear_messages()
        try:
            self.state = edit(self.state, index, front, back)
        except ValidationError as e:
            self.error = e.message
            return False
        return True

    async def save_all(self) -> bool:
        """Save every proposal, accepted or not."""
        return await self._save(only_accepted=False)

    async def save_accepted(self) -> bool:
        """Save only the accepted proposals."""
        return await self._save(only_accepted=True)

    async def _save(self, *, only_accepted: bool) -> bool:
        drafts = (
            prepare_for_save(self.state, only_accepted=only_accepted)
            if self.state.generation_id is not None
            else []
        )
        if not drafts:
            self.error = "No flashcards to save."
            return False

        self.clear_messages()
        self.is_saving = True
        try:
            created = await self.client.create_flashcards(drafts)
        except FlashgenApiError as e:
            self.error = e.message
            return False
        finally:
            self.is_saving = False

        count = len(created)
        logger.info(f"Saved {count} flashcards from generation {self.state.generation_id}")
        self.state = ReviewState()
        self.pending_text = ""
        self.success_message = f"Successfully saved {count} flashcard{'s' if count != 1 else ''}."
        return True

"""Tests for ReviewSession."""

from unittest.mock import AsyncMock

import pytest

from flashgen.client import FlashgenApiError, FlashgenClient, ReviewSession
from flashgen.domain.learning.value_objects import FlashcardSource

SOURCE_TEXT = "Enzymes speed up chemical reactions in living cells. " * 25


def _generated(count: int) -> dict:
    return {
        "generation_id": 42,
        "generated_count": count,
        "flashcards_proposals": [
            {"front": f"Question {n}?", "back": f"Answer {n}", "source": "ai-full"}
            for n in range(count)
        ],
    }


def _app_settings(*, start_accepted: bool) -> dict:
    return {
        "feature_flags": {"ai": True, "user_registrations": True},
        "proposals_start_accepted": start_accepted,
    }


@pytest.fixture
def api() -> AsyncMock:
    client = AsyncMock(spec=FlashgenClient)
    client.get_app_settings.return_value = _app_settings(start_accepted=False)
    client.generate.return_value = _generated(5)
    client.create_flashcards.side_effect = lambda drafts: [{"id": n} for n in range(len(drafts))]
    return client


@pytest.fixture
async def session(api: AsyncMock) -> ReviewSession:
    review = ReviewSession(api)
    await review.generate(SOURCE_TEXT)
    return review


class TestGenerate:
    async def test_opens_review(self, session: ReviewSession, api: AsyncMock) -> None:
        api.generate.assert_awaited_once_with(SOURCE_TEXT)
        assert session.generation_id == 42
        assert session.source_text == SOURCE_TEXT
        assert len(session.state.proposals) == 5
        assert session.state.accepted_count == 0
        assert session.success_message == "Successfully generated 5 flashcards."
        assert not session.is_generating

    async def test_start_accepted(self, api: AsyncMock) -> None:
        review = ReviewSession(api, start_accepted=True)

        await review.generate(SOURCE_TEXT)

        assert review.state.accepted_count == 5
        api.get_app_settings.assert_not_awaited()

    async def test_start_accepted_from_server_settings(self, api: AsyncMock) -> None:
        api.get_app_settings.return_value = _app_settings(start_accepted=True)
        api.generate.return_value = _generated(2)
        review = ReviewSession(api)

        await review.generate(SOURCE_TEXT)
        await review.generate(SOURCE_TEXT)

        assert review.state.accepted_count == 2
        api.get_app_settings.assert_awaited_once()

    async def test_failure_keeps_previous_review(
        self, session: ReviewSession, api: AsyncMock
    ) -> None:
        new_text = "Photosynthesis turns light into chemical energy. " * 25
        api.generate.side_effect = FlashgenApiError(504, "Generation timed out")

        ok = await session.generate(new_text)

        assert not ok
        assert session.error == "Generation timed out"
        assert session.generation_id == 42
        assert session.source_text == new_text
        assert session.state.source_text == SOURCE_TEXT
        assert not session.is_generating

    async def test_failure_on_fresh_session_keeps_text(self, api: AsyncMock) -> None:
        api.generate.side_effect = FlashgenApiError(504, "Generation timed out")
        review = ReviewSession(api)

        assert not await review.generate(SOURCE_TEXT)

        assert review.source_text == SOURCE_TEXT
        assert review.generation_id is None
        assert review.state.is_empty


class TestReview:
    async def test_edit_reports_invalid_text(self, session: ReviewSession) -> None:
        assert not session.edit(0, "Q", "Answer")
        assert session.error is not None
        assert not session.state.proposals[0].is_edited

    async def test_accept_clears_messages(self, session: ReviewSession) -> None:
        session.accept(1)

        assert session.success_message is None
        assert session.state.proposals[1].is_accepted

    async def test_dismiss_error(self, session: ReviewSession) -> None:
        session.edit(0, "Q", "A")
        session.dismiss_error()

        assert session.error is None


class TestSave:
    async def test_save_accepted(self, session: ReviewSession, api: AsyncMock) -> None:
        session.accept(0)
        session.edit(3, "Edited question?", "Edited answer")

        ok = await session.save_accepted()

        assert ok
        drafts = api.create_flashcards.call_args.args[0]
        assert [d.source for d in drafts] == [FlashcardSource.AI_FULL, FlashcardSource.AI_EDITED]
        assert {d.generation_id for d in drafts} == {42}
        assert session.success_message == "Successfully saved 2 flashcards."
        assert session.state.is_empty
        assert session.generation_id is None
        assert session.source_text == ""

    async def test_save_all_includes_unaccepted(
        self, session: ReviewSession, api: AsyncMock
    ) -> None:
        await session.save_all()

        assert len(api.create_flashcards.call_args.args[0]) == 5

    async def test_single_flashcard_message(self, session: ReviewSession) -> None:
        session.accept(2)

        await session.save_accepted()

        assert session.success_message == "Successfully saved 1 flashcard."

    async def test_nothing_accepted(self, session: ReviewSession, api: AsyncMock) -> None:
        ok = await session.save_accepted()

        assert not ok
        assert session.error == "No flashcards to save."
        api.create_flashcards.assert_not_awaited()

    async def test_nothing_generated(self, api: AsyncMock) -> None:
        review = ReviewSession(api)

        assert not await review.save_all()
        assert review.error == "No flashcards to save."

    async def test_failure_keeps_review(self, session: ReviewSession, api: AsyncMock) -> None:
        session.accept(0)
        api.create_flashcards.side_effect = FlashgenApiError(
            403, "Generation with ID 42 does not belong to this user"
        )

        ok = await session.save_accepted()

        assert not ok
        assert session.error == "Generation with ID 42 does not belong to this user"
        assert session.state.accepted_count == 1
        assert not session.is_saving

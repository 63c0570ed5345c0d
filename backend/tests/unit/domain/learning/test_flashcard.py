"""Tests for the Flashcard entity."""

import pytest

from flashgen.domain.common.exceptions import InvariantViolationError, ValidationError
from flashgen.domain.common.value_objects import GenerationId, UserId
from flashgen.domain.learning.entities.flashcard import Flashcard
from flashgen.domain.learning.value_objects import FlashcardSource


def _manual() -> Flashcard:
    return Flashcard.create(
        user_id=UserId(1), front="Question?", back="Answer", source=FlashcardSource.MANUAL
    )


class TestFlashcardCreate:
    def test_new_flashcard_is_not_persisted(self) -> None:
        flashcard = _manual()
        assert not flashcard.id.is_persisted
        assert flashcard.generation_id is None

    @pytest.mark.parametrize(
        ("front", "back"),
        [("ab", "Answer"), ("x" * 201, "Answer"), ("Question?", "ab"), ("Question?", "x" * 501)],
    )
    def test_length_limits(self, front: str, back: str) -> None:
        with pytest.raises(ValidationError):
            Flashcard.create(
                user_id=UserId(1), front=front, back=back, source=FlashcardSource.MANUAL
            )

    def test_boundary_lengths(self) -> None:
        flashcard = Flashcard.create(
            user_id=UserId(1), front="abc", back="x" * 500, source=FlashcardSource.MANUAL
        )
        assert len(flashcard.back) == 500

    def test_ai_flashcard_needs_generation(self) -> None:
        with pytest.raises(ValidationError):
            Flashcard.create(
                user_id=UserId(1), front="Question?", back="Answer", source=FlashcardSource.AI_FULL
            )

    def test_manual_flashcard_cannot_have_generation(self) -> None:
        with pytest.raises(InvariantViolationError):
            Flashcard.create(
                user_id=UserId(1),
                front="Question?",
                back="Answer",
                source=FlashcardSource.MANUAL,
                generation_id=GenerationId(3),
            )


class TestFlashcardUpdates:
    def test_update_content(self) -> None:
        flashcard = _manual()
        flashcard.update_content(back="Better answer")
        assert flashcard.front == "Question?"
        assert flashcard.back == "Better answer"

    def test_update_content_validates(self) -> None:
        flashcard = _manual()
        with pytest.raises(ValidationError):
            flashcard.update_content(front="no")
        assert flashcard.front == "Question?"

    def test_update_origin_to_ai(self) -> None:
        flashcard = _manual()
        flashcard.update_origin(FlashcardSource.AI_EDITED, GenerationId(4))
        assert flashcard.source is FlashcardSource.AI_EDITED
        assert flashcard.generation_id == GenerationId(4)

    def test_update_origin_rejects_inconsistent_pairs(self) -> None:
        flashcard = _manual()
        with pytest.raises(ValidationError):
            flashcard.update_origin(FlashcardSource.MANUAL, GenerationId(4))
        with pytest.raises(ValidationError):
            flashcard.update_origin(FlashcardSource.AI_FULL, None)

    def test_ownership(self) -> None:
        flashcard = _manual()
        assert flashcard.is_owned_by(UserId(1))
        assert not flashcard.is_owned_by(UserId(2))

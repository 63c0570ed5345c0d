"""
Review of generated flashcard proposals.

The review is a reducer: every transition takes a ReviewState and returns
a new one, the input is never modified.

Example:
    state = start_review(42, text, proposals, start_accepted=False)
    state = accept(state, 0)
    state = edit(state, 2, "What is H2O?", "Water")
    drafts = prepare_for_save(state, only_accepted=True)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from flashgen.domain.common.exceptions import ValidationError
from flashgen.domain.generation.entities import FlashcardProposal
from flashgen.domain.learning.entities.flashcard import validate_back, validate_front
from flashgen.domain.learning.services import FlashcardDraft
from flashgen.domain.learning.value_objects import FlashcardSource


@dataclass(frozen=True)
class ReviewedProposal:
    """A proposal together with the user's decision about it."""

    front: str
    back: str
    source: FlashcardSource = FlashcardSource.AI_FULL
    is_accepted: bool = False
    is_edited: bool = False

    @property
    def save_source(self) -> FlashcardSource:
        """Source tag the stored flashcard will carry."""
        return FlashcardSource.AI_EDITED if self.is_edited else FlashcardSource.AI_FULL


@dataclass(frozen=True)
class ReviewState:
    """Everything a review session holds; empty once proposals are saved."""

    generation_id: int | None = None
    source_text: str = ""
    proposals: tuple[ReviewedProposal, ...] = ()

    @property
    def accepted_count(self) -> int:
        return sum(1 for proposal in self.proposals if proposal.is_accepted)

    @property
    def is_empty(self) -> bool:
        return not self.proposals


def start_review(
    generation_id: int,
    source_text: str,
    proposals: Iterable[FlashcardProposal],
    *,
    start_accepted: bool = False,
) -> ReviewState:
    """
    Open a review for the proposals of one generation.

    Args:
        generation_id: Generation that produced the proposals
        source_text: Text the proposals were generated from
        proposals: Proposals in the order the model returned them
        start_accepted: Initial accepted flag for every proposal

    Returns:
        Fresh review state
    """
    return ReviewState(
        generation_id=generation_id,
        source_text=source_text,
        proposals=tuple(
            ReviewedProposal(
                front=proposal.front,
                back=proposal.back,
                source=proposal.source,
                is_accepted=start_accepted,
            )
            for proposal in proposals
        ),
    )


def _update_at(
    state: ReviewState, index: int, change: Callable[[ReviewedProposal], ReviewedProposal]
) -> ReviewState:
    if not 0 <= index < len(state.proposals):
        raise IndexError(f"No proposal at index {index}")
    proposals = list(state.proposals)
    proposals[index] = change(proposals[index])
    return replace(state, proposals=tuple(proposals))


def accept(state: ReviewState, index: int) -> ReviewState:
    """Mark a proposal accepted. Accepting twice changes nothing."""
    return _update_at(state, index, lambda proposal: replace(proposal, is_accepted=True))


def reject(state: ReviewState, index: int) -> ReviewState:
    """Mark a proposal rejected; it stays in the list and can be accepted again."""
    return _update_at(state, index, lambda proposal: replace(proposal, is_accepted=False))


def edit(state: ReviewState, index: int, front: str, back: str) -> ReviewState:
    """
    Replace a proposal's text. Editing implies acceptance.

    Raises:
        ValidationError: If the new text violates the flashcard length limits
        IndexError: If there is no proposal at index
    """
    validate_front(front)
    validate_back(back)
    return _update_at(
        state,
        index,
        lambda proposal: replace(
            proposal, front=front, back=back, is_accepted=True, is_edited=True
        ),
    )


def prepare_for_save(state: ReviewState, *, only_accepted: bool) -> list[FlashcardDraft]:
    """
    Project the review into drafts ready for batch creation.

    Args:
        state: Current review state
        only_accepted: Keep only accepted proposals when True

    Returns:
        Drafts sharing the review's generation id; edited proposals are
        tagged ai-edited, the rest ai-full

    Raises:
        ValidationError: If the review has no generation to link to
    """
    if state.generation_id is None:
        raise ValidationError("Review has no generation", field="generation_id")

    return [
        FlashcardDraft(
            front=proposal.front,
            back=proposal.back,
            source=proposal.save_source,
            generation_id=state.generation_id,
        )
        for proposal in state.proposals
        if proposal.is_accepted or not only_accepted
    ]

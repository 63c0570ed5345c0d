from .proposal_review import (
    ReviewedProposal,
    ReviewState,
    accept,
    edit,
    prepare_for_save,
    reject,
    start_review,
)

__all__ = [
    "ReviewState",
    "ReviewedProposal",
    "accept",
    "edit",
    "prepare_for_save",
    "reject",
    "start_review",
]

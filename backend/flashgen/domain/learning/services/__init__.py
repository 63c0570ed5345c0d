from .flashcard_batch_policy import MAX_BATCH_SIZE, FlashcardBatchPolicy, FlashcardDraft

__all__ = [
    "MAX_BATCH_SIZE",
    "FlashcardBatchPolicy",
    "FlashcardDraft",
]

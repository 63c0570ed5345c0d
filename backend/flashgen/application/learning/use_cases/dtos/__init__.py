from .flashcard_dtos import FlashcardChanges

__all__ = ["FlashcardChanges"]

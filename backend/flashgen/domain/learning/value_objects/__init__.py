from .flashcard_source import FlashcardSource

__all__ = ["FlashcardSource"]

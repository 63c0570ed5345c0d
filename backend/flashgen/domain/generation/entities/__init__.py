from .flashcard_proposal import FlashcardProposal
from .generation import Generation
from .generation_error_log import GENERIC_ERROR_CODE, GenerationErrorLog

__all__ = [
    "GENERIC_ERROR_CODE",
    "FlashcardProposal",
    "Generation",
    "GenerationErrorLog",
]

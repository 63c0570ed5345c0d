from .generation_dtos import GenerationDetail, GenerationOutcome

__all__ = [
    "GenerationDetail",
    "GenerationOutcome",
]

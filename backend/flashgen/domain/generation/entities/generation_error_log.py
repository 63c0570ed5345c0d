"""Write-once record of a failed generation attempt."""

from dataclasses import dataclass
from datetime import datetime

from flashgen.domain.common.entity import Entity
from flashgen.domain.common.value_objects import ContentHash, GenerationErrorLogId, UserId

GENERIC_ERROR_CODE = "GEN_ERROR"
MAX_ERROR_CODE_LENGTH = 100


@dataclass(eq=False)
class GenerationErrorLog(Entity[GenerationErrorLogId]):
    """Failure of one generation attempt, kept for auditing."""

    id: GenerationErrorLogId
    user_id: UserId
    error_code: str
    error_message: str
    model: str
    source_text_hash: ContentHash
    source_text_length: int
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        user_id: UserId,
        error_code: str,
        error_message: str,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
    ) -> "GenerationErrorLog":
        """Create a new error log entry (ID will be 0 until persisted)."""
        return cls(
            id=GenerationErrorLogId.generate(),
            user_id=user_id,
            error_code=(error_code or GENERIC_ERROR_CODE)[:MAX_ERROR_CODE_LENGTH],
            error_message=error_message,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
        )

    @classmethod
    def create_with_id(
        cls,
        id: GenerationErrorLogId,
        user_id: UserId,
        error_code: str,
        error_message: str,
        model: str,
        source_text_hash: ContentHash,
        source_text_length: int,
        created_at: datetime,
    ) -> "GenerationErrorLog":
        """Reconstitute an error log entry from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            error_code=error_code,
            error_message=error_message,
            model=model,
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
            created_at=created_at,
        )

"""Validation of untrusted payloads against the API schemas."""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from flashgen.application.common.result import Failure, Result, Success

ModelT = TypeVar("ModelT", bound=BaseModel)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


@dataclass(frozen=True)
class FieldError:
    """One failed rule: the dotted path of the field and a readable message."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Flatten pydantic error dicts into FieldErrors."""
    result = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]
        result.append(FieldError(field=".".join(loc), message=message))
    return result


def validate_payload(model: type[ModelT], data: Any) -> Result[ModelT, list[FieldError]]:
    """
    Validate data against a schema without raising.

    Args:
        model: Pydantic model to validate against
        data: Arbitrary input, usually a decoded JSON body

    Returns:
        Success with the model instance, or Failure with one FieldError per
        broken rule
    """
    try:
        return Success(model.model_validate(data))
    except PydanticValidationError as e:
        return Failure(field_errors(e.errors()))

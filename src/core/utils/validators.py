"""Request model validation and the error details shown to clients."""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the data does not satisfy the model
    """
    return model.model_validate(data)


def _client_message(error: dict[str, Any]) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return "This field is required"
    if kind == "string_too_short":
        return f"Must be at least {ctx.get('min_length')} characters"
    if kind in {"string_type", "string_strict_type"}:
        return "Must be a string"
    if kind == "uuid_parsing":
        return "Must be a valid identifier"

    # Messages raised by our own field validators
    message = str(error.get("msg", "Invalid value"))
    return message.removeprefix("Value error,").strip()


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce Pydantic errors to `{"field", "message"}` pairs.

    Raw input values, URLs and exception context are dropped so that
    uploaded content never echoes back in an error body.
    """
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())) or "body",
            "message": _client_message(error),
        }
        for error in errors
    ]


def validation_details(exc: PydanticValidationError) -> dict[str, Any]:
    return {"errors": sanitize_validation_errors(list(exc.errors()))}

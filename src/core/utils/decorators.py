"""
Error translation and CORS preflight for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import GalleryServiceError
from core.utils.response import ResponseBuilder
from core.utils.validators import validation_details

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]

UNEXPECTED_ERROR_MESSAGE = (
    "We're experiencing technical difficulties. Please try again in a few moments."
)


def _log_failure(message: str, *, handler_name: str, request_id: str | None, exc: Exception) -> None:
    """Log client errors as warnings and server errors with their traceback."""
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    client_error = isinstance(exc, PydanticValidationError) or (
        isinstance(exc, GalleryServiceError) and exc.is_client_error
    )
    if client_error:
        logger.warning(message, extra=log_extra)
    else:
        logger.exception(message, extra=log_extra)


def api_gateway_handler(func: Callable[..., JsonDict]) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    OPTIONS requests are answered with a bare CORS response. Exceptions
    escaping the handler become error responses:

    - pydantic validation errors -> 422 with sanitized field messages
    - `GalleryServiceError` -> the status declared by the error type
    - anything else -> 500 with a generic message

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"images": []})
    """

    @wraps(func)
    def wrapper(event: Any, context: Any, *, cors_origin: str | None = None) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)
        reply = {"request_id": request_id, "cors_origin": cors_origin}

        try:
            return func(event, context)

        except PydanticValidationError as exc:
            _log_failure(
                "Request validation failed",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.validation_error(
                "Invalid request payload", details=validation_details(exc), **reply
            )

        except GalleryServiceError as exc:
            _log_failure(
                "Gallery service error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.from_service_error(exc, **reply)

        except Exception as exc:
            _log_failure(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.internal_error(UNEXPECTED_ERROR_MESSAGE, **reply)

    return wrapper

"""API Gateway proxy responses for the gallery handlers.

JSON bodies may carry the Lambda `request_id`. Errors share one envelope:
``{"error": <code>, "message": ..., "timestamp": ..., "details": ...}``.
"""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any

from core.models.errors import GalleryServiceError
from core.utils.constants import (
    ATTACHMENT_DISPOSITION_FORMAT,
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


def cors_headers(origin: str | None = None) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin or CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    @staticmethod
    def respond(
        status: HTTPStatus,
        body: JsonDict,
        *,
        headers: dict[str, str] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload = dict(body)
        if request_id:
            payload["request_id"] = request_id

        response_headers = {"Content-Type": DEFAULT_CONTENT_TYPE, **cors_headers(cors_origin)}
        response_headers.update(headers or {})

        return {
            "statusCode": status.value,
            "headers": response_headers,
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(body: JsonDict, **context: Any) -> JsonDict:
        return ResponseBuilder.respond(HTTPStatus.OK, body, **context)

    @staticmethod
    def created(body: JsonDict, *, location: str | None = None, **context: Any) -> JsonDict:
        """201 with the new resource's URL in `Location`."""
        headers = {"Location": location} if location else None
        return ResponseBuilder.respond(HTTPStatus.CREATED, body, headers=headers, **context)

    @staticmethod
    def no_content(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cors_headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        status: HTTPStatus,
        message: str,
        *,
        error: str | None = None,
        details: Any = None,
        **context: Any,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return ResponseBuilder.respond(status, payload, **context)

    @staticmethod
    def not_found(message: str = "Resource not found", **context: Any) -> JsonDict:
        return ResponseBuilder.error(HTTPStatus.NOT_FOUND, message, **context)

    @staticmethod
    def validation_error(message: str, *, details: Any = None, **context: Any) -> JsonDict:
        """422 for request bodies or parameters that fail model validation."""
        return ResponseBuilder.error(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            message,
            error=ERROR_CODE_VALIDATION_FAILED,
            details=details,
            **context,
        )

    @staticmethod
    def internal_error(message: str = "Internal server error", **context: Any) -> JsonDict:
        return ResponseBuilder.error(HTTPStatus.INTERNAL_SERVER_ERROR, message, **context)

    @staticmethod
    def from_service_error(exc: GalleryServiceError, **context: Any) -> JsonDict:
        """Render a domain error with the status its type declares.

        Server-side failures never expose their details.
        """
        return ResponseBuilder.error(
            exc.http_status,
            exc.message,
            error=exc.error_code,
            details=exc.details if exc.is_client_error else None,
            **context,
        )

    @staticmethod
    def attachment_disposition(filename: str) -> str:
        """`Content-Disposition` naming `filename` as a quoted-string.

        Control characters are dropped and quotes and backslashes escaped.
        """
        printable = "".join(char for char in filename if ord(char) >= 32 and ord(char) != 127)
        quoted = printable.replace("\\", "\\\\").replace('"', '\\"')
        return ATTACHMENT_DISPOSITION_FORMAT.format(quoted)

    @staticmethod
    def binary_response(
        content: bytes,
        *,
        content_type: str,
        headers: dict[str, str] | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """200 with a base64-encoded body, as API Gateway expects for binary media."""
        response_headers = {
            **cors_headers(cors_origin),
            "Content-Type": content_type,
            "Content-Length": str(len(content)),
        }
        response_headers.update(headers or {})

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": response_headers,
            "body": base64.b64encode(content).decode("utf-8"),
            "isBase64Encoded": True,
        }

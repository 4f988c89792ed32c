"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any

from core.models.errors import ValidationError


def parse_json_body(event: Mapping[str, Any]) -> dict[str, Any]:
    """Decode the JSON object carried in the request body.

    An absent body is treated as an empty object.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    raw = event.get("body") or ""

    if event.get("isBase64Encoded") and raw:
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError(message="Invalid JSON body") from exc

    if not raw:
        return {}

    try:
        body = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(message="Invalid JSON body") from exc

    if not isinstance(body, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return body


def path_parameter(event: Mapping[str, Any], name: str) -> str | None:
    return (event.get("pathParameters") or {}).get(name)


def query_parameter(event: Mapping[str, Any], name: str) -> str | None:
    return (event.get("queryStringParameters") or {}).get(name)


def sub_resource(event: Mapping[str, Any], entity_id: str | None) -> str | None:
    """Return the path segment following `entity_id`, if any.

    Example:
        path "/images/42/title", entity_id "42" → "title"
    """
    if not entity_id:
        return None

    segments = [segment for segment in (event.get("path") or "").split("/") if segment]
    try:
        position = segments.index(entity_id)
    except ValueError:
        return None

    tail = segments[position + 1 :]
    return tail[0] if tail else None


def request_log_context(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Structured fields describing the incoming request, for logging."""
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "query_params": event.get("queryStringParameters"),
        "request_id": getattr(context, "aws_request_id", None),
        "function_name": getattr(context, "function_name", None),
        "remaining_time_ms": context.get_remaining_time_in_millis()
        if hasattr(context, "get_remaining_time_in_millis")
        else None,
    }

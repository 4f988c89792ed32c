"""Resource link construction.

Links are computed per request from a base URL; nothing here holds state.
"""

from collections.abc import Mapping
import os
from typing import Any

from core.utils.constants import ENV_API_BASE_URL


def build_href(base_url: str | None, collection: str, entity_id: str | None) -> str | None:
    """Return the fully-qualified location of an entity, or None.

    Example:
        build_href("https://api.example.com/v1", "images", "42")
        → "https://api.example.com/v1/images/42"
    """
    if not base_url or not entity_id:
        return None
    return f"{base_url.rstrip('/')}/{collection}/{entity_id}"


def resolve_base_url(event: Mapping[str, Any]) -> str | None:
    """Determine the API base URL for links.

    `API_BASE_URL` wins when configured; otherwise the base is derived from
    the API Gateway request context (domain name and stage).
    """
    configured = os.getenv(ENV_API_BASE_URL)
    if configured:
        return configured.rstrip("/")

    request_context = event.get("requestContext") or {}
    domain = request_context.get("domainName")
    if not domain:
        return None

    stage = request_context.get("stage")
    if stage and stage != "$default":
        return f"https://{domain}/{stage}"
    return f"https://{domain}"

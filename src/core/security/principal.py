"""Resolution of the authenticated caller.

Bearer tokens are verified by the API Gateway JWT authorizer before a
handler runs; the verified claims arrive in the request context. This
module maps those claims to a local `User` via the user directory.
"""

from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import UnauthorizedError
from core.models.user import User
from core.services.user_service import UserService

logger = Logger(UTC=True)

NAME_CLAIMS = ("name", "preferred_username", "email")


def extract_claims(event: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return verified JWT claims from an API Gateway event, if any.

    Supports HTTP API JWT authorizers (`authorizer.jwt.claims`) and REST API
    Cognito/Lambda authorizers (`authorizer.claims`).
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    jwt = authorizer.get("jwt") or {}
    claims = jwt.get("claims") or authorizer.get("claims")

    if not isinstance(claims, Mapping) or not claims.get("sub"):
        return None
    return dict(claims)


def display_name_hint(claims: Mapping[str, Any]) -> str:
    """Pick the display name suggested by the identity provider."""
    for claim in NAME_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return str(claims["sub"])


def resolve_principal(
    event: Mapping[str, Any],
    users: UserService | None = None,
) -> User:
    """Return the `User` for the verified caller, creating it on first sight.

    Raises:
        UnauthorizedError: If the request carries no verified claims
    """
    claims = extract_claims(event)
    if claims is None:
        logger.warning("Request without verified claims")
        raise UnauthorizedError(message="Authentication required")

    service = users or UserService()
    return service.get_or_create(str(claims["sub"]), display_name_hint(claims))


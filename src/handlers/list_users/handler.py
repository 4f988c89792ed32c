"""
Lambda handler responsible for listing gallery users.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.representations import represent_users
from core.security.principal import resolve_principal
from core.services.user_service import UserService
from core.utils.decorators import api_gateway_handler
from core.utils.events import request_log_context
from core.utils.links import resolve_base_url
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return all users ordered by display name. Requires authentication."""
    logger.info("Received user list request", extra=request_log_context(event, context))

    service = UserService()
    resolve_principal(event, service)

    users = service.get_all()

    return ResponseBuilder.ok(
        {"users": represent_users(users, base_url=resolve_base_url(event))}
    )

"""
Lambda handler responsible for renaming the authenticated user.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import DuplicateUserError
from core.security.principal import resolve_principal
from core.services.user_service import UserService
from core.utils.decorators import api_gateway_handler
from core.utils.events import parse_json_body, path_parameter, request_log_context, sub_resource
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import UpdateNameRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `PUT /users/{user_id}/name`.

    Users may only rename themselves; any other id is reported as not found.
    A name already held by another user yields 409.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        `{"name": display_name}` after the update
    """
    logger.info("Received user update request", extra=request_log_context(event, context))

    service = UserService()
    principal = resolve_principal(event, service)

    user_id = path_parameter(event, "user_id")
    if not user_id or sub_resource(event, user_id) != "name":
        return ResponseBuilder.not_found("Resource not found")

    request = validate_request(UpdateNameRequest, parse_json_body(event))

    user = service.get_owned(user_id, principal)
    if user is None:
        logger.info(
            "User not found for update",
            extra={"user_id": user_id, "principal_id": principal.id},
        )
        return ResponseBuilder.not_found(f"User not found: {user_id}")

    user.display_name = request.name

    try:
        user = service.save(user)
    except DuplicateUserError as exc:
        logger.warning(
            "Display name already taken",
            extra={"user_id": user_id},
        )
        return ResponseBuilder.from_service_error(exc)

    metrics.add_metric(name="UserNameChanged", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.ok({"name": user.display_name})

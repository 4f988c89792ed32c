"""
Lambda handler responsible for reading user profiles and their images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.representations import UserRepresentation, represent_images
from core.security.principal import resolve_principal
from core.services.image_service import ImageService
from core.services.user_service import UserService
from core.utils.constants import CURRENT_USER_SEGMENT, IMAGES_COLLECTION
from core.utils.decorators import api_gateway_handler
from core.utils.events import path_parameter, request_log_context, sub_resource
from core.utils.links import resolve_base_url
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


def _is_current_user_request(event: dict[str, Any], user_id: str | None) -> bool:
    if user_id == CURRENT_USER_SEGMENT:
        return True
    path = (event.get("path") or "").rstrip("/")
    return user_id is None and path.endswith(f"/{CURRENT_USER_SEGMENT}")


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle user reads:
    - `GET /users/me`: the authenticated caller
    - `GET /users/{user_id}`: any user by id
    - `GET /users/{user_id}/name`: `{"name": display_name}`
    - `GET /users/{user_id}/images`: the user's images, newest first

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received user get request", extra=request_log_context(event, context))

    service = UserService()
    principal = resolve_principal(event, service)
    base_url = resolve_base_url(event)

    user_id = path_parameter(event, "user_id")
    if _is_current_user_request(event, user_id):
        return ResponseBuilder.ok(
            UserRepresentation.from_user(principal, base_url=base_url).model_dump(
                exclude_none=True
            )
        )

    user = service.get(user_id) if user_id else None
    if user is None:
        logger.info("User not found", extra={"user_id": user_id})
        return ResponseBuilder.not_found(f"User not found: {user_id}")

    prop = sub_resource(event, user_id)

    if prop is None:
        return ResponseBuilder.ok(
            UserRepresentation.from_user(user, base_url=base_url).model_dump(exclude_none=True)
        )

    if prop == "name":
        return ResponseBuilder.ok({"name": user.display_name})

    if prop == IMAGES_COLLECTION:
        images = ImageService().get_contributions(user)
        return ResponseBuilder.ok({"images": represent_images(images, base_url=base_url)})

    return ResponseBuilder.not_found(f"Unknown user property: {prop}")

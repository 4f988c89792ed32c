"""
Lambda handler responsible for editing an image's title and description.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.security.principal import resolve_principal
from core.services.image_service import ImageService
from core.utils.decorators import api_gateway_handler
from core.utils.events import parse_json_body, path_parameter, request_log_context, sub_resource
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import UPDATE_MODELS

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `PUT` and `DELETE` on `/images/{image_id}/title|description`.

    Only the contributor may edit an image; for anyone else the image is
    reported as not found. `DELETE` clears the property and answers 204.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        `{"<property>": value}` after a `PUT`, an empty 204 after a `DELETE`
    """
    logger.info("Received image update request", extra=request_log_context(event, context))

    principal = resolve_principal(event)

    image_id = path_parameter(event, "image_id")
    prop = sub_resource(event, image_id)
    if not image_id or prop not in UPDATE_MODELS:
        return ResponseBuilder.not_found("Resource not found")

    service = ImageService()
    image = service.get_owned(image_id, principal)
    if image is None:
        logger.info(
            "Image not found for update",
            extra={"image_id": image_id, "user_id": principal.id},
        )
        return ResponseBuilder.not_found(f"Image not found: {image_id}")

    clearing = event.get("httpMethod") == "DELETE"
    value: str | None = None
    if not clearing:
        request = validate_request(UPDATE_MODELS[prop], parse_json_body(event))
        value = getattr(request, prop)

    setattr(image, prop, value)
    image = service.save(image)

    logger.info(
        "Image property updated",
        extra={"image_id": image.id, "property": prop, "cleared": clearing},
    )

    if clearing:
        return ResponseBuilder.no_content()
    return ResponseBuilder.ok({prop: getattr(image, prop)})

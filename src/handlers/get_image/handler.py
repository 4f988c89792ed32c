"""
Lambda handler responsible for reading image metadata.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.representations import ImageRepresentation
from core.services.image_service import ImageService
from core.utils.decorators import api_gateway_handler
from core.utils.events import path_parameter, request_log_context, sub_resource
from core.utils.links import resolve_base_url
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import IMAGE_TEXT_PROPERTIES, ImagePathRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /images/{image_id}` and its `title`/`description` sub-resources.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        The image representation, or `{"<property>": value}` for a sub-resource
    """
    logger.info("Received image get request", extra=request_log_context(event, context))

    image_id = path_parameter(event, "image_id")
    request = validate_request(
        ImagePathRequest,
        {"image_id": image_id, "field_name": sub_resource(event, image_id)},
    )

    image = ImageService().get(request.image_id)
    if image is None:
        logger.info("Image not found", extra={"image_id": request.image_id})
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    if request.field_name is None:
        representation = ImageRepresentation.from_image(image, base_url=resolve_base_url(event))
        return ResponseBuilder.ok(representation.model_dump(exclude_none=True))

    if request.field_name not in IMAGE_TEXT_PROPERTIES:
        return ResponseBuilder.not_found(f"Unknown image property: {request.field_name}")

    return ResponseBuilder.ok({request.field_name: getattr(image, request.field_name)})

"""
Lambda handler responsible for deleting an image resource.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import MetadataOperationFailedError, StorageError
from core.security.principal import resolve_principal
from core.services.image_service import ImageService
from core.utils.decorators import api_gateway_handler
from core.utils.events import path_parameter, request_log_context
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DeleteImageRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Resolves the caller and checks ownership of the image
    - Deletes stored content, then the image record
    - Translates storage and metadata failures into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        204 on success
    """
    logger.info("Received image delete request", extra=request_log_context(event, context))

    principal = resolve_principal(event)
    request = validate_request(
        DeleteImageRequest,
        {"image_id": path_parameter(event, "image_id")},
    )

    service = ImageService()
    image = service.get_owned(request.image_id, principal)
    if image is None:
        logger.info(
            "Image not found during delete",
            extra={"image_id": request.image_id, "user_id": principal.id},
        )
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    try:
        service.delete(image)

    except (StorageError, MetadataOperationFailedError) as exc:
        logger.exception(
            "Deletion failed",
            extra={"image_id": request.image_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    metrics.add_metric(name="ImagesDeleted", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.no_content()

"""
Lambda handler responsible for downloading image content.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import NotFoundError, StorageError
from core.services.image_service import ImageService
from core.utils.constants import ERROR_CODE_CONTENT_NOT_FOUND
from core.utils.decorators import api_gateway_handler
from core.utils.events import path_parameter, request_log_context
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle `GET /images/{image_id}/content`.

    Returns the stored bytes base64-encoded for API Gateway binary support,
    with the image's content type and an attachment disposition carrying the
    original filename.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        Binary API Gateway response
    """
    logger.info("Received image content request", extra=request_log_context(event, context))

    image_id = path_parameter(event, "image_id")
    service = ImageService()

    image = service.get(image_id) if image_id else None
    if image is None:
        return ResponseBuilder.not_found(f"Image not found: {image_id}")

    try:
        content = service.retrieve(image)
    except StorageError as exc:
        if exc.error_code == ERROR_CODE_CONTENT_NOT_FOUND:
            logger.warning("Image content missing", extra={"image_id": image.id})
            raise NotFoundError(
                message=f"Image content not found: {image.id}",
                details={"image_id": image.id},
            ) from exc
        raise

    logger.info(
        "Image content retrieved",
        extra={"image_id": image.id, "file_size": len(content)},
    )

    return ResponseBuilder.binary_response(
        content,
        content_type=image.content_type,
        headers={"Content-Disposition": ResponseBuilder.attachment_disposition(image.name)},
    )

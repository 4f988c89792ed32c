"""
Lambda handler responsible for image upload and metadata creation.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import MetadataOperationFailedError, StorageError
from core.models.representations import ImageRepresentation
from core.security.principal import resolve_principal
from core.services.image_service import ImageService
from core.utils.constants import FALLBACK_CONTENT_TYPE
from core.utils.decorators import api_gateway_handler
from core.utils.events import parse_json_body, request_log_context
from core.utils.links import resolve_base_url
from core.utils.mime import detect_mime_type
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ImageUploadRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    The handler decodes base64-encoded image data, resolves the uploading
    user, stores the content and creates the image record. The declared
    content type wins; when absent it is detected from the content.

    Expected request body:
    {
        "file": "<base64>",
        "filename": "photo.jpg",
        "content_type": "image/jpeg",   # optional
        "title": "Sunset",              # optional
        "description": "..."            # optional
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 response with the created image and its `Location`
    """
    logger.info("Received image upload request", extra=request_log_context(event, context))

    principal = resolve_principal(event)
    request = validate_request(ImageUploadRequest, parse_json_body(event))

    file_data = request.decoded_file()
    content_type = request.content_type or detect_mime_type(file_data) or FALLBACK_CONTENT_TYPE

    try:
        image = ImageService().store(
            content=file_data,
            filename=request.filename,
            content_type=content_type,
            contributor=principal,
            title=request.title,
            description=request.description,
        )

    except (StorageError, MetadataOperationFailedError):
        logger.exception(
            "Infrastructure error during image upload",
            extra={"user_id": principal.id, "content_type": content_type},
        )
        raise

    metrics.add_metric(name="ImagesUploaded", unit=MetricUnit.Count, value=1)

    representation = ImageRepresentation.from_image(image, base_url=resolve_base_url(event))

    return ResponseBuilder.created(
        representation.model_dump(exclude_none=True),
        location=representation.href,
    )

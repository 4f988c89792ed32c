"""
Lambda handler responsible for listing and searching images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.representations import represent_images
from core.services.image_service import ImageService
from core.services.user_service import UserService
from core.utils.constants import CONTRIBUTOR_PARAM_NAME, FRAGMENT_PARAM_NAME
from core.utils.decorators import api_gateway_handler
from core.utils.events import query_parameter, request_log_context
from core.utils.links import resolve_base_url
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ListImagesRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Supports:
    - Filtering by contributor (`?contributor=<user id>`)
    - Filtering by a title/description fragment (`?q=<text>`)
    - Both combined

    Results are de-duplicated and returned in natural order. An unknown
    contributor yields an empty list rather than an error.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info("Received image list request", extra=request_log_context(event, context))

    request = validate_request(
        ListImagesRequest,
        {
            "contributor": query_parameter(event, CONTRIBUTOR_PARAM_NAME),
            "q": query_parameter(event, FRAGMENT_PARAM_NAME),
        },
    )

    contributor = None
    if request.contributor is not None:
        contributor = UserService().get(request.contributor)
        if contributor is None:
            logger.info(
                "Unknown contributor requested",
                extra={"contributor_id": request.contributor},
            )
            return ResponseBuilder.ok({"images": []})

    images = ImageService().search(contributor=contributor, fragment=request.q)

    logger.info("Images listed", extra={"count": len(images)})

    return ResponseBuilder.ok(
        {"images": represent_images(images, base_url=resolve_base_url(event))}
    )

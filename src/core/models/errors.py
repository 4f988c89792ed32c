"""Domain errors raised by the gallery services and repositories.

Each error type carries a default machine-readable code and the HTTP
status the API reports for it. Callers may override the code to be more
specific (for example `CONTENT_NOT_FOUND` for a `StorageError`).
"""

from http import HTTPStatus
from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_DUPLICATE_USER,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORAGE,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_UNSUPPORTED_MEDIA_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class GalleryServiceError(Exception):
    """Base exception for all gallery service errors.

    `details` is reported to clients only for 4xx statuses.
    """

    default_error_code: ClassVar[str] = ERROR_CODE_INTERNAL_ERROR
    http_status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)

    @property
    def is_client_error(self) -> bool:
        return self.http_status < HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(GalleryServiceError):
    """Raised when a request body cannot be parsed or is structurally invalid."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED
    http_status = HTTPStatus.BAD_REQUEST


class NotFoundError(GalleryServiceError):
    """Raised when a resource is missing or not owned by the caller.

    Both cases share this error so that callers cannot discover the
    existence of records they do not own.
    """

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND
    http_status = HTTPStatus.NOT_FOUND


class UnauthorizedError(GalleryServiceError):
    default_error_code = ERROR_CODE_UNAUTHORIZED
    http_status = HTTPStatus.UNAUTHORIZED


class DuplicateUserError(GalleryServiceError):
    """Raised when a user uniqueness constraint is violated.

    `field` names the violated constraint: ``oauth_key`` or ``display_name``.
    """

    default_error_code = ERROR_CODE_DUPLICATE_USER
    http_status = HTTPStatus.CONFLICT

    field: str

    def __init__(
        self,
        *,
        message: str,
        field: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.field = field
        super().__init__(
            message=message,
            error_code=error_code,
            details={"field": field, **(details or {})},
        )


class UnsupportedMediaTypeError(GalleryServiceError):
    """Raised when uploaded content has a MIME type outside the allowed list."""

    default_error_code = ERROR_CODE_UNSUPPORTED_MEDIA_TYPE
    http_status = HTTPStatus.UNSUPPORTED_MEDIA_TYPE


class MetadataOperationFailedError(GalleryServiceError):
    """Raised when a user or image record operation fails."""

    default_error_code = ERROR_CODE_METADATA_OPERATION_FAILED


class StorageError(GalleryServiceError):
    """Raised when stored content cannot be written, read, or removed."""

    default_error_code = ERROR_CODE_STORAGE

"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"

# Not Found / Access Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"

# Conflict Errors
ERROR_CODE_DUPLICATE_USER = "DUPLICATE_USER"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_CONTENT_STORE_FAILED = "CONTENT_STORE_FAILED"
ERROR_CODE_CONTENT_RETRIEVE_FAILED = "CONTENT_RETRIEVE_FAILED"
ERROR_CODE_CONTENT_DELETE_FAILED = "CONTENT_DELETE_FAILED"
ERROR_CODE_CONTENT_NOT_FOUND = "CONTENT_NOT_FOUND"
ERROR_CODE_MALFORMED_REFERENCE = "MALFORMED_REFERENCE"

# Metadata / DynamoDB Errors
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_SAVE_FAILED = "METADATA_SAVE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)

FALLBACK_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# Resource Constraints
# ============================================================================

MIN_TEXT_LENGTH = 3
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1024
MAX_DISPLAY_NAME_ATTEMPTS = 20
MAX_IDENTITY_CONFLICT_RETRIES = 2
OAUTH_REREAD_ATTEMPTS = 3
OAUTH_REREAD_DELAY_SECONDS = 0.05

IMAGES_COLLECTION = "images"
USERS_COLLECTION = "users"
CURRENT_USER_SEGMENT = "me"

CONTRIBUTOR_PARAM_NAME = "contributor"
FRAGMENT_PARAM_NAME = "q"

# ============================================================================
# Persistence Layout
# ============================================================================

CONTRIBUTOR_CREATED_INDEX = "contributor-created-index"
OAUTH_KEY_MARKER_PREFIX = "oauth_key#"
DISPLAY_NAME_MARKER_PREFIX = "display_name#"

# ============================================================================
# Upload Storage Defaults
# ============================================================================

DEFAULT_STORAGE_BACKEND = "local"
DEFAULT_UPLOAD_DIRECTORY = "uploads"
DEFAULT_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S%f"
DEFAULT_TIME_ZONE = "UTC"
DEFAULT_FILENAME_FORMAT = "{timestamp}-{random}{extension}"
DEFAULT_MAX_RANDOM = 1_000_000
DEFAULT_UNKNOWN_FILENAME = "unknown"
DEFAULT_S3_KEY_PREFIX = "images/"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length,Content-Disposition,Location"
DEFAULT_CONTENT_TYPE = "application/json"
ATTACHMENT_DISPOSITION_FORMAT = 'attachment; filename="{0}"'

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_TABLE_NAME = "IMAGE_TABLE_NAME"
ENV_USER_TABLE_NAME = "USER_TABLE_NAME"
ENV_USER_KEYS_TABLE_NAME = "USER_KEYS_TABLE_NAME"
ENV_STORAGE_BACKEND = "STORAGE_BACKEND"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_S3_KEY_PREFIX = "IMAGE_S3_KEY_PREFIX"
ENV_UPLOAD_DIRECTORY = "UPLOAD_DIRECTORY"
ENV_UPLOAD_APPLICATION_HOME = "UPLOAD_APPLICATION_HOME"
ENV_UPLOAD_TIMESTAMP_FORMAT = "UPLOAD_TIMESTAMP_FORMAT"
ENV_UPLOAD_TIME_ZONE = "UPLOAD_TIME_ZONE"
ENV_UPLOAD_FILENAME_FORMAT = "UPLOAD_FILENAME_FORMAT"
ENV_UPLOAD_MAX_RANDOM = "UPLOAD_MAX_RANDOM"
ENV_UPLOAD_UNKNOWN_FILENAME = "UPLOAD_UNKNOWN_FILENAME"
ENV_ALLOWED_CONTENT_TYPES = "ALLOWED_CONTENT_TYPES"
ENV_API_BASE_URL = "API_BASE_URL"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)

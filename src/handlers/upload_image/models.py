"""Pydantic models for the image upload request."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.utils.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_FILE_SIZE,
    MAX_TITLE_LENGTH,
    MIN_TEXT_LENGTH,
    get_max_file_size_mb,
)

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: StrictStr = Field(..., description="Base64 encoded image file")
    filename: StrictStr | None = Field(
        default=None,
        max_length=255,
        description="Original file name as supplied by the client",
    )
    content_type: StrictStr | None = Field(
        default=None,
        description="Declared MIME type; detected from the content when omitted",
    )
    title: StrictStr | None = Field(
        default=None,
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_TITLE_LENGTH,
        description="Optional image title",
    )
    description: StrictStr | None = Field(
        default=None,
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Optional image description",
    )

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, value: str | None) -> str | None:
        """Reject control characters, which cannot be carried in response headers."""
        if value is not None and any(ord(char) < 32 or ord(char) == 127 for char in value):
            raise ValueError("filename must not contain control characters")
        return value

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must not exceed MAX_FILE_SIZE
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value

    def decoded_file(self) -> bytes:
        return base64.b64decode(self.file)

"""Environment-backed configuration for content storage and upload policy."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    DEFAULT_FILENAME_FORMAT,
    DEFAULT_MAX_RANDOM,
    DEFAULT_S3_KEY_PREFIX,
    DEFAULT_STORAGE_BACKEND,
    DEFAULT_TIME_ZONE,
    DEFAULT_TIMESTAMP_FORMAT,
    DEFAULT_UNKNOWN_FILENAME,
    DEFAULT_UPLOAD_DIRECTORY,
    ENV_ALLOWED_CONTENT_TYPES,
    ENV_IMAGE_S3_BUCKET_NAME,
    ENV_IMAGE_S3_KEY_PREFIX,
    ENV_STORAGE_BACKEND,
    ENV_UPLOAD_APPLICATION_HOME,
    ENV_UPLOAD_DIRECTORY,
    ENV_UPLOAD_FILENAME_FORMAT,
    ENV_UPLOAD_MAX_RANDOM,
    ENV_UPLOAD_TIME_ZONE,
    ENV_UPLOAD_TIMESTAMP_FORMAT,
    ENV_UPLOAD_UNKNOWN_FILENAME,
)

# Root of the installed application (the directory holding `core/`).
APPLICATION_HOME = Path(__file__).resolve().parents[2]

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class UploadSettings(BaseModel):
    """How uploaded content is named and where the filesystem backend keeps it."""

    model_config = ConfigDict(frozen=True)

    directory: StrictStr = Field(DEFAULT_UPLOAD_DIRECTORY, min_length=1)
    application_home: StrictBool = Field(
        True, description="Resolve a relative directory against the install directory"
    )
    timestamp_format: StrictStr = Field(DEFAULT_TIMESTAMP_FORMAT, min_length=1)
    time_zone: StrictStr = Field(DEFAULT_TIME_ZONE)
    filename_format: StrictStr = Field(DEFAULT_FILENAME_FORMAT, min_length=1)
    max_random: StrictInt = Field(DEFAULT_MAX_RANDOM, gt=0)
    unknown_filename: StrictStr = Field(DEFAULT_UNKNOWN_FILENAME, min_length=1)

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{value}'") from exc
        return value

    @field_validator("filename_format")
    @classmethod
    def validate_filename_format(cls, value: str) -> str:
        try:
            value.format(timestamp="t", random=0, extension=".x")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                "filename_format may only reference {timestamp}, {random} and {extension}"
            ) from exc
        return value

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    @property
    def root(self) -> Path:
        """Absolute upload root directory."""
        directory = Path(self.directory).expanduser()
        if self.application_home and not directory.is_absolute():
            directory = APPLICATION_HOME / directory
        return directory.resolve()

    @classmethod
    def from_env(cls) -> "UploadSettings":
        values: dict[str, object] = {}

        if directory := os.getenv(ENV_UPLOAD_DIRECTORY):
            values["directory"] = directory
        if (application_home := os.getenv(ENV_UPLOAD_APPLICATION_HOME)) is not None:
            values["application_home"] = application_home.strip().lower() in _TRUE_VALUES
        if timestamp_format := os.getenv(ENV_UPLOAD_TIMESTAMP_FORMAT):
            values["timestamp_format"] = timestamp_format
        if time_zone := os.getenv(ENV_UPLOAD_TIME_ZONE):
            values["time_zone"] = time_zone
        if filename_format := os.getenv(ENV_UPLOAD_FILENAME_FORMAT):
            values["filename_format"] = filename_format
        if max_random := os.getenv(ENV_UPLOAD_MAX_RANDOM):
            values["max_random"] = int(max_random)
        if unknown_filename := os.getenv(ENV_UPLOAD_UNKNOWN_FILENAME):
            values["unknown_filename"] = unknown_filename

        return cls(**values)


class StorageSettings(BaseModel):
    """Which storage backend to use and how to reach it."""

    model_config = ConfigDict(frozen=True)

    backend: StrictStr = Field(DEFAULT_STORAGE_BACKEND)
    bucket_name: StrictStr | None = None
    key_prefix: StrictStr = DEFAULT_S3_KEY_PREFIX

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        backend = value.strip().lower()
        if backend not in {"local", "s3"}:
            raise ValueError('storage backend must be either "local" or "s3"')
        return backend

    @classmethod
    def from_env(cls) -> "StorageSettings":
        return cls(
            backend=os.getenv(ENV_STORAGE_BACKEND, DEFAULT_STORAGE_BACKEND),
            bucket_name=os.getenv(ENV_IMAGE_S3_BUCKET_NAME) or None,
            key_prefix=os.getenv(ENV_IMAGE_S3_KEY_PREFIX, DEFAULT_S3_KEY_PREFIX),
        )


def allowed_content_types() -> frozenset[str]:
    """Content types accepted for upload.

    Reads a comma-separated `ALLOWED_CONTENT_TYPES`, falling back to the
    image types in `ALLOWED_MIME_TYPES`.
    """
    raw = os.getenv(ENV_ALLOWED_CONTENT_TYPES)
    if not raw:
        return ALLOWED_MIME_TYPES

    configured = frozenset(
        part.strip().lower() for part in raw.split(",") if part.strip()
    )
    return configured or ALLOWED_MIME_TYPES

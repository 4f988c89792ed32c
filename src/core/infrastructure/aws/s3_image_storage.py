"""S3-backed implementation of ImageStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import StorageError
from core.models.storage import StorageReference
from core.repositories.storage_repository import Content, ImageStorageRepository, read_content
from core.utils.constants import (
    ERROR_CODE_CONTENT_DELETE_FAILED,
    ERROR_CODE_CONTENT_NOT_FOUND,
    ERROR_CODE_CONTENT_RETRIEVE_FAILED,
    ERROR_CODE_CONTENT_STORE_FAILED,
    ERROR_CODE_MALFORMED_REFERENCE,
)
from core.utils.filenames import FilenameGenerator
from core.utils.settings import StorageSettings, UploadSettings

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3.

    References are object keys under the configured key prefix.
    """

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        *,
        settings: StorageSettings | None = None,
        filenames: FilenameGenerator | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter."""
        self._settings = settings or StorageSettings.from_env()
        self._s3: S3AdapterProtocol = adapter or S3Adapter(self._settings.bucket_name)
        self._filenames = filenames or FilenameGenerator(UploadSettings.from_env())

    def store(
        self,
        *,
        content: Content,
        original_filename: str | None,
        content_type: str,
    ) -> StorageReference:
        filename = self._filenames.original_name(original_filename)
        key = f"{self._settings.key_prefix}{self._filenames.generate(original_filename)}"

        try:
            body = read_content(content)
            logger.debug("Uploading content", extra={"key": key, "size": len(body)})
            self._s3.write(
                key=key, body=body, content_type=content_type, original_filename=filename
            )
        except (ClientError, BotoCoreError, OSError) as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise StorageError(
                message="Unable to store uploaded content",
                error_code=ERROR_CODE_CONTENT_STORE_FAILED,
                details={"filename": filename},
            ) from exc

        logger.info("Content uploaded successfully", extra={"key": key})
        return StorageReference(filename=filename, reference=key)

    def retrieve(self, *, reference: str) -> bytes:
        self._check_reference(reference)

        try:
            body = self._s3.read(key=reference)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES:
                logger.warning("Stored content missing", extra={"key": reference})
                raise StorageError(
                    message="Unable to retrieve previously uploaded file",
                    error_code=ERROR_CODE_CONTENT_NOT_FOUND,
                    details={"reference": reference},
                ) from exc

            logger.error("S3 download failed", extra={"key": reference})
            raise StorageError(
                message="Unable to retrieve previously uploaded file",
                error_code=ERROR_CODE_CONTENT_RETRIEVE_FAILED,
                details={"reference": reference},
            ) from exc
        except (BotoCoreError, OSError) as exc:
            logger.exception("Unexpected error downloading content")
            raise StorageError(
                message="Unable to retrieve previously uploaded file",
                error_code=ERROR_CODE_CONTENT_RETRIEVE_FAILED,
                details={"reference": reference},
            ) from exc

        logger.info("Content downloaded", extra={"key": reference, "size": len(body)})
        return body

    def delete(self, *, reference: str) -> None:
        self._check_reference(reference)

        try:
            self._s3.remove(key=reference)
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 deletion failed", extra={"key": reference})
            raise StorageError(
                message="Unable to delete stored content",
                error_code=ERROR_CODE_CONTENT_DELETE_FAILED,
                details={"reference": reference},
            ) from exc

        logger.info("Content deleted", extra={"key": reference})

    def _check_reference(self, reference: str) -> None:
        if not reference or not reference.startswith(self._settings.key_prefix):
            raise StorageError(
                message="Malformed storage reference",
                error_code=ERROR_CODE_MALFORMED_REFERENCE,
                details={"reference": reference},
            )

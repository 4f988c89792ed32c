"""Local filesystem implementation of ImageStorageRepository."""

from pathlib import Path

from aws_lambda_powertools import Logger

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
from core.utils.settings import UploadSettings

logger = Logger(UTC=True)


class LocalFileSystemStorage(ImageStorageRepository):
    """Stores content as flat files under the configured upload root.

    The reference is the generated filename relative to the root; the root
    directory is created on first use.
    """

    def __init__(
        self,
        settings: UploadSettings | None = None,
        *,
        filenames: FilenameGenerator | None = None,
    ) -> None:
        self._settings = settings or UploadSettings.from_env()
        self._filenames = filenames or FilenameGenerator(self._settings)
        self._root: Path | None = None

    @property
    def root(self) -> Path:
        if self._root is None:
            root = self._settings.root
            root.mkdir(parents=True, exist_ok=True)
            logger.debug("Upload root ready", extra={"root": str(root)})
            self._root = root
        return self._root

    def store(
        self,
        *,
        content: Content,
        original_filename: str | None,
        content_type: str,
    ) -> StorageReference:
        filename = self._filenames.original_name(original_filename)
        generated = self._filenames.generate(original_filename)

        try:
            target = self.root / generated
            # "xb" refuses to overwrite if two uploads ever draw the same name
            with target.open("xb") as file:
                file.write(read_content(content))
        except OSError as exc:
            logger.exception("Failed to store content", extra={"reference": generated})
            raise StorageError(
                message="Unable to store uploaded content",
                error_code=ERROR_CODE_CONTENT_STORE_FAILED,
                details={"filename": filename},
            ) from exc

        logger.info(
            "Content stored",
            extra={"reference": generated, "content_type": content_type},
        )
        return StorageReference(filename=filename, reference=generated)

    def retrieve(self, *, reference: str) -> bytes:
        path = self._resolve(reference)

        try:
            with path.open("rb") as file:
                return file.read()
        except FileNotFoundError as exc:
            logger.warning("Stored content missing", extra={"reference": reference})
            raise StorageError(
                message="Unable to retrieve previously uploaded file",
                error_code=ERROR_CODE_CONTENT_NOT_FOUND,
                details={"reference": reference},
            ) from exc
        except OSError as exc:
            logger.exception("Failed to read content", extra={"reference": reference})
            raise StorageError(
                message="Unable to retrieve previously uploaded file",
                error_code=ERROR_CODE_CONTENT_RETRIEVE_FAILED,
                details={"reference": reference},
            ) from exc

    def delete(self, *, reference: str) -> None:
        path = self._resolve(reference)

        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.exception("Failed to delete content", extra={"reference": reference})
            raise StorageError(
                message="Unable to delete stored content",
                error_code=ERROR_CODE_CONTENT_DELETE_FAILED,
                details={"reference": reference},
            ) from exc

        logger.info("Content deleted", extra={"reference": reference})

    def _resolve(self, reference: str) -> Path:
        """Map a reference to a file directly inside the root, rejecting anything else."""
        if not reference or Path(reference).name != reference or reference in {".", ".."}:
            raise StorageError(
                message="Malformed storage reference",
                error_code=ERROR_CODE_MALFORMED_REFERENCE,
                details={"reference": reference},
            )
        return self.root / reference

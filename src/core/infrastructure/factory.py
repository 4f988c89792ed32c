"""Selection of the configured storage backend."""

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.filesystem_storage import LocalFileSystemStorage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.settings import StorageSettings


def get_storage_instance(settings: StorageSettings | None = None) -> ImageStorageRepository:
    """Return the storage backend named by `STORAGE_BACKEND` ("local" or "s3")."""
    settings = settings or StorageSettings.from_env()

    if settings.backend == "s3":
        if not settings.bucket_name:
            raise RuntimeError(
                "Invalid configuration: storage backend is set to s3, "
                "but IMAGE_S3_BUCKET_NAME is unset"
            )
        return S3ImageStorage(settings=settings)

    return LocalFileSystemStorage()

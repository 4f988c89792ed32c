"""Business logic for the image catalog.

This module coordinates content storage, image metadata persistence and
search, while translating failures into domain-specific errors.
"""

from aws_lambda_powertools import Logger

from core.filters.image_search import SearchMode, merge_unique, resolve_search_mode, sort_images
from core.infrastructure.aws.dynamodb_images import DynamoDBImages
from core.infrastructure.factory import get_storage_instance
from core.models.errors import StorageError, UnsupportedMediaTypeError
from core.models.image import Image
from core.models.user import User
from core.repositories.image_repository import ImageRepository
from core.repositories.storage_repository import Content, ImageStorageRepository
from core.utils.mime import normalize_mime_type
from core.utils.settings import allowed_content_types

logger = Logger(UTC=True)


class ImageService:
    """Application service responsible for images.

    This service orchestrates:
    - Upload: content type policy, content storage, metadata creation
    - Ownership-scoped lookup for mutation and deletion
    - Multi-criteria search with de-duplicated, ordered results
    - Deletion of content and metadata
    """

    def __init__(
        self,
        images: ImageRepository | None = None,
        storage: ImageStorageRepository | None = None,
        *,
        allowed_types: frozenset[str] | None = None,
    ) -> None:
        self.images = images or DynamoDBImages()
        self.storage = storage or get_storage_instance()
        self.allowed_types = allowed_types or allowed_content_types()

    def get(self, image_id: str) -> Image | None:
        return self.images.find_by_id(image_id)

    def get_owned(self, image_id: str, principal: User) -> Image | None:
        """Return the image only if `principal` contributed it."""
        image = self.images.find_by_id(image_id)
        if image is None or image.contributor != principal:
            return None
        return image

    def store(
        self,
        *,
        content: Content,
        filename: str | None,
        content_type: str | None,
        contributor: User,
        title: str | None = None,
        description: str | None = None,
    ) -> Image:
        """Store uploaded content and create its metadata record.

        The upload flow is:
        1. Reject content types outside the allowed list
        2. Write content to the storage backend
        3. Persist image metadata
        4. Remove stored content if the record is invalid or cannot be saved

        Raises:
            UnsupportedMediaTypeError: If the content type is not allowed
            StorageError: If content cannot be stored
            MetadataOperationFailedError: If metadata persistence fails
        """
        mime_type = normalize_mime_type(content_type)
        if mime_type is None or mime_type not in self.allowed_types:
            logger.warning("Unsupported MIME type", extra={"mime_type": content_type})
            raise UnsupportedMediaTypeError(
                message="Upload MIME type not in whitelist",
                details={"content_type": content_type},
            )

        reference = self.storage.store(
            content=content,
            original_filename=filename,
            content_type=mime_type,
        )

        # Stored content is removed if the record cannot be built or saved
        try:
            image = self.images.create(
                Image(
                    title=title,
                    description=description,
                    name=reference.filename,
                    path=reference.reference,
                    content_type=mime_type,
                    contributor=contributor,
                )
            )
        except Exception:
            logger.exception("Failed to record uploaded image")
            try:
                self.storage.delete(reference=reference.reference)
            except StorageError:
                logger.warning(
                    "Failed to clean up stored content after metadata failure",
                    extra={"reference": reference.reference},
                )
            raise

        logger.info(
            "Image stored",
            extra={"image_id": image.id, "contributor_id": contributor.id},
        )
        return image

    def delete(self, image: Image) -> None:
        """Delete stored content, then the metadata record.

        When content deletion fails the record is kept and the error
        propagates, so the record never outlives a failed cleanup silently.
        """
        self.storage.delete(reference=image.path)
        if image.id is not None:
            self.images.delete(image.id)

        logger.info("Image deleted", extra={"image_id": image.id})

    def search(self, contributor: User | None = None, fragment: str | None = None) -> list[Image]:
        mode = resolve_search_mode(has_contributor=contributor is not None, fragment=fragment)
        logger.debug("Searching images", extra={"mode": mode.value})

        if contributor is not None and contributor.id is None:
            return []

        contributor_id = contributor.id if contributor is not None else None
        text = fragment or ""

        if mode is SearchMode.CONTRIBUTOR_AND_FRAGMENT:
            results = merge_unique(
                self.images.find_all_by_title_contains(text, contributor_id=contributor_id),
                self.images.find_all_by_description_contains(text, contributor_id=contributor_id),
            )
        elif mode is SearchMode.CONTRIBUTOR and contributor_id is not None:
            results = self.images.find_all_by_contributor(contributor_id)
        elif mode is SearchMode.FRAGMENT:
            results = merge_unique(
                self.images.find_all_by_title_contains(text),
                self.images.find_all_by_description_contains(text),
            )
        else:
            results = self.images.find_all()

        return sort_images(results)

    def get_contributions(self, contributor: User) -> list[Image]:
        """A contributor's images, newest first."""
        if contributor.id is None:
            return []
        return self.images.find_all_by_contributor(contributor.id)

    def save(self, image: Image) -> Image:
        return self.images.save(image)

    def retrieve(self, image: Image) -> bytes:
        """Read the image content.

        Raises:
            StorageError: If the stored content is gone or unreadable
        """
        return self.storage.retrieve(reference=image.path)

"""Abstract contract for image record persistence.

Each search combination maps to one explicit, parameterized query; the
service decides which ones to run.
"""

from abc import ABC, abstractmethod

from core.models.image import Image


class ImageRepository(ABC):
    """Contract for storing and querying `Image` records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Text matching is case-sensitive substring containment.
    """

    @abstractmethod
    def find_by_id(self, image_id: str) -> Image | None:
        """Return the image with `image_id`, or None."""

    @abstractmethod
    def find_all(self) -> list[Image]:
        """Return every image."""

    @abstractmethod
    def find_all_by_contributor(self, contributor_id: str) -> list[Image]:
        """Return a contributor's images, newest first."""

    @abstractmethod
    def find_all_by_title_contains(
        self, fragment: str, *, contributor_id: str | None = None
    ) -> list[Image]:
        """Return images whose title contains `fragment`, optionally for one contributor."""

    @abstractmethod
    def find_all_by_description_contains(
        self, fragment: str, *, contributor_id: str | None = None
    ) -> list[Image]:
        """Return images whose description contains `fragment`, optionally for one contributor."""

    @abstractmethod
    def create(self, image: Image) -> Image:
        """Persist a new image record, assigning id and timestamps.

        Raises:
            MetadataOperationFailedError: If the write fails
        """

    @abstractmethod
    def save(self, image: Image) -> Image:
        """Upsert an image record, refreshing `updated`.

        Raises:
            MetadataOperationFailedError: If the write fails
        """

    @abstractmethod
    def delete(self, image_id: str) -> None:
        """Remove an image record.

        Raises:
            MetadataOperationFailedError: If the deletion fails
        """

"""Abstract contract for image content storage."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from core.models.storage import StorageReference

Content = bytes | BinaryIO


def read_content(content: Content) -> bytes:
    """Return the bytes of `content`, reading file-like objects to the end."""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    return content.read()


class ImageStorageRepository(ABC):
    """Contract for storing and retrieving uploaded content.

    Implementations could be local disk, S3, GCS, etc.
    Services depend on this interface, not the implementation.
    References returned by `store` are opaque to every caller.
    """

    @abstractmethod
    def store(
        self,
        *,
        content: Content,
        original_filename: str | None,
        content_type: str,
    ) -> StorageReference:
        """Persist content under a generated name.

        Args:
            content: Raw bytes or a binary file-like object
            original_filename: Client-supplied filename, if known
            content_type: MIME type of the content

        Returns:
            StorageReference with the original filename and opaque reference

        Raises:
            StorageError: If the content cannot be written
        """

    @abstractmethod
    def retrieve(self, *, reference: str) -> bytes:
        """Read stored content.

        Args:
            reference: Reference returned by `store`

        Returns:
            The complete stored bytes

        Raises:
            StorageError: If the reference is malformed, missing or unreadable
        """

    @abstractmethod
    def delete(self, *, reference: str) -> None:
        """Remove stored content.

        Content that is already gone counts as deleted.

        Raises:
            StorageError: If removal fails
        """

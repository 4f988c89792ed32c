"""Object access for the S3 storage backend.

The adapter is bound to one bucket. boto3 errors propagate unchanged;
`S3ImageStorage` translates them into `StorageError`.
"""

import os
from typing import Any, Protocol
from urllib.parse import quote

import boto3

from core.utils.constants import ENV_AWS_ENDPOINT_URL, ENV_AWS_REGION

ORIGINAL_FILENAME_METADATA = "original-filename"


class S3AdapterProtocol(Protocol):
    def write(
        self, *, key: str, body: bytes, content_type: str, original_filename: str | None = None
    ) -> None: ...

    def read(self, *, key: str) -> bytes: ...

    def remove(self, *, key: str) -> None: ...


class S3Adapter:
    """Reads and writes whole objects in the gallery bucket."""

    def __init__(self, bucket_name: str | None) -> None:
        if not bucket_name:
            raise RuntimeError("An S3 bucket name is required for the s3 storage backend")

        self.bucket_name = bucket_name
        self._client = boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    def write(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        original_filename: str | None = None,
    ) -> None:
        """Store `body` under `key`.

        The client filename is kept as percent-encoded object metadata, since
        S3 user metadata must be ASCII.
        """
        kwargs: dict[str, Any] = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if original_filename:
            kwargs["Metadata"] = {ORIGINAL_FILENAME_METADATA: quote(original_filename)}

        self._client.put_object(**kwargs)

    def read(self, *, key: str) -> bytes:
        """Return the full object body."""
        response = self._client.get_object(Bucket=self.bucket_name, Key=key)
        body: bytes = response["Body"].read()
        return body

    def remove(self, *, key: str) -> None:
        # DeleteObject succeeds for keys that do not exist
        self._client.delete_object(Bucket=self.bucket_name, Key=key)

import os

import pytest
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter


@pytest.fixture
def adapter(s3_bucket) -> S3Adapter:
    return S3Adapter(os.environ["IMAGE_S3_BUCKET_NAME"])


class TestS3Adapter:
    def test_requires_bucket_name(self):
        with pytest.raises(RuntimeError):
            S3Adapter(None)

    def test_write_then_read(self, adapter, s3_get_object):
        adapter.write(key="images/img_1.jpg", body=b"image-bytes", content_type="image/jpeg")

        assert s3_get_object("images/img_1.jpg") == b"image-bytes"
        assert adapter.read(key="images/img_1.jpg") == b"image-bytes"

    def test_write_records_encoded_original_filename(self, adapter, s3_client):
        adapter.write(
            key="images/img_2.jpg",
            body=b"data",
            content_type="image/jpeg",
            original_filename="café night.jpg",
        )

        head = s3_client.head_object(Bucket=adapter.bucket_name, Key="images/img_2.jpg")
        assert head["ContentType"] == "image/jpeg"
        assert head["Metadata"] == {"original-filename": "caf%C3%A9%20night.jpg"}

    def test_read_missing_key_raises_client_error(self, adapter):
        with pytest.raises(ClientError) as exc:
            adapter.read(key="images/missing.jpg")

        assert exc.value.response["Error"]["Code"] == "NoSuchKey"

    def test_remove(self, adapter, s3_get_object):
        adapter.write(key="images/gone.jpg", body=b"data", content_type="image/jpeg")

        adapter.remove(key="images/gone.jpg")

        with pytest.raises(ClientError):
            s3_get_object("images/gone.jpg")

    def test_remove_missing_key_is_silent(self, adapter):
        adapter.remove(key="images/never-there.jpg")

    def test_client_errors_bubble_up(self, monkeypatch, adapter):
        def raise_error(**_):
            raise ClientError({"Error": {"Code": "InternalError"}}, "PutObject")

        monkeypatch.setattr(adapter._client, "put_object", raise_error)

        with pytest.raises(ClientError):
            adapter.write(key="images/x.jpg", body=b"data", content_type="image/jpeg")

"""
Pytest configuration and fixtures for gallery tests.
Provides AWS mocking, DynamoDB and S3 fixtures, and sample users and images.
"""

import base64
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_TABLE_NAME", "image")
os.environ.setdefault("USER_TABLE_NAME", "user_profile")
os.environ.setdefault("USER_KEYS_TABLE_NAME", "user_profile_keys")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "gallery-images-test")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "gallery")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "GalleryTests")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")

from core.models.image import Image  # noqa: E402
from core.models.user import User  # noqa: E402


@pytest.fixture(autouse=True)
def clean_gallery_env(monkeypatch):
    """Keep per-test configuration from leaking between tests."""
    for name in ("API_BASE_URL", "ALLOWED_CONTENT_TYPES", "IMAGE_S3_KEY_PREFIX"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


def _create_image_table(dynamodb_resource):
    """Helper to create the image table with its contributor GSI."""
    return dynamodb_resource.create_table(
        TableName=os.getenv("IMAGE_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "image_id", "AttributeType": "S"},
            {"AttributeName": "contributor_id", "AttributeType": "S"},
            {"AttributeName": "created", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "contributor-created-index",
                "KeySchema": [
                    {"AttributeName": "contributor_id", "KeyType": "HASH"},
                    {"AttributeName": "created", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )


def _create_simple_table(dynamodb_resource, table_name: str, key_name: str):
    return dynamodb_resource.create_table(
        TableName=table_name,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": key_name, "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": key_name, "AttributeType": "S"}],
    )


def _load_or_create(dynamodb_resource, table_name: str, create: Callable[[], Any]):
    try:
        table = dynamodb_resource.Table(table_name)
        table.load()
    except ClientError:
        table = create()
        table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def user_tables(dynamodb_resource):
    """
    Create the user profile table and its uniqueness-marker table.

    Tables live only inside the moto context of the current test.
    """
    profiles = _load_or_create(
        dynamodb_resource,
        os.getenv("USER_TABLE_NAME"),
        lambda: _create_simple_table(dynamodb_resource, os.getenv("USER_TABLE_NAME"), "user_id"),
    )
    keys = _load_or_create(
        dynamodb_resource,
        os.getenv("USER_KEYS_TABLE_NAME"),
        lambda: _create_simple_table(
            dynamodb_resource, os.getenv("USER_KEYS_TABLE_NAME"), "unique_key"
        ),
    )
    return profiles, keys


@pytest.fixture(scope="function")
def image_table(dynamodb_resource):
    return _load_or_create(
        dynamodb_resource,
        os.getenv("IMAGE_TABLE_NAME"),
        lambda: _create_image_table(dynamodb_resource),
    )


@pytest.fixture(scope="function")
def gallery_tables(user_tables, image_table):
    """All three gallery tables."""
    return {"users": user_tables[0], "user_keys": user_tables[1], "images": image_table}


@pytest.fixture
def dynamodb_put_item(image_table) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """
    Helper to insert a raw image item into DynamoDB.

    Usage:
        item = dynamodb_put_item({"image_id": "img_1", "contributor_id": "u1", ...})
    """

    def _put(item: dict[str, Any]) -> dict[str, Any]:
        image_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket inside the moto context."""
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    return s3_client


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("images/20240101T000000000000-42.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_client.get_object(
            Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"),
            Key=key,
        )
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point the filesystem backend at a per-test directory."""
    directory = tmp_path / "uploads"
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("UPLOAD_DIRECTORY", str(directory))
    return directory


@pytest.fixture
def alice() -> User:
    return User(
        id="u-alice",
        created="2024-01-01T10:00:00.000000+00:00",
        updated="2024-01-01T10:00:00.000000+00:00",
        oauth_key="google-oauth2|alice",
        display_name="Alice",
    )


@pytest.fixture
def bob() -> User:
    return User(
        id="u-bob",
        created="2024-01-02T10:00:00.000000+00:00",
        updated="2024-01-02T10:00:00.000000+00:00",
        oauth_key="google-oauth2|bob",
        display_name="Bob",
    )


@pytest.fixture
def sample_image(alice) -> Image:
    return Image(
        id="img-1",
        created="2024-01-03T10:00:00.000000+00:00",
        updated="2024-01-03T10:00:00.000000+00:00",
        title="Sunset",
        description="Evening sun over the bay",
        name="photo.jpg",
        path="20240103T100000000000-42.jpg",
        content_type="image/jpeg",
        contributor=alice,
    )


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )

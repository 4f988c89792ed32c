import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from handlers.upload_image.handler import handler as upload_handler


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def gallery(gallery_tables, upload_dir, monkeypatch):
    """Backing tables plus a per-test upload directory and link base."""
    monkeypatch.setenv("API_BASE_URL", "https://api.example.com/v1")
    return gallery_tables


def claims_for(subject: str | None, name: str | None = None) -> dict[str, Any]:
    if subject is None:
        return {}
    claims = {"sub": subject}
    if name:
        claims["name"] = name
    return {"authorizer": {"jwt": {"claims": claims}}}


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event.

    Usage:
        event = make_event("GET", "/images/42", path_params={"image_id": "42"}, user="alice")
    """

    def _make(
        method: str,
        path: str,
        *,
        path_params: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
        user: str | None = None,
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path,
            "pathParameters": path_params,
            "queryStringParameters": query,
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
            "requestContext": {
                "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
                "stage": "prod",
                **claims_for(f"oidc|{user}" if user else None, user.title() if user else None),
            },
        }

    return _make


@pytest.fixture
def upload_as(make_event, lambda_context, sample_jpeg_binary) -> Callable[..., dict[str, Any]]:
    """
    Upload an image through the handler and return the decoded response body.

    Usage:
        image = upload_as("alice", title="Sunset")
    """

    def _upload(user: str, **fields: Any) -> dict[str, Any]:
        body = {
            "file": base64.b64encode(sample_jpeg_binary).decode("utf-8"),
            "filename": "photo.jpg",
            **fields,
        }
        response = upload_handler(make_event("POST", "/images", body=body, user=user), lambda_context)
        assert response["statusCode"] == 201, response["body"]
        return json.loads(response["body"])

    return _upload

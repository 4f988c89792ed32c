"""Image Gallery Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Image gallery backend using AWS Lambda, DynamoDB, and pluggable content storage"
)

__all__ = ["handlers", "core"]

"""Pydantic models for the image listing request."""

from pydantic import BaseModel, Field, StrictStr


class ListImagesRequest(BaseModel):
    """Validation model for list/search images query parameters."""

    contributor: StrictStr | None = Field(
        default=None,
        min_length=1,
        description="Restrict results to images uploaded by this user id",
    )
    q: StrictStr | None = Field(
        default=None,
        description="Case-sensitive fragment matched against title and description",
    )

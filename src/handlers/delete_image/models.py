"""Pydantic models for the delete image request."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Image ID to delete",
    )

"""Pydantic models shared by single-image requests."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

IMAGE_TEXT_PROPERTIES = frozenset({"title", "description"})


class ImagePathRequest(BaseModel):
    """Validation model for `/images/{image_id}[/<property>]` paths."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Image ID from the request path",
    )
    field_name: StrictStr | None = Field(
        default=None,
        description="Optional sub-resource following the image id",
    )

    @field_validator("image_id")
    @classmethod
    def validate_image_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("image_id must not be blank")
        return value

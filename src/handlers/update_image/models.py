"""Pydantic models for image text property updates."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, MIN_TEXT_LENGTH


class UpdateTitleRequest(BaseModel):
    """Body of `PUT /images/{image_id}/title`."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: StrictStr = Field(..., min_length=MIN_TEXT_LENGTH, max_length=MAX_TITLE_LENGTH)


class UpdateDescriptionRequest(BaseModel):
    """Body of `PUT /images/{image_id}/description`."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: StrictStr = Field(
        ..., min_length=MIN_TEXT_LENGTH, max_length=MAX_DESCRIPTION_LENGTH
    )


UPDATE_MODELS: dict[str, type[BaseModel]] = {
    "title": UpdateTitleRequest,
    "description": UpdateDescriptionRequest,
}

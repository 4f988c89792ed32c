"""Pydantic models for user profile updates."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import MIN_TEXT_LENGTH


class UpdateNameRequest(BaseModel):
    """Body of `PUT /users/{user_id}/name`."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: StrictStr = Field(..., min_length=MIN_TEXT_LENGTH, description="New display name")

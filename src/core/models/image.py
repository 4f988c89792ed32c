"""Image domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.models.user import User
from core.utils.constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, MIN_TEXT_LENGTH


class Image(BaseModel):
    """An uploaded image: metadata, owning contributor and storage reference.

    `path` is an opaque reference meaningful only to the storage backend and
    must never leave the service. Equality follows the same contract as
    `User`: persisted records with equal ids.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: StrictStr | None = Field(None, frozen=True, description="Unique image identifier")
    created: StrictStr | None = Field(
        None, frozen=True, description="ISO-8601 creation timestamp (UTC)"
    )
    updated: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    title: StrictStr | None = Field(
        None, min_length=MIN_TEXT_LENGTH, max_length=MAX_TITLE_LENGTH
    )
    description: StrictStr | None = Field(
        None, min_length=MIN_TEXT_LENGTH, max_length=MAX_DESCRIPTION_LENGTH
    )

    name: StrictStr = Field(..., min_length=1, frozen=True, description="Original filename")
    path: StrictStr = Field(..., min_length=1, frozen=True, description="Storage reference")
    content_type: StrictStr = Field(..., frozen=True, description="MIME type of the content")
    contributor: User = Field(..., frozen=True, description="Uploading user")

    @property
    def natural_key(self) -> str:
        """Title when present, otherwise the original filename."""
        return self.title if self.title is not None else self.name

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, Image):
            return NotImplemented
        return self.id is not None and other.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: "Image") -> bool:
        return self.natural_key < other.natural_key

"""Public JSON representations of users and images.

Storage references and identity-provider keys are never part of these
models.
"""

from pydantic import BaseModel, Field, StrictStr

from core.models.image import Image
from core.models.user import User
from core.utils.constants import IMAGES_COLLECTION, USERS_COLLECTION
from core.utils.links import build_href


class UserRepresentation(BaseModel):
    """User as returned by the gallery API."""

    id: StrictStr = Field(..., description="Unique user identifier")
    name: StrictStr = Field(..., description="Display name")
    href: StrictStr | None = Field(None, description="Location of this user resource")
    created: StrictStr | None = Field(None, description="ISO-8601 creation timestamp (UTC)")
    updated: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    @classmethod
    def from_user(cls, user: User, *, base_url: str | None) -> "UserRepresentation":
        return cls(
            id=user.id or "",
            name=user.display_name,
            href=build_href(base_url, USERS_COLLECTION, user.id),
            created=user.created,
            updated=user.updated,
        )


class ImageRepresentation(BaseModel):
    """Image as returned by the gallery API."""

    id: StrictStr = Field(..., description="Unique image identifier")
    title: StrictStr | None = Field(None, description="Optional image title")
    description: StrictStr | None = Field(None, description="Optional image description")
    name: StrictStr = Field(..., description="Original image file name")
    content_type: StrictStr = Field(..., description="MIME type of the image")
    href: StrictStr | None = Field(None, description="Location of this image resource")
    created: StrictStr | None = Field(None, description="ISO-8601 creation timestamp (UTC)")
    updated: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")
    contributor: UserRepresentation = Field(..., description="Uploading user")

    @classmethod
    def from_image(cls, image: Image, *, base_url: str | None) -> "ImageRepresentation":
        return cls(
            id=image.id or "",
            title=image.title,
            description=image.description,
            name=image.name,
            content_type=image.content_type,
            href=build_href(base_url, IMAGES_COLLECTION, image.id),
            created=image.created,
            updated=image.updated,
            contributor=UserRepresentation.from_user(image.contributor, base_url=base_url),
        )


def represent_images(images: list[Image], *, base_url: str | None) -> list[dict]:
    """Serialize a list of images, omitting unset optional fields."""
    return [
        ImageRepresentation.from_image(image, base_url=base_url).model_dump(exclude_none=True)
        for image in images
    ]


def represent_users(users: list[User], *, base_url: str | None) -> list[dict]:
    """Serialize a list of users, omitting unset optional fields."""
    return [
        UserRepresentation.from_user(user, base_url=base_url).model_dump(exclude_none=True)
        for user in users
    ]

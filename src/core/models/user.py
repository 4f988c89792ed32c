"""User domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class User(BaseModel):
    """A gallery user, linked to an external OpenID identity by `oauth_key`.

    Records compare equal only when both have been persisted and share the
    same `id`; an unpersisted record is equal only to itself. Natural ordering
    is by `display_name`.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: StrictStr | None = Field(None, frozen=True, description="Unique user identifier")
    created: StrictStr | None = Field(
        None, frozen=True, description="ISO-8601 creation timestamp (UTC)"
    )
    updated: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    oauth_key: StrictStr = Field(
        ..., min_length=1, frozen=True, description="Identity provider subject"
    )
    display_name: StrictStr = Field(..., min_length=1, description="Unique display name")

    @property
    def persisted(self) -> bool:
        return self.id is not None

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, User):
            return NotImplemented
        return self.id is not None and other.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.oauth_key)

    def __lt__(self, other: "User") -> bool:
        return self.display_name < other.display_name

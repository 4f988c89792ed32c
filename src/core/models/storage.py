"""Storage backend value types."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class StorageReference(BaseModel):
    """Result of storing content: the original filename and an opaque reference."""

    model_config = ConfigDict(frozen=True)

    filename: StrictStr = Field(..., description="Original (or fallback) filename")
    reference: StrictStr = Field(..., description="Opaque reference understood by the backend")

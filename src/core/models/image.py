"""Shared image record models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class Image(BaseModel):
    """Image attributes supplied by the caller when a record is inserted."""

    model_config = ConfigDict(str_strip_whitespace=True)

    filename: StrictStr = Field(..., min_length=1, description="Original image file name")
    size: StrictInt = Field(..., ge=0, description="Image size in bytes")
    mime: StrictStr = Field(..., min_length=1, description="MIME type of the image (e.g. image/jpeg)")
    width: StrictInt = Field(..., ge=0, description="Width in pixels")
    height: StrictInt = Field(..., ge=0, description="Height in pixels")


class ImageFields(BaseModel):
    """Core fields of a stored image, as returned when a single image is loaded."""

    filename: str
    size: int
    width: int
    height: int
    mime: str


class ImageRecord(Image):
    """Image record as persisted by the store."""

    image_identifier: StrictStr = Field(..., min_length=1, description="Unique image identifier")
    added: StrictInt = Field(..., description="Unix timestamp assigned by the store at insert time")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form metadata")

    @classmethod
    def create(cls, *, image_identifier: str, image: Image, added: int) -> "ImageRecord":
        """Build a fresh record with empty metadata."""
        return cls(
            image_identifier=image_identifier,
            added=added,
            metadata={},
            **image.model_dump(),
        )

"""Schema validation using Pydantic models.

This module defines:
- Pydantic models for photos, crops, pages and the working-set JSON
- The canonical LayoutTag values and their page capacities
- Validation functions for the minimum-visible-area crop invariant
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from album.config import LAYOUT_CAPACITY, MIN_VISIBLE_PX, SCHEMA_VERSION

Edge = Literal["left", "right", "top", "bottom"]

OPPOSITE_EDGE: dict[str, str] = {
    "left": "right",
    "right": "left",
    "top": "bottom",
    "bottom": "top",
}


class LayoutTag(str, Enum):
    """Canonical page templates."""

    SINGLE = "single"
    TWO_COLUMNS = "twoColumns"
    TWO_ROWS = "twoRows"
    GRID_2X2 = "grid2x2"

    @property
    def capacity(self) -> int:
        """Number of photos a full page of this template holds."""
        return LAYOUT_CAPACITY[self.value]


class CropRect(BaseModel):
    """Edge insets in source-image pixels. Unset edges mean no inset."""

    model_config = ConfigDict(frozen=True)

    left: float | None = Field(default=None, ge=0, description="Left inset (px)")
    right: float | None = Field(default=None, ge=0, description="Right inset (px)")
    top: float | None = Field(default=None, ge=0, description="Top inset (px)")
    bottom: float | None = Field(default=None, ge=0, description="Bottom inset (px)")

    @property
    def is_empty(self) -> bool:
        """True when no edge has been set."""
        return all(getattr(self, edge) is None for edge in OPPOSITE_EDGE)

    def inset(self, edge: str) -> float:
        """Return the inset for an edge, treating unset as 0."""
        return getattr(self, edge) or 0


class Photo(BaseModel):
    """A photo in the working set, with externally produced analysis fields."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque photo identifier")
    width: int = Field(gt=0, description="Pixel width")
    height: int = Field(gt=0, description="Pixel height")
    layout_label: str | None = Field(default=None, description="Raw layout label from analysis")
    suggested_crop: CropRect | None = Field(default=None, description="Suggested crop from analysis")
    user_crop: CropRect | None = Field(default=None, description="User override of the crop")
    source_image: str = Field(default="", description="Path of the source file, if known")


class Page(BaseModel):
    """One album page: a template and the photos placed on it."""

    model_config = ConfigDict(frozen=True)

    layout: LayoutTag
    items: list[Photo]

    @property
    def photo_ids(self) -> list[str]:
        return [photo.id for photo in self.items]


class OverlayGeometry(BaseModel):
    """Crop mask offsets in display-box pixels."""

    left_px: float = 0.0
    right_px: float = 0.0
    top_px: float = 0.0
    bottom_px: float = 0.0


class CropEvent(BaseModel):
    """A user edit on one photo's crop."""

    photo_id: str
    action: Literal["set", "reset", "clear"] = "set"
    edge: Edge | None = None
    value: float | None = None

    @model_validator(mode="after")
    def check_set_arguments(self) -> "CropEvent":
        """A "set" event needs both an edge and a value; reset/clear take neither."""
        if self.action == "set" and (self.edge is None or self.value is None):
            raise ValueError("Crop event 'set' requires both edge and value")
        if self.action != "set" and (self.edge is not None or self.value is not None):
            raise ValueError(f"Crop event '{self.action}' takes no edge or value")
        return self


class WorkingSet(BaseModel):
    """Serialized snapshot of the photos currently in the album."""

    schema_version: str = Field(default=SCHEMA_VERSION, description="JSON schema version")
    album_id: str = Field(default="album", description="Album identifier")
    photos: list[Photo] = Field(default_factory=list)

    @field_validator("photos")
    @classmethod
    def check_unique_ids(cls, v: list[Photo]) -> list[Photo]:
        """Validate photo ids are unique within the working set."""
        seen: set[str] = set()
        for photo in v:
            if photo.id in seen:
                raise ValueError(f"Duplicate photo id: {photo.id}")
            seen.add(photo.id)
        return v


def check_crop_within_photo(crop: CropRect, width: int, height: int) -> bool:
    """Check that a crop leaves at least MIN_VISIBLE_PX visible on both axes.

    Args:
        crop: Crop insets to check
        width: Photo width in pixels
        height: Photo height in pixels

    Returns:
        True if left + right and top + bottom both leave a visible region
    """
    return (
        crop.inset("left") + crop.inset("right") <= width - MIN_VISIBLE_PX
        and crop.inset("top") + crop.inset("bottom") <= height - MIN_VISIBLE_PX
    )

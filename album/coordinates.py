"""Crop coordinate mapping and clamping utilities.

This module handles:
- Scaling source-pixel crop insets into a display box (overlay geometry)
- Clamping interactive edge edits to keep a visible region
- Resolving, resetting and clearing a photo's user crop override
"""

from album.config import MIN_VISIBLE_PX
from album.validation import OPPOSITE_EDGE, CropRect, OverlayGeometry, Photo


def scale_factors(
    photo_width: int, photo_height: int, box_width: float, box_height: float
) -> tuple[float, float]:
    """Calculate per-axis scale from source pixels to display pixels.

    Args:
        photo_width: Source width in pixels
        photo_height: Source height in pixels
        box_width: Display box width (0 if not yet measured)
        box_height: Display box height (0 if not yet measured)

    Returns:
        Tuple of (scale_x, scale_y)

    Note:
        A zero-sized box axis is treated as 1 so the mapping degrades to a
        no-op rather than collapsing the overlay.
    """
    scale_x = (box_width or 1) / photo_width
    scale_y = (box_height or 1) / photo_height
    return scale_x, scale_y


def map_overlay(
    photo_width: int,
    photo_height: int,
    crop: CropRect,
    box_width: float,
    box_height: float,
) -> OverlayGeometry:
    """Convert crop insets into display-box offsets for the crop masks."""
    scale_x, scale_y = scale_factors(photo_width, photo_height, box_width, box_height)
    return OverlayGeometry(
        left_px=crop.inset("left") * scale_x,
        right_px=crop.inset("right") * scale_x,
        top_px=crop.inset("top") * scale_y,
        bottom_px=crop.inset("bottom") * scale_y,
    )


def clamp_edge(value: float, axis_size: int, opposite_inset: float) -> float:
    """Clamp an edge inset to [0, axis_size - MIN_VISIBLE_PX - opposite_inset]."""
    return max(0, min(value, axis_size - MIN_VISIBLE_PX - opposite_inset))


def effective_crop(photo: Photo) -> CropRect:
    """The crop currently in force: user override, else suggestion, else none."""
    if photo.user_crop is not None and not photo.user_crop.is_empty:
        return photo.user_crop
    return photo.suggested_crop or CropRect()


def set_crop_edge(photo: Photo, edge: str, value: float) -> Photo:
    """Apply an interactive edit to one edge of the effective crop.

    Args:
        photo: Photo being reviewed
        edge: One of "left", "right", "top", "bottom"
        value: Requested inset in source pixels

    Returns:
        New Photo whose user_crop carries the clamped value

    Raises:
        KeyError: If edge is not a crop edge
    """
    opposite = OPPOSITE_EDGE[edge]
    axis_size = photo.width if edge in ("left", "right") else photo.height
    current = effective_crop(photo)

    clamped = clamp_edge(value, axis_size, current.inset(opposite))
    updated = current.model_copy(update={edge: clamped})
    return photo.model_copy(update={"user_crop": updated})


def reset_crop(photo: Photo) -> Photo:
    """Set the override back to the suggested crop, or zero insets without one."""
    if photo.suggested_crop is not None:
        baseline = photo.suggested_crop.model_copy()
    else:
        baseline = CropRect(left=0, right=0, top=0, bottom=0)
    return photo.model_copy(update={"user_crop": baseline})


def clear_crop(photo: Photo) -> Photo:
    """Drop the user override so the suggestion applies again."""
    return photo.model_copy(update={"user_crop": None})

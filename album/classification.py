"""Layout label normalization.

Maps the loosely formatted layout label produced by photo analysis onto one
of the canonical LayoutTag values, falling back to the photo's orientation
when the label is missing or unrecognized.
"""

from album.validation import LayoutTag, Photo

# Lower-cased label -> canonical tag
LABEL_SYNONYMS: dict[str, LayoutTag] = {
    "single": LayoutTag.SINGLE,
    "twocolumns": LayoutTag.TWO_COLUMNS,
    "two-columns": LayoutTag.TWO_COLUMNS,
    "col": LayoutTag.TWO_COLUMNS,
    "column": LayoutTag.TWO_COLUMNS,
    "columns": LayoutTag.TWO_COLUMNS,
    "tworows": LayoutTag.TWO_ROWS,
    "two-rows": LayoutTag.TWO_ROWS,
    "row": LayoutTag.TWO_ROWS,
    "rows": LayoutTag.TWO_ROWS,
    "grid2x2": LayoutTag.GRID_2X2,
    "grid": LayoutTag.GRID_2X2,
    "2x2": LayoutTag.GRID_2X2,
}


def normalize_label(raw: str | None) -> LayoutTag | None:
    """Normalize a raw layout label.

    Args:
        raw: Label as returned by analysis, any casing

    Returns:
        Matching LayoutTag, or None if the label is absent or unrecognized
    """
    if not raw:
        return None
    return LABEL_SYNONYMS.get(raw.lower())


def orientation_fallback(width: int, height: int) -> LayoutTag:
    """Pick a two-up template from orientation: landscape/square stack, portrait sits side by side."""
    if width >= height:
        return LayoutTag.TWO_ROWS
    return LayoutTag.TWO_COLUMNS


def classify(photo: Photo) -> LayoutTag:
    """Resolve the page template for a photo.

    Note:
        single and grid2x2 are only reachable through an explicit label;
        the orientation fallback never yields them.
    """
    tag = normalize_label(photo.layout_label)
    if tag is None:
        tag = orientation_fallback(photo.width, photo.height)
    return tag

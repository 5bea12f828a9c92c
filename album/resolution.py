"""Print-readiness checks for source photos."""

from pydantic import BaseModel, Field

from album.config import FULL_PAGE_MIN_PX


class ResolutionInfo(BaseModel):
    """Pixel size summary of a photo."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    megapixels: float = Field(ge=0)
    full_page_print_ok: bool


def assess_resolution(width: int, height: int) -> ResolutionInfo:
    """Summarize resolution and whether the photo fills an A4 page at print DPI.

    Args:
        width: Pixel width
        height: Pixel height

    Returns:
        ResolutionInfo; full_page_print_ok holds in portrait or landscape
    """
    short_side, long_side = FULL_PAGE_MIN_PX
    print_ok = (width >= short_side and height >= long_side) or (
        width >= long_side and height >= short_side
    )
    return ResolutionInfo(
        width=width,
        height=height,
        megapixels=(width * height) / 1_000_000,
        full_page_print_ok=print_ok,
    )

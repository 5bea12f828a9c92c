"""Photo-to-page assignment and layout generation.

This module handles:
- Bucketing classified photos by page template
- Chunking each bucket into pages, with remainder fallbacks
- Generating layout JSON for the external renderer
"""

import logging
from typing import Sequence, TypedDict, TypeVar

from album.classification import classify
from album.config import SCHEMA_VERSION
from album.coordinates import effective_crop
from album.validation import LayoutTag, Page, Photo
from album.workset import load_working_set

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Page emission order, by originating bucket
BUCKET_ORDER = (
    LayoutTag.SINGLE,
    LayoutTag.TWO_COLUMNS,
    LayoutTag.TWO_ROWS,
    LayoutTag.GRID_2X2,
)


class PageEntry(TypedDict):
    """One page in the layout document."""

    page: int
    layout: str
    photo_ids: list[str]
    effective_crops: dict[str, dict[str, float | None]]  # photo id -> {left, right, top, bottom}


class LayoutOutput(TypedDict):
    """Complete layout output for an album."""

    schema_version: str
    album_id: str
    page_count: int
    pages: list[PageEntry]
    unplaced_photo_ids: list[str]


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive groups of `size`; the last group may be short."""
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def bucket_photos(photos: Sequence[Photo]) -> dict[LayoutTag, list[Photo]]:
    """Partition photos by classified template, keeping input order within each bucket."""
    buckets: dict[LayoutTag, list[Photo]] = {tag: [] for tag in BUCKET_ORDER}
    for photo in photos:
        buckets[classify(photo)].append(photo)
    return buckets


def _pair_pages(bucket: list[Photo], layout: LayoutTag) -> list[Page]:
    """Pages for a two-up bucket; a lone leftover becomes a single page."""
    pages: list[Page] = []
    for pair in chunk(bucket, layout.capacity):
        if len(pair) == layout.capacity:
            pages.append(Page(layout=layout, items=pair))
        else:
            pages.append(Page(layout=LayoutTag.SINGLE, items=pair))
    return pages


def _grid_pages(bucket: list[Photo]) -> list[Page]:
    """Pages for the grid2x2 bucket.

    Note:
        A remainder of 3 yields a twoRows page with the first two photos only.
        The third photo is left off every page and logged as unplaced.
    """
    pages: list[Page] = []
    for quad in chunk(bucket, LayoutTag.GRID_2X2.capacity):
        if len(quad) == 4:
            pages.append(Page(layout=LayoutTag.GRID_2X2, items=quad))
        elif len(quad) == 3:
            pages.append(Page(layout=LayoutTag.TWO_ROWS, items=quad[:2]))
            logger.warning(f"Photo {quad[2].id} left unplaced by grid2x2 remainder of 3")
        elif len(quad) == 2:
            pages.append(Page(layout=LayoutTag.TWO_COLUMNS, items=quad))
        else:
            pages.append(Page(layout=LayoutTag.SINGLE, items=quad))
    return pages


def assemble_pages(photos: Sequence[Photo]) -> list[Page]:
    """Assign photos to album pages.

    Args:
        photos: Photos in working-set order

    Returns:
        Pages grouped by originating bucket: single, twoColumns, twoRows, grid2x2

    Note:
        Pure and deterministic. Pages are a derived snapshot; recompute them
        whenever the photo list or any classification changes.
    """
    buckets = bucket_photos(photos)
    logger.debug(
        "Bucket sizes: "
        + ", ".join(f"{tag.value}={len(members)}" for tag, members in buckets.items())
    )

    pages: list[Page] = [
        Page(layout=LayoutTag.SINGLE, items=[photo]) for photo in buckets[LayoutTag.SINGLE]
    ]
    pages.extend(_pair_pages(buckets[LayoutTag.TWO_COLUMNS], LayoutTag.TWO_COLUMNS))
    pages.extend(_pair_pages(buckets[LayoutTag.TWO_ROWS], LayoutTag.TWO_ROWS))
    pages.extend(_grid_pages(buckets[LayoutTag.GRID_2X2]))
    return pages


def unplaced_photos(photos: Sequence[Photo], pages: Sequence[Page]) -> list[Photo]:
    """Return photos (in input order) that appear on no page."""
    placed = {photo.id for page in pages for photo in page.items}
    return [photo for photo in photos if photo.id not in placed]


def create_layout(working_set_path: str) -> LayoutOutput:
    """Generate layout JSON from a working set.

    Args:
        working_set_path: Path to working set JSON file

    Returns:
        LayoutOutput dict with one entry per page

    Raises:
        FileNotFoundError: If the working set JSON is not found
    """
    working_set = load_working_set(working_set_path)
    pages = assemble_pages(working_set.photos)

    entries: list[PageEntry] = []
    for page_num, page in enumerate(pages, start=1):
        entries.append(
            PageEntry(
                page=page_num,
                layout=page.layout.value,
                photo_ids=page.photo_ids,
                effective_crops={
                    photo.id: effective_crop(photo).model_dump() for photo in page.items
                },
            )
        )

    missing = unplaced_photos(working_set.photos, pages)
    logger.info(
        f"Assembled {len(pages)} pages from {len(working_set.photos)} photos "
        f"({len(missing)} unplaced)"
    )

    return LayoutOutput(
        schema_version=SCHEMA_VERSION,
        album_id=working_set.album_id,
        page_count=len(pages),
        pages=entries,
        unplaced_photo_ids=[photo.id for photo in missing],
    )

"""Working-set persistence and crop event handling.

The working set is the JSON snapshot of the album's photos. Every edit
produces a new WorkingSet; nothing here mutates a loaded snapshot.
"""

import logging
from pathlib import Path

from album.coordinates import clear_crop, effective_crop, reset_crop, set_crop_edge
from album.validation import CropEvent, Photo, WorkingSet, check_crop_within_photo

logger = logging.getLogger(__name__)


def load_working_set(path: str) -> WorkingSet:
    """Load and validate a working set JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If the content is not JSON or doesn't match the schema

    Note:
        Photos whose effective crop leaves less than the minimum visible area
        are logged, not rejected.
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"Working set not found: {path}")

    working_set = WorkingSet.model_validate_json(path_obj.read_text())
    logger.info(f"Loaded {len(working_set.photos)} photos from {path}")

    for photo in working_set.photos:
        if not check_crop_within_photo(effective_crop(photo), photo.width, photo.height):
            logger.warning(f"Crop for photo {photo.id} leaves no visible region")

    return working_set


def save_working_set(working_set: WorkingSet, path: str) -> None:
    """Write a working set as indented JSON, creating parent directories."""
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(working_set.model_dump_json(indent=2))
    logger.debug(f"Saved working set to {path}")


def find_photo(working_set: WorkingSet, photo_id: str) -> Photo:
    """Look up a photo by id.

    Raises:
        KeyError: If no photo has this id
    """
    for photo in working_set.photos:
        if photo.id == photo_id:
            return photo
    raise KeyError(f"Unknown photo id: {photo_id}")


def replace_photo(working_set: WorkingSet, photo: Photo) -> WorkingSet:
    """Return a new working set with the photo of the same id swapped in place."""
    find_photo(working_set, photo.id)
    photos = [photo if p.id == photo.id else p for p in working_set.photos]
    return working_set.model_copy(update={"photos": photos})


def remove_photo(working_set: WorkingSet, photo_id: str) -> WorkingSet:
    """Return a new working set without the given photo."""
    find_photo(working_set, photo_id)
    photos = [p for p in working_set.photos if p.id != photo_id]
    return working_set.model_copy(update={"photos": photos})


def apply_crop_event(working_set: WorkingSet, event: CropEvent) -> WorkingSet:
    """Apply one crop edit event.

    Args:
        working_set: Current snapshot
        event: set / reset / clear on one photo

    Returns:
        New working set with the photo's user_crop updated

    Raises:
        KeyError: If event.photo_id is not in the working set
    """
    photo = find_photo(working_set, event.photo_id)

    if event.action == "reset":
        updated = reset_crop(photo)
    elif event.action == "clear":
        updated = clear_crop(photo)
    else:
        # CropEvent validation guarantees edge and value for "set"
        updated = set_crop_edge(photo, event.edge, event.value)  # type: ignore[arg-type]

    logger.debug(f"Applied {event.action} to photo {photo.id}: {updated.user_crop}")
    return replace_photo(working_set, updated)

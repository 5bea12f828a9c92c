"""Unit tests for album/validation.py."""

import pytest
from pydantic import ValidationError

from album.validation import (
    CropEvent,
    CropRect,
    LayoutTag,
    Page,
    Photo,
    WorkingSet,
    check_crop_within_photo,
)


class TestCropRect:
    """Tests for CropRect model."""

    def test_valid_crop(self) -> None:
        """Test creating a crop with all edges set."""
        crop = CropRect(left=10, right=20, top=30, bottom=40)
        assert crop.inset("left") == 10
        assert crop.inset("bottom") == 40
        assert not crop.is_empty

    def test_empty_crop(self) -> None:
        """Test that a crop with no fields set means no crop."""
        crop = CropRect()
        assert crop.is_empty
        assert crop.inset("top") == 0

    def test_zero_insets_not_empty(self) -> None:
        """Test that explicit zeros count as set."""
        assert not CropRect(left=0, right=0, top=0, bottom=0).is_empty

    def test_negative_inset_raises(self) -> None:
        """Test that negative inset raises ValidationError."""
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            CropRect(left=-1)

    def test_frozen(self) -> None:
        """Test that crops cannot be mutated in place."""
        crop = CropRect(left=1)
        with pytest.raises(ValidationError):
            crop.left = 5  # type: ignore[misc]


class TestPhoto:
    """Tests for Photo model."""

    def test_valid_photo(self) -> None:
        photo = Photo(id="IMG_0001.jpg", width=4000, height=3000, layout_label="grid")
        assert photo.id == "IMG_0001.jpg"
        assert photo.suggested_crop is None
        assert photo.user_crop is None
        assert photo.source_image == ""

    def test_zero_width_raises(self) -> None:
        """Test that zero width raises ValidationError."""
        with pytest.raises(ValidationError, match="greater than 0"):
            Photo(id="p", width=0, height=10)

    def test_negative_height_raises(self) -> None:
        with pytest.raises(ValidationError, match="greater than 0"):
            Photo(id="p", width=10, height=-10)

    def test_nested_crop_parsed(self) -> None:
        """Test crops given as dicts are parsed into CropRect."""
        photo = Photo.model_validate(
            {"id": "p", "width": 10, "height": 10, "suggested_crop": {"left": 2}}
        )
        assert photo.suggested_crop == CropRect(left=2)


class TestPage:
    """Tests for Page model."""

    def test_photo_ids(self) -> None:
        photos = [Photo(id="a", width=1, height=1), Photo(id="b", width=1, height=1)]
        page = Page(layout=LayoutTag.TWO_ROWS, items=photos)
        assert page.photo_ids == ["a", "b"]

    def test_layout_serializes_to_canonical_name(self) -> None:
        page = Page(layout=LayoutTag.GRID_2X2, items=[])
        assert page.model_dump(mode="json")["layout"] == "grid2x2"


class TestCropEvent:
    """Tests for CropEvent model."""

    def test_set_event(self) -> None:
        event = CropEvent(photo_id="p", edge="left", value=12.5)
        assert event.action == "set"

    def test_set_without_value_raises(self) -> None:
        """Test that a set event without a value is rejected."""
        with pytest.raises(ValidationError, match="requires both edge and value"):
            CropEvent(photo_id="p", edge="left")

    def test_set_without_edge_raises(self) -> None:
        with pytest.raises(ValidationError, match="requires both edge and value"):
            CropEvent(photo_id="p", value=3)

    def test_invalid_edge_raises(self) -> None:
        with pytest.raises(ValidationError):
            CropEvent(photo_id="p", edge="middle", value=3)

    def test_reset_and_clear_need_no_edge(self) -> None:
        assert CropEvent(photo_id="p", action="reset").edge is None
        assert CropEvent(photo_id="p", action="clear").value is None

    @pytest.mark.parametrize("action", ["reset", "clear"])
    def test_reset_and_clear_reject_edge_arguments(self, action: str) -> None:
        with pytest.raises(ValidationError, match="takes no edge or value"):
            CropEvent(photo_id="p", action=action, edge="left", value=5)


class TestWorkingSet:
    """Tests for WorkingSet model."""

    def test_defaults(self) -> None:
        working_set = WorkingSet()
        assert working_set.schema_version == "1.0.0"
        assert working_set.photos == []

    def test_duplicate_ids_raise(self) -> None:
        """Test that duplicate photo ids raise ValidationError."""
        photos = [Photo(id="a", width=1, height=1), Photo(id="a", width=2, height=2)]
        with pytest.raises(ValidationError, match="Duplicate photo id: a"):
            WorkingSet(photos=photos)


class TestCheckCropWithinPhoto:
    """Tests for the minimum visible area check."""

    def test_crop_leaves_visible_area(self) -> None:
        crop = CropRect(left=400, right=400, top=100, bottom=100)
        assert check_crop_within_photo(crop, 1000, 800) is True

    def test_crop_at_exact_limit(self) -> None:
        """Test crop leaving exactly 10px on an axis is accepted."""
        crop = CropRect(left=590, right=400)
        assert check_crop_within_photo(crop, 1000, 800) is True

    def test_horizontal_overcrop(self) -> None:
        crop = CropRect(left=591, right=400)
        assert check_crop_within_photo(crop, 1000, 800) is False

    def test_vertical_overcrop(self) -> None:
        crop = CropRect(top=500, bottom=295)
        assert check_crop_within_photo(crop, 1000, 800) is False

    def test_empty_crop(self) -> None:
        assert check_crop_within_photo(CropRect(), 20, 20) is True

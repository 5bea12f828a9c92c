"""Unit tests for album/resolution.py."""

import pytest

from album.resolution import assess_resolution


class TestAssessResolution:
    """Tests for print-readiness assessment."""

    def test_megapixels(self) -> None:
        info = assess_resolution(4000, 3000)
        assert info.megapixels == pytest.approx(12.0)

    def test_a4_portrait_ok(self) -> None:
        assert assess_resolution(2480, 3508).full_page_print_ok is True

    def test_a4_landscape_ok(self) -> None:
        """Test landscape photos covering A4 sideways are print-ready."""
        assert assess_resolution(3508, 2480).full_page_print_ok is True

    def test_too_small(self) -> None:
        assert assess_resolution(2479, 3508).full_page_print_ok is False
        assert assess_resolution(1920, 1080).full_page_print_ok is False

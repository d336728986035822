"""
Tests for core.units

Test Coverage:
- round_half_up(): Halves away from zero (not banker's rounding)
- to_pixels(): One inch maps to dpi pixels, monotonic in both arguments
- mm_to_points(): PDF points conversion
"""

import pytest

from pics2pdf.core.units import mm_to_points, round_half_up, to_pixels


class TestRoundHalfUp:
    """Tests for the shared rounding rule."""

    @pytest.mark.parametrize("value, expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.4999, 2),
        (-2.5, -3),
        (7.0, 7),
    ])
    def test_round_half_up_when_values_then_halves_go_away_from_zero(self, value, expected):
        """Python's round(2.5) == 2; ours must give 3."""
        assert round_half_up(value) == expected


class TestToPixels:
    """Tests for to_pixels."""

    @pytest.mark.parametrize("dpi", [72, 96, 150, 200, 300, 600])
    def test_to_pixels_when_one_inch_then_equals_dpi(self, dpi):
        """25.4 mm is exactly one inch."""
        assert to_pixels(25.4, dpi) == dpi

    def test_to_pixels_when_a4_at_300dpi_then_standard_size(self):
        """A4 at 300 DPI is 2480 x 3508 pixels."""
        assert to_pixels(210, 300) == 2480
        assert to_pixels(297, 300) == 3508

    def test_to_pixels_when_length_increases_then_monotonic(self):
        """Longer lengths never produce fewer pixels."""
        lengths = [0.1 * i for i in range(1, 3000)]
        pixels = [to_pixels(length, 300) for length in lengths]
        assert pixels == sorted(pixels)

    def test_to_pixels_when_dpi_increases_then_monotonic(self):
        """Higher densities never produce fewer pixels."""
        pixels = [to_pixels(148.5, dpi) for dpi in range(36, 1201)]
        assert pixels == sorted(pixels)

    def test_to_pixels_when_exact_half_then_rounds_up(self):
        """Half an inch at 1 DPI is 0.5 px and rounds to 1."""
        assert to_pixels(12.7, 1) == 1


class TestMmToPoints:
    """Tests for mm_to_points."""

    def test_mm_to_points_when_one_inch_then_72(self):
        assert mm_to_points(25.4) == pytest.approx(72.0)

    def test_mm_to_points_when_a4_width_then_reportlab_value(self):
        """Matches reportlab.lib.pagesizes.A4 width (595.27 pt)."""
        assert mm_to_points(210) == pytest.approx(595.2756, abs=1e-3)

"""
Module: core.units

Purpose:
    Physical length to pixel / point conversion.

Key Functions:
    - round_half_up(): The one rounding rule used for pixel counts
    - to_pixels(): Millimetres to pixels at a given DPI
    - mm_to_points(): Millimetres to PDF points

Rounding:
    Pixel counts round half away from zero, never Python's banker's
    rounding. Every width and height goes through round_half_up() so the
    two axes of a box are rounded the same way.

Used By:
    - builder.images.compositor: Final resample dimensions
    - builder.controller: Cell size in pixels
    - builder.output.container: Page and image placement in points
"""

from __future__ import annotations

import math

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -3
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def to_pixels(length_mm: float, dpi: int) -> int:
    """
    Convert a physical length to a pixel count.

    Args:
        length_mm: Length in millimetres (positive)
        dpi: Output density in dots per inch (positive)

    Returns:
        round(length_mm * dpi / 25.4), halves away from zero

    Example:
        >>> to_pixels(25.4, 300)
        300
        >>> to_pixels(210, 300)
        2480
    """
    return round_half_up(length_mm * dpi / MM_PER_INCH)


def mm_to_points(length_mm: float) -> float:
    """Convert millimetres to PDF points (1/72 inch)."""
    return length_mm * POINTS_PER_INCH / MM_PER_INCH

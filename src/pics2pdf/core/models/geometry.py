"""
Module: geometry

Purpose:
    Page and cell geometry in physical units (millimetres, top-left origin).

Key Classes:
    - PageGeometry: Page size plus grid subdivision
    - CellRect: Destination rectangle for one entry

Used By:
    - builder.layout.planner: Computes CellRects from a PageGeometry
    - builder.output: Places bitmaps at CellRects
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from ..errors import InvalidArgument

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
LETTER_WIDTH_MM = 215.9
LETTER_HEIGHT_MM = 279.4


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page size and grid subdivision (immutable).

    A 1x1 grid means one image per page.

    Attributes:
        width: Page width in mm
        height: Page height in mm
        columns: Cells across
        rows: Cells down

    Invariants:
        - width > 0, height > 0 (finite)
        - columns >= 1, rows >= 1

    Example:
        >>> geometry = PageGeometry.a4(columns=2, rows=2)
        >>> geometry.cell_width, geometry.cell_height
        (105.0, 148.5)
    """

    width: float = A4_WIDTH_MM
    height: float = A4_HEIGHT_MM
    columns: int = 1
    rows: int = 1

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if not math.isfinite(self.width) or self.width <= 0:
            raise InvalidArgument(f"width must be a positive number: {self.width}")
        if not math.isfinite(self.height) or self.height <= 0:
            raise InvalidArgument(f"height must be a positive number: {self.height}")
        if self.columns < 1:
            raise InvalidArgument(f"columns must be >= 1: {self.columns}")
        if self.rows < 1:
            raise InvalidArgument(f"rows must be >= 1: {self.rows}")

    @classmethod
    def a4(cls, columns: int = 1, rows: int = 1, *, landscape: bool = False) -> "PageGeometry":
        """A4 page (210 x 297 mm), optionally landscape."""
        geometry = cls(A4_WIDTH_MM, A4_HEIGHT_MM, columns, rows)
        return geometry.landscape() if landscape else geometry

    @classmethod
    def letter(cls, columns: int = 1, rows: int = 1, *, landscape: bool = False) -> "PageGeometry":
        """US Letter page (8.5 x 11 in), optionally landscape."""
        geometry = cls(LETTER_WIDTH_MM, LETTER_HEIGHT_MM, columns, rows)
        return geometry.landscape() if landscape else geometry

    def landscape(self) -> "PageGeometry":
        """Copy with width and height swapped; the grid is unchanged."""
        return replace(self, width=self.height, height=self.width)

    @property
    def capacity(self) -> int:
        """Images per page (rows * columns)."""
        return self.rows * self.columns

    @property
    def cell_width(self) -> float:
        return self.width / self.columns

    @property
    def cell_height(self) -> float:
        return self.height / self.rows


@dataclass(frozen=True)
class CellRect:
    """
    Rectangle on a page in mm, origin at the page's top-left corner.

    Example:
        >>> CellRect(0, 0, 105, 148.5).inset(5)
        CellRect(x=5, y=5, width=95, height=138.5)
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, margin: float) -> "CellRect":
        """Shrink by margin on every side, never below zero size."""
        if margin <= 0:
            return self
        dx = min(margin, self.width / 2)
        dy = min(margin, self.height / 2)
        return CellRect(
            x=self.x + dx,
            y=self.y + dy,
            width=self.width - 2 * dx,
            height=self.height - 2 * dy,
        )

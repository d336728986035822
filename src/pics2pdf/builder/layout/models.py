"""
Module: builder.layout.models

Purpose:
    Data model for planner output.

Key Classes:
    - PlannedEntry: One entry's page index and cell rectangle

Used By:
    - builder.layout.planner: Creates PlannedEntries
    - builder.controller: Renders and places them
"""

from __future__ import annotations

from dataclasses import dataclass

from pics2pdf.core.models import CellRect, ImageEntry


@dataclass(frozen=True)
class PlannedEntry:
    """
    An entry positioned on a page.

    Attributes:
        entry: The ImageEntry being placed
        page_index: Page number (0-indexed)
        rect: Cell rectangle on that page (mm)
        index_on_page: Position within the page's grid (row-major)
        row: Grid row
        column: Grid column
        starts_new_page: True when page_index increased since the
            previous entry (never True for the first entry)

    Example:
        >>> planned.page_index, planned.row, planned.column
        (1, 0, 0)
    """

    entry: ImageEntry
    page_index: int
    rect: CellRect
    index_on_page: int
    row: int
    column: int
    starts_new_page: bool = False

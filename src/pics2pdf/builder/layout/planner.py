"""
Module: builder.layout.planner

Purpose:
    Assign every entry a page and a grid cell.

Key Functions:
    - plan(): Lazy per-entry placement
    - count_pages(): Pages needed for a given entry count

Algorithm:
    Pure arithmetic on the entry's global index:
    1. page = index // (rows * columns)
    2. index_on_page = index % (rows * columns)
    3. row = index_on_page // columns, column = index_on_page % columns
    4. rect = (column * cell_width, row * cell_height, cell_width, cell_height)
    Image content never influences the result, so planning the same
    inputs twice gives identical output.

Dependencies:
    - core.models: ImageEntry, PageGeometry, CellRect
    - builder.layout.models: PlannedEntry

Used By:
    - builder.controller: Document generation
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from pics2pdf.core.errors import EmptyInput, InvalidArgument
from pics2pdf.core.models import CellRect, ImageEntry, PageGeometry

from .models import PlannedEntry

logger = logging.getLogger(__name__)


def plan(
    entries: Sequence[ImageEntry],
    geometry: PageGeometry,
) -> Iterator[PlannedEntry]:
    """
    Plan placement of entries onto grid pages.

    Validation happens immediately; placements are produced lazily, one
    per entry, in input order.

    Args:
        entries: Ordered entries (a snapshot is taken on call)
        geometry: Page size and grid

    Returns:
        Iterator of PlannedEntry

    Raises:
        EmptyInput: If entries is empty
        InvalidArgument: If geometry has fewer than one column or row

    Example:
        >>> placements = list(plan(entries, PageGeometry.a4(columns=2, rows=2)))
        >>> [(p.page_index, p.rect.x, p.rect.y) for p in placements]
        [(0, 0.0, 0.0), (0, 105.0, 0.0), (0, 0.0, 148.5), (0, 105.0, 148.5), (1, 0.0, 0.0)]
    """
    if geometry.columns < 1 or geometry.rows < 1:
        raise InvalidArgument(
            f"Grid must be at least 1x1: {geometry.columns}x{geometry.rows}"
        )
    snapshot = tuple(entries)
    if not snapshot:
        raise EmptyInput()

    logger.info(
        f"Planning {len(snapshot)} images onto {count_pages(len(snapshot), geometry)} pages "
        f"({geometry.columns}x{geometry.rows} per page)"
    )
    return _iter_placements(snapshot, geometry)


def count_pages(entry_count: int, geometry: PageGeometry) -> int:
    """
    Number of pages needed for entry_count entries.

    Example:
        >>> count_pages(5, PageGeometry.a4(columns=2, rows=2))
        2
    """
    if entry_count <= 0:
        return 0
    return -(-entry_count // geometry.capacity)


def _iter_placements(
    entries: tuple[ImageEntry, ...],
    geometry: PageGeometry,
) -> Iterator[PlannedEntry]:
    capacity = geometry.capacity
    cell_width = geometry.cell_width
    cell_height = geometry.cell_height

    previous_page = 0
    for global_index, entry in enumerate(entries):
        page_index = global_index // capacity
        index_on_page = global_index % capacity
        row = index_on_page // geometry.columns
        column = index_on_page % geometry.columns

        yield PlannedEntry(
            entry=entry,
            page_index=page_index,
            rect=CellRect(
                x=column * cell_width,
                y=row * cell_height,
                width=cell_width,
                height=cell_height,
            ),
            index_on_page=index_on_page,
            row=row,
            column=column,
            starts_new_page=page_index > previous_page,
        )
        previous_page = page_index

"""
Module: builder.output.assembler

Purpose:
    Consume (bitmap, page index, cell) triples in plan order, drive the
    container's page transitions, and persist the finished document.

Key Functions:
    - assemble(): Main assembly function
    - place_in_cell(): Letterboxed rectangle for a bitmap inside a cell

Key Classes:
    - AssemblyResult: Summary of the written document

Dependencies:
    - builder.output.container: DocumentContainer
    - builder.config: Alignment

Used By:
    - builder.controller: Document generation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Tuple

from pics2pdf.core.errors import EmptyInput, InvalidArgument
from pics2pdf.core.models import CellRect, RenderedBitmap

from ..config import Alignment
from ..images.compositor import fit_within
from .container import DocumentContainer

logger = logging.getLogger(__name__)

AssemblyItem = Tuple[RenderedBitmap, int, CellRect]


@dataclass(frozen=True)
class AssemblyResult:
    """
    Summary of an assembled document.

    Attributes:
        output_path: Where the document was saved
        page_count: Physical pages written
        image_count: Bitmaps placed
        pages: Placements per page, indexed by page
    """

    output_path: Path
    page_count: int
    image_count: int
    pages: tuple[int, ...]


def assemble(
    items: Iterable[AssemblyItem],
    document: DocumentContainer,
    output_path: Path,
    *,
    alignment: Alignment = Alignment.CENTER,
) -> AssemblyResult:
    """
    Place every item and save the document once the stream is exhausted.

    The document starts on its implicit first page. Whenever an item's
    page index is past the current page, pages are added until they
    match, so the output has exactly max(page_index) + 1 pages.

    Args:
        items: (bitmap, page_index, rect) in planned order
        document: Fresh container on its first page
        output_path: Destination for the saved document
        alignment: Where a letterboxed bitmap sits inside its cell

    Returns:
        AssemblyResult for the saved document

    Raises:
        EmptyInput: If items is empty (nothing is saved)
        InvalidArgument: If page indices go backwards or are negative
    """
    current_page = 0
    per_page = [0]

    for bitmap, page_index, rect in items:
        if page_index < current_page:
            raise InvalidArgument(
                f"Page index went backwards: {page_index} after {current_page}"
            )
        while current_page < page_index:
            document.add_page()
            current_page += 1
            per_page.append(0)
            logger.debug(f"Started page {current_page}")

        target = place_in_cell(bitmap, rect, alignment)
        document.place_image(bitmap.image, target.x, target.y, target.width, target.height)
        per_page[current_page] += 1

    image_count = sum(per_page)
    if image_count == 0:
        raise EmptyInput()

    saved_path = document.save(output_path)
    return AssemblyResult(
        output_path=saved_path,
        page_count=len(per_page),
        image_count=image_count,
        pages=tuple(per_page),
    )


def place_in_cell(
    bitmap: RenderedBitmap,
    cell: CellRect,
    alignment: Alignment = Alignment.CENTER,
) -> CellRect:
    """
    Rectangle inside cell with the bitmap's aspect ratio.

    The bitmap was already fitted to the cell in pixels; this repeats the
    fit in millimetres so pixel rounding never stretches the image.

    Example:
        >>> place_in_cell(bitmap_400x200, CellRect(0, 0, 100, 100))
        CellRect(x=0.0, y=25.0, width=100, height=50.0)
    """
    width, height = fit_within(bitmap.width, bitmap.height, cell.width, cell.height)
    if alignment == Alignment.TOP_LEFT:
        return CellRect(cell.x, cell.y, width, height)
    return CellRect(
        x=cell.x + (cell.width - width) / 2,
        y=cell.y + (cell.height - height) / 2,
        width=width,
        height=height,
    )

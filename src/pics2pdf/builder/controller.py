"""
Module: builder.controller

Purpose:
    Orchestrate the complete document generation pipeline.
    Plan → Decode → Compose → Assemble → Save

Key Functions:
    - generate_document(): Main entry point for generating a PDF

Key Classes:
    - GenerateResult: Complete generation result

Decode failures:
    The first unreadable photo aborts the whole run. The raised
    DecodeError names the entry and no file is written; a page is never
    produced with a silently missing photo.

Dependencies:
    - builder.layout: Grid planning
    - builder.images: Decoding and compositing
    - builder.output: Assembly and PDF container

Used By:
    - builder.session: PhotoSession.generate()
    - cli: Command line generation
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from pics2pdf.core.errors import DecodeError, GenerationCancelled, InvalidArgument
from pics2pdf.core.models import ImageEntry, PageGeometry
from pics2pdf.core.units import to_pixels

from .config import DocumentConfig
from .images import ImageDecoder, PillowDecoder, compose
from .layout import PlannedEntry, plan
from .output import DocumentContainer, ReportLabDocument, assemble
from .output.assembler import AssemblyItem

logger = logging.getLogger(__name__)

DocumentFactory = Callable[[PageGeometry, DocumentConfig], DocumentContainer]


@dataclass(frozen=True)
class GenerateResult:
    """
    Complete generation result (immutable).

    Attributes:
        output_path: Path to the saved PDF
        page_count: Number of pages written
        image_count: Number of photos placed
        elapsed_seconds: Wall time for the run

    Example:
        >>> result = generate_document(entries, PageGeometry.a4())
        >>> print(f"Wrote {result.page_count} pages to {result.output_path}")
    """

    output_path: Path
    page_count: int
    image_count: int
    elapsed_seconds: float


def generate_document(
    entries: Sequence[ImageEntry],
    geometry: PageGeometry,
    config: Optional[DocumentConfig] = None,
    *,
    output_path: Optional[Path] = None,
    decoder: Optional[ImageDecoder] = None,
    document_factory: Optional[DocumentFactory] = None,
    cancel_event: Optional[threading.Event] = None,
) -> GenerateResult:
    """
    Generate a PDF from start to finish.

    Pipeline:
    1. Plan page index and cell for every entry
    2. For each entry, in order: decode, rotate + fit, place
    3. Save once all entries are placed

    Entries are processed strictly one at a time; entry i+1 is not
    decoded until entry i is on its page.

    Args:
        entries: Ordered entries (use PhotoCollection.snapshot())
        geometry: Page size and grid
        config: Generation options (defaults to DocumentConfig())
        output_path: Destination (defaults to config.output_filename)
        decoder: Image decoder (defaults to PillowDecoder)
        document_factory: Builds the page container for the run
        cancel_event: When set, the run stops before the next entry

    Returns:
        GenerateResult with path and counts

    Raises:
        EmptyInput: If entries is empty (no file is written)
        DecodeError: If any photo is unreadable (no file is written)
        GenerationCancelled: If cancel_event was set (no file is written)
        InvalidArgument: On contract violations
    """
    config = config or DocumentConfig()
    decoder = decoder or PillowDecoder(honor_exif_orientation=config.honor_exif_orientation)
    document_factory = document_factory or _reportlab_factory
    output_path = Path(output_path) if output_path is not None else Path(config.output_filename)

    start_time = time.perf_counter()

    placements = plan(entries, geometry)

    padding = 2 * config.cell_padding_mm
    if geometry.cell_width <= padding or geometry.cell_height <= padding:
        raise InvalidArgument(
            f"cell_padding_mm {config.cell_padding_mm} leaves no room in a "
            f"{geometry.cell_width:.1f}x{geometry.cell_height:.1f} mm cell"
        )

    document = document_factory(geometry, config)

    items = _render_placements(placements, config, decoder, cancel_event)
    assembly = assemble(items, document, output_path, alignment=config.alignment)

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Generated {assembly.page_count} pages with {assembly.image_count} images "
        f"in {elapsed:.2f}s"
    )

    return GenerateResult(
        output_path=assembly.output_path,
        page_count=assembly.page_count,
        image_count=assembly.image_count,
        elapsed_seconds=elapsed,
    )


def _render_placements(
    placements: Iterator[PlannedEntry],
    config: DocumentConfig,
    decoder: ImageDecoder,
    cancel_event: Optional[threading.Event],
) -> Iterator[AssemblyItem]:
    """Decode and compose each planned entry lazily, in plan order."""
    resample = config.resample.pil_filter

    for index, planned in enumerate(placements):
        if cancel_event is not None and cancel_event.is_set():
            logger.warning(f"Generation cancelled before image {index + 1}")
            raise GenerationCancelled(f"Cancelled before image {index + 1}")

        entry = planned.entry
        rect = planned.rect.inset(config.cell_padding_mm)

        try:
            source = decoder.decode(entry.image_ref)
        except DecodeError as e:
            logger.error(f"Failed to decode image {index + 1} ({entry.name}): {e}")
            raise DecodeError(
                f"Could not read image {index + 1} ({entry.name}): {e}",
                index=index,
                name=entry.name,
            ) from e

        bitmap = compose(
            source,
            entry.rotation_degrees,
            max(1, to_pixels(rect.width, config.dpi)),
            max(1, to_pixels(rect.height, config.dpi)),
            resample=resample,
        )
        if planned.starts_new_page:
            logger.debug(f"Page {planned.page_index + 1} starts with {entry.name}")

        yield bitmap, planned.page_index, rect


def _reportlab_factory(geometry: PageGeometry, config: DocumentConfig) -> DocumentContainer:
    return ReportLabDocument(
        geometry.width,
        geometry.height,
        image_format=config.image_format,
        jpeg_quality=config.jpeg_quality,
        title=config.title,
    )

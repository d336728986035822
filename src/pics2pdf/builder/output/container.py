"""
Module: builder.output.container

Purpose:
    Page container abstraction plus its ReportLab implementation.
    Receives already-computed placements (mm, top-left origin) and
    emits a single saved PDF.

Key Classes:
    - DocumentContainer: Abstract page container
    - ReportLabDocument: PDF container backed by a ReportLab canvas

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding for embedding
    - core.units: mm to points

Used By:
    - builder.output.assembler: Page transitions and placement
    - builder.controller: Creates the container for a run
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from pics2pdf import __version__
from pics2pdf.core.errors import InvalidArgument
from pics2pdf.core.units import mm_to_points

logger = logging.getLogger(__name__)


class DocumentContainer(ABC):
    """
    Abstract paginated document.

    A new container starts on an implicit first page. Coordinates are
    millimetres from the page's top-left corner.
    """

    @abstractmethod
    def add_page(self) -> None:
        """Finish the current page and start a new one."""

    @abstractmethod
    def place_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw image into the given rectangle on the current page."""

    @abstractmethod
    def save(self, path: Path) -> Path:
        """Persist the document; returns the written path."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Pages started so far (including the current one)."""


class ReportLabDocument(DocumentContainer):
    """
    PDF container backed by ReportLab.

    The PDF is built in memory and only reaches disk in save(), through
    a temporary file in the destination directory that is renamed into
    place. An abandoned or failed run therefore never leaves a partial
    file behind.

    Example:
        >>> doc = ReportLabDocument(210, 297)
        >>> doc.place_image(image, 0, 0, 210, 297)
        >>> doc.save(Path("my-photos.pdf"))
    """

    def __init__(
        self,
        page_width_mm: float,
        page_height_mm: float,
        *,
        image_format: str = "JPEG",
        jpeg_quality: int = 90,
        title: str = "",
    ) -> None:
        if page_width_mm <= 0 or page_height_mm <= 0:
            raise InvalidArgument(
                f"Page size must be positive: {page_width_mm}x{page_height_mm} mm"
            )
        self._page_width_pt = mm_to_points(page_width_mm)
        self._page_height_pt = mm_to_points(page_height_mm)
        self._image_format = image_format
        self._jpeg_quality = jpeg_quality

        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(self._page_width_pt, self._page_height_pt),
        )
        self._canvas.setCreator(f"pics2pdf {__version__}")
        if title:
            self._canvas.setTitle(title)

        self._page_count = 1
        self._saved = False

    @property
    def page_count(self) -> int:
        return self._page_count

    def add_page(self) -> None:
        self._check_open()
        self._canvas.showPage()
        self._page_count += 1

    def place_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        self._check_open()
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"Placement must have positive size: {width}x{height} mm")

        width_pt = mm_to_points(width)
        height_pt = mm_to_points(height)
        x_pt = mm_to_points(x)
        y_pt = _transform_y(self._page_height_pt, mm_to_points(y), height_pt)

        self._canvas.drawImage(
            _pil_to_reader(image, self._image_format, self._jpeg_quality),
            x_pt,
            y_pt,
            width=width_pt,
            height=height_pt,
        )

    def save(self, path: Path) -> Path:
        """
        Finish the last page and write the PDF atomically.

        Raises:
            InvalidArgument: If the document was already saved
            OSError: If the destination is not writable
        """
        self._check_open()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        self._canvas.showPage()
        self._canvas.save()
        self._saved = True

        _write_atomic(path, self._buffer.getvalue())
        logger.info(f"Saved {self._page_count} pages to {path}")
        return path

    def _check_open(self) -> None:
        if self._saved:
            raise InvalidArgument("Document has already been saved")


def _write_atomic(path: Path, data: bytes) -> None:
    """Write via a sibling temp file and rename; remove the temp file on failure."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _pil_to_reader(img: Image.Image, image_format: str, jpeg_quality: int) -> ImageReader:
    """
    Encode a PIL image for embedding.

    JPEG keeps photo PDFs small; PNG is lossless.
    """
    buf = io.BytesIO()
    if image_format == "JPEG":
        img.convert("RGB").save(buf, format="JPEG", quality=jpeg_quality, optimize=True)
    else:
        img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height_pt: float, y_top_pt: float, height_pt: float) -> float:
    """Convert a top-down Y coordinate to ReportLab's bottom-up Y."""
    return page_height_pt - y_top_pt - height_pt

"""
Module: builder.config

Purpose:
    Configuration dataclass for document generation. Immutable
    configuration with validation on construction.

Key Classes:
    - DocumentConfig: Output density, encoding and placement options
    - Alignment: Where a fitted bitmap sits inside its cell
    - Resample: Allowed resampling filters

Dependencies:
    - PIL: Resampling filter constants
    - dataclasses (std)

Used By:
    - builder.controller: generate_document()
    - builder.session: PhotoSession.generate()
    - cli: Flag parsing
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from pics2pdf.core.errors import InvalidArgument

# 300 DPI is print quality for photos on A4
DEFAULT_DPI = 300
DEFAULT_OUTPUT_FILENAME = "my-photos.pdf"
DEFAULT_JPEG_QUALITY = 90
DEFAULT_TITLE = "Photos"

MIN_DPI = 36
MAX_DPI = 1200
SUPPORTED_IMAGE_FORMATS = ("JPEG", "PNG")


class Alignment(str, Enum):
    """Placement of a fitted bitmap within its (possibly larger) cell."""

    CENTER = "center"
    TOP_LEFT = "top-left"


class Resample(str, Enum):
    """Quality-preserving resampling filters (nearest-neighbour is not offered)."""

    LANCZOS = "lanczos"
    BICUBIC = "bicubic"
    BILINEAR = "bilinear"

    @property
    def pil_filter(self) -> Image.Resampling:
        return {
            Resample.LANCZOS: Image.Resampling.LANCZOS,
            Resample.BICUBIC: Image.Resampling.BICUBIC,
            Resample.BILINEAR: Image.Resampling.BILINEAR,
        }[self]


@dataclass(frozen=True)
class DocumentConfig:
    """
    Configuration for one document generation run (immutable).

    Attributes:
        dpi: Output pixels per inch; sets the resolution of every bitmap
        output_filename: Default filename when no output path is given
        alignment: Position of a letterboxed bitmap inside its cell
        cell_padding_mm: Inset applied to every cell before fitting
        image_format: Encoding used to embed bitmaps ("JPEG" or "PNG")
        jpeg_quality: JPEG quality, 1..95 (ignored for PNG)
        resample: Filter for the single fit-to-cell resample
        honor_exif_orientation: Apply camera EXIF orientation on decode
        title: PDF document title metadata

    Example:
        >>> config = DocumentConfig(dpi=200, alignment=Alignment.TOP_LEFT)
        >>> config.output_filename
        'my-photos.pdf'
    """

    # Resolution
    dpi: int = DEFAULT_DPI

    # Output
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    title: str = DEFAULT_TITLE

    # Placement
    alignment: Alignment = Alignment.CENTER
    cell_padding_mm: float = 0.0

    # Encoding
    image_format: str = "JPEG"
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    resample: Resample = Resample.LANCZOS

    # Decoding
    honor_exif_orientation: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not MIN_DPI <= self.dpi <= MAX_DPI:
            raise InvalidArgument(f"dpi must be between {MIN_DPI} and {MAX_DPI}: {self.dpi}")
        if not self.output_filename:
            raise InvalidArgument("output_filename must not be empty")
        if not math.isfinite(self.cell_padding_mm) or self.cell_padding_mm < 0:
            raise InvalidArgument(f"cell_padding_mm must be non-negative: {self.cell_padding_mm}")
        if self.image_format not in SUPPORTED_IMAGE_FORMATS:
            raise InvalidArgument(
                f"image_format must be one of {SUPPORTED_IMAGE_FORMATS}: {self.image_format!r}"
            )
        if not 1 <= self.jpeg_quality <= 95:
            raise InvalidArgument(f"jpeg_quality must be between 1 and 95: {self.jpeg_quality}")

"""
pics2pdf Core Package

Shared data models, unit conversion and the error taxonomy used by the
builder pipeline. Nothing here touches the filesystem or a PDF library.
"""

from .errors import (
    Pics2PdfError,
    InvalidArgument,
    EmptyInput,
    DecodeError,
    IndexOutOfRange,
    GenerationInProgress,
    GenerationCancelled,
)
from .models import ImageEntry, PageGeometry, CellRect, RenderedBitmap
from .units import to_pixels, mm_to_points, round_half_up

__all__ = [
    # Errors
    "Pics2PdfError",
    "InvalidArgument",
    "EmptyInput",
    "DecodeError",
    "IndexOutOfRange",
    "GenerationInProgress",
    "GenerationCancelled",
    # Models
    "ImageEntry",
    "PageGeometry",
    "CellRect",
    "RenderedBitmap",
    # Units
    "to_pixels",
    "mm_to_points",
    "round_half_up",
]

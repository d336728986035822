"""
Core Models Package

| Model | Mutability | Owner |
|-------|------------|-------|
| `ImageEntry` | mutable (rotate/reorder in place) | `PhotoCollection` |
| `PageGeometry` | frozen | one generation run |
| `CellRect` | frozen | layout planner output |
| `RenderedBitmap` | frozen | compositor, consumed once by the assembler |
"""

from .entry import ImageEntry, VALID_ROTATIONS
from .geometry import PageGeometry, CellRect
from .bitmap import RenderedBitmap

__all__ = [
    "ImageEntry",
    "VALID_ROTATIONS",
    "PageGeometry",
    "CellRect",
    "RenderedBitmap",
]

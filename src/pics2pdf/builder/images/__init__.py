"""
Module: builder.images

Purpose:
    Image decoding and the rotation-scale compositor.

Key Classes:
    - ImageDecoder: Abstract interface for decoding blobs
    - PillowDecoder: Standard Pillow decoder

Key Functions:
    - compose(): Rotate then scale-to-fit a bitmap
    - fit_within(): Aspect-ratio-preserving fit arithmetic

Dependencies:
    - PIL: Image manipulation

Used By:
    - builder.controller: Per-entry rendering
"""

from .decoder import ImageDecoder, PillowDecoder
from .compositor import compose, fit_within, rotated_size

__all__ = [
    "ImageDecoder",
    "PillowDecoder",
    "compose",
    "fit_within",
    "rotated_size",
]

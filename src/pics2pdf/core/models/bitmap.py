"""
Module: bitmap

Purpose:
    RenderedBitmap - the compositor's output for one entry. Transient:
    consumed once by the document assembler, then discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class RenderedBitmap:
    """
    Final pixel buffer sized for one cell.

    Attributes:
        image: PIL image holding the pixels
        width: Pixel width (equals image.width)
        height: Pixel height (equals image.height)
    """

    image: "Image.Image"
    width: int
    height: int

    @classmethod
    def from_image(cls, image: "Image.Image") -> "RenderedBitmap":
        return cls(image=image, width=image.width, height=image.height)

    @property
    def aspect_ratio(self) -> float:
        """Width / height."""
        return self.width / self.height

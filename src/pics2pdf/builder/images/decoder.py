"""
Module: builder.images.decoder

Purpose:
    Abstract interface for turning raw image bytes into an in-memory
    bitmap with known pixel dimensions.

Key Classes:
    - ImageDecoder: Abstract base class for decoding
    - PillowDecoder: Standard decoder backed by Pillow

Dependencies:
    - PIL: Decoding, EXIF orientation, alpha flattening

Used By:
    - builder.controller: One decode per planned entry
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod

from PIL import Image, ImageOps, UnidentifiedImageError

from pics2pdf.core.errors import DecodeError

logger = logging.getLogger(__name__)

# Background used when flattening transparent images
FLATTEN_BACKGROUND = (255, 255, 255)


class ImageDecoder(ABC):
    """
    Abstract interface for decoding image blobs.

    Implementations return a fully loaded image; callers may close the
    source bytes afterwards.
    """

    @abstractmethod
    def decode(self, blob: bytes) -> Image.Image:
        """
        Decode raw image bytes.

        Args:
            blob: Encoded image data (JPEG, PNG, ...)

        Returns:
            Loaded PIL Image with width/height set

        Raises:
            DecodeError: If the data is empty or malformed
        """


class PillowDecoder(ImageDecoder):
    """
    Decoder backed by Pillow.

    Camera photos frequently store orientation in EXIF rather than in
    the pixel order; with honor_exif_orientation the returned image is
    upright, so user rotations are applied on top of what they see.
    Transparent images are flattened onto white and everything is
    returned in RGB.

    Example:
        >>> decoder = PillowDecoder()
        >>> image = decoder.decode(Path("photo.jpg").read_bytes())
        >>> image.mode
        'RGB'
    """

    def __init__(self, *, honor_exif_orientation: bool = True) -> None:
        self._honor_exif_orientation = honor_exif_orientation

    def decode(self, blob: bytes) -> Image.Image:
        if not blob:
            raise DecodeError("Image data is empty")

        try:
            image = Image.open(io.BytesIO(blob))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
            raise DecodeError(f"Unreadable image data: {e}") from e

        logger.debug(f"Decoded {image.format} {image.width}x{image.height} ({image.mode})")

        if self._honor_exif_orientation:
            image = ImageOps.exif_transpose(image)

        return _to_rgb(image)


def _to_rgb(image: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any alpha channel onto white."""
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, FLATTEN_BACKGROUND)
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image

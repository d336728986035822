"""
Module: builder.images.compositor

Purpose:
    Rotate a decoded photo in 90 degree steps, then scale it to fit a
    target pixel box without distortion.

Key Functions:
    - compose(): Rotate + fit + single resample
    - fit_within(): Pure aspect-ratio-preserving fit arithmetic
    - rotated_size(): Dimensions after a right-angle rotation

Algorithm:
    1. Rotate at full source resolution with a lossless transpose
       (pixels are only reordered, nothing is resampled).
    2. Fit the rotated size inside the target box: the relatively wider
       side is pinned to the box, the other follows the aspect ratio.
    3. Resample once to the fitted size.
    There is exactly one resampling pass per photo, so no detail is lost
    to an intermediate downscale.

Dependencies:
    - PIL: Transpose and resampling
    - core.units: round_half_up for the final pixel dimensions

Used By:
    - builder.controller: Per-entry rendering
"""

from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image

from pics2pdf.core.errors import InvalidArgument
from pics2pdf.core.models import RenderedBitmap, VALID_ROTATIONS
from pics2pdf.core.units import round_half_up

logger = logging.getLogger(__name__)

# Clockwise rotation -> lossless transpose (PIL's ROTATE_* are counter-clockwise)
_TRANSPOSE_FOR_ROTATION = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

# Nearest-neighbour aliases visibly; anything below bilinear is refused
_ALLOWED_FILTERS = (
    Image.Resampling.BILINEAR,
    Image.Resampling.HAMMING,
    Image.Resampling.BICUBIC,
    Image.Resampling.LANCZOS,
)


def rotated_size(width: int, height: int, rotation_degrees: int) -> Tuple[int, int]:
    """
    Size after rotating by rotation_degrees.

    Example:
        >>> rotated_size(400, 300, 90)
        (300, 400)
    """
    _check_rotation(rotation_degrees)
    if rotation_degrees in (90, 270):
        return height, width
    return width, height


def fit_within(
    width: float,
    height: float,
    target_width: float,
    target_height: float,
) -> Tuple[float, float]:
    """
    Largest size with width/height's aspect ratio that fits the target.

    Args:
        width: Source width (> 0)
        height: Source height (> 0)
        target_width: Box width (> 0)
        target_height: Box height (> 0)

    Returns:
        (fit_width, fit_height) as unrounded floats; one of them equals
        the corresponding target dimension exactly

    Example:
        >>> fit_within(400, 200, 100, 100)
        (100, 50.0)
    """
    ratio = width / height
    target_ratio = target_width / target_height
    if ratio > target_ratio:
        return target_width, target_width / ratio
    return target_height * ratio, target_height


def compose(
    bitmap: Image.Image,
    rotation_degrees: int,
    target_width_px: int,
    target_height_px: int,
    *,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> RenderedBitmap:
    """
    Rotate then scale-to-fit a bitmap.

    Args:
        bitmap: Decoded source image
        rotation_degrees: Clockwise rotation, one of 0/90/180/270
        target_width_px: Box width in pixels (> 0)
        target_height_px: Box height in pixels (> 0)
        resample: Filter for the single resampling pass

    Returns:
        RenderedBitmap no larger than the box in either dimension, with
        the rotated source's aspect ratio (within rounding)

    Raises:
        InvalidArgument: Non-positive target, unsupported rotation,
            zero-size source, or a nearest-neighbour filter

    Example:
        >>> rendered = compose(Image.new("RGB", (4000, 3000)), 90, 1240, 1754)
        >>> rendered.width, rendered.height
        (1240, 1653)
    """
    if target_width_px <= 0 or target_height_px <= 0:
        raise InvalidArgument(
            f"Target box must be positive: {target_width_px}x{target_height_px}"
        )
    _check_rotation(rotation_degrees)
    if bitmap.width <= 0 or bitmap.height <= 0:
        raise InvalidArgument(f"Source bitmap is empty: {bitmap.width}x{bitmap.height}")
    if resample not in _ALLOWED_FILTERS:
        raise InvalidArgument(f"Resampling filter not allowed: {resample!r}")

    rotated = _rotate(bitmap, rotation_degrees)

    fit_width, fit_height = fit_within(
        rotated.width, rotated.height, target_width_px, target_height_px
    )
    final_size = (
        min(target_width_px, max(1, round_half_up(fit_width))),
        min(target_height_px, max(1, round_half_up(fit_height))),
    )

    if final_size == rotated.size:
        result = rotated
    else:
        result = rotated.resize(final_size, resample)

    logger.debug(
        f"Composed {bitmap.width}x{bitmap.height} rot={rotation_degrees} "
        f"-> {result.width}x{result.height} (box {target_width_px}x{target_height_px})"
    )
    return RenderedBitmap.from_image(result)


def _rotate(bitmap: Image.Image, rotation_degrees: int) -> Image.Image:
    """Lossless clockwise rotation; returns the source itself for 0."""
    method = _TRANSPOSE_FOR_ROTATION.get(rotation_degrees)
    if method is None:
        return bitmap
    return bitmap.transpose(method)


def _check_rotation(rotation_degrees: int) -> None:
    if rotation_degrees not in VALID_ROTATIONS:
        raise InvalidArgument(
            f"rotation_degrees must be one of {VALID_ROTATIONS}: {rotation_degrees}"
        )

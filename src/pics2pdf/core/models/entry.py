"""
Module: entry

Purpose:
    Provides the ImageEntry record - one user-selected photo plus its
    rotation and position in the document.

Used By:
    - builder.collection.PhotoCollection (sole owner)
    - builder.layout.planner
    - builder.controller
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import InvalidArgument

VALID_ROTATIONS = (0, 90, 180, 270)


@dataclass(eq=False)
class ImageEntry:
    """
    One photo in the ordered collection.

    Attributes:
        image_ref: Raw encoded image bytes (decoded lazily at generation)
        rotation_degrees: Clockwise rotation, one of 0/90/180/270
        order: Position in the document (dense 0..n-1 within a collection)
        name: Label for logs and error messages (usually the filename)

    Invariants:
        - rotation_degrees in VALID_ROTATIONS
        - order >= 0
    """

    image_ref: bytes = field(repr=False)
    rotation_degrees: int = 0
    order: int = 0
    name: str = ""

    def __post_init__(self) -> None:
        if self.rotation_degrees not in VALID_ROTATIONS:
            raise InvalidArgument(
                f"rotation_degrees must be one of {VALID_ROTATIONS}: {self.rotation_degrees}"
            )
        if self.order < 0:
            raise InvalidArgument(f"order must be >= 0: {self.order}")

    @property
    def swaps_axes(self) -> bool:
        """True when the rotation exchanges width and height."""
        return self.rotation_degrees in (90, 270)

    def rotate_clockwise(self) -> None:
        """Advance rotation by 90 degrees, wrapping at 360."""
        self.rotation_degrees = (self.rotation_degrees + 90) % 360

    def copy(self) -> "ImageEntry":
        """Detached copy sharing the (immutable) image bytes."""
        return ImageEntry(
            image_ref=self.image_ref,
            rotation_degrees=self.rotation_degrees,
            order=self.order,
            name=self.name,
        )

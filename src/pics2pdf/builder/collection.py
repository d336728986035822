"""
Module: builder.collection

Purpose:
    The ordered, user-editable list of photos that becomes the document.
    Owns every ImageEntry; hands out detached copies for generation.

Key Classes:
    - PhotoCollection: Append / rotate / reorder / remove / snapshot

Invariants:
    - Entry order values are always 0..n-1 with no gaps or duplicates
    - Rotations stay in {0, 90, 180, 270}
    - Moving the first entry up or the last entry down changes nothing

Used By:
    - builder.session: PhotoSession
    - cli: Building a collection from command line files
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from pics2pdf.core.errors import IndexOutOfRange, InvalidArgument
from pics2pdf.core.models import ImageEntry

logger = logging.getLogger(__name__)


class PhotoCollection:
    """
    Ordered collection of ImageEntries.

    Indices are positions in the current order. Negative indices are
    rejected rather than counted from the end.

    Example:
        >>> photos = PhotoCollection()
        >>> photos.append([jpeg_a, jpeg_b], names=["a.jpg", "b.jpg"])
        >>> photos.rotate(1)
        >>> photos.move_up(1)
        >>> [(e.name, e.rotation_degrees) for e in photos]
        [('b.jpg', 90), ('a.jpg', 0)]
    """

    def __init__(self) -> None:
        self._entries: List[ImageEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImageEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ImageEntry:
        self._check_index(index)
        return self._entries[index]

    def append(
        self,
        blobs: Sequence[bytes],
        *,
        names: Optional[Sequence[str]] = None,
    ) -> List[ImageEntry]:
        """
        Append raw image blobs after the current entries.

        Blobs are not decoded here; unreadable data surfaces as a
        DecodeError at generation time.

        Args:
            blobs: Encoded image data, one per photo
            names: Optional labels, same length as blobs

        Returns:
            The newly created entries
        """
        if names is not None and len(names) != len(blobs):
            raise InvalidArgument(
                f"names has {len(names)} items but blobs has {len(blobs)}"
            )

        added = []
        for i, blob in enumerate(blobs):
            name = names[i] if names is not None else f"image {len(self._entries) + 1}"
            entry = ImageEntry(image_ref=bytes(blob), name=name)
            self._entries.append(entry)
            added.append(entry)

        self._renumber()
        logger.debug(f"Appended {len(added)} images ({len(self._entries)} total)")
        return added

    def append_files(self, paths: Iterable[Path]) -> List[ImageEntry]:
        """
        Read files and append their contents, named by filename.

        Raises:
            OSError: If a file cannot be read (nothing is appended)
        """
        paths = [Path(p) for p in paths]
        blobs = [p.read_bytes() for p in paths]
        return self.append(blobs, names=[p.name for p in paths])

    def rotate(self, index: int) -> ImageEntry:
        """Rotate the entry at index a further 90 degrees clockwise."""
        self._check_index(index)
        entry = self._entries[index]
        entry.rotate_clockwise()
        logger.debug(f"Rotated {entry.name} to {entry.rotation_degrees}°")
        return entry

    def move_up(self, index: int) -> None:
        """Swap with the previous entry; no-op for the first entry."""
        self._check_index(index)
        if index == 0:
            return
        self._swap(index - 1, index)

    def move_down(self, index: int) -> None:
        """Swap with the next entry; no-op for the last entry."""
        self._check_index(index)
        if index == len(self._entries) - 1:
            return
        self._swap(index, index + 1)

    def remove(self, index: int) -> ImageEntry:
        """Remove and return the entry at index."""
        self._check_index(index)
        entry = self._entries.pop(index)
        self._renumber()
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple[ImageEntry, ...]:
        """
        Detached copies of all entries in order.

        Later mutations of the collection do not affect the snapshot, so
        a generation run can use it while the UI keeps editing.
        """
        return tuple(entry.copy() for entry in self._entries)

    def _swap(self, a: int, b: int) -> None:
        self._entries[a], self._entries[b] = self._entries[b], self._entries[a]
        self._renumber()

    def _renumber(self) -> None:
        for order, entry in enumerate(self._entries):
            entry.order = order

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRange(
                f"Index {index} out of range for {len(self._entries)} images"
            )

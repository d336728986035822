"""
Module: core.errors

Purpose:
    Exception taxonomy shared by every pics2pdf component.
    Contract violations subclass the matching builtin (ValueError,
    IndexError) so callers can catch either form.

Key Classes:
    - Pics2PdfError: Base for all pics2pdf errors
    - InvalidArgument: Bad geometry, rotation, or dimensions
    - EmptyInput: Nothing to generate
    - DecodeError: Unreadable image data for one entry
    - IndexOutOfRange: Collection operation on an invalid index
    - GenerationInProgress: Overlapping generate() call rejected
    - GenerationCancelled: Generation abandoned by the caller

Used By:
    - Every module in pics2pdf.core and pics2pdf.builder
"""

from __future__ import annotations

from typing import Optional


class Pics2PdfError(Exception):
    """Base class for pics2pdf errors."""
    pass


class InvalidArgument(Pics2PdfError, ValueError):
    """Caller contract violation (never recovered)."""
    pass


class EmptyInput(Pics2PdfError):
    """No entries to generate a document from."""

    def __init__(self, message: str = "No images selected!") -> None:
        super().__init__(message)


class DecodeError(Pics2PdfError):
    """
    Image data could not be decoded.

    Attributes:
        index: Position of the failing entry in the run (None if unknown)
        name: Display name of the failing entry (None if unknown)
    """

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.name = name


class IndexOutOfRange(Pics2PdfError, IndexError):
    """Collection index outside 0..len-1."""
    pass


class GenerationInProgress(Pics2PdfError):
    """A generation run is already active for this session."""
    pass


class GenerationCancelled(Pics2PdfError):
    """Generation was abandoned; no artifact was written."""
    pass

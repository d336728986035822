"""
Module: builder

Purpose:
    Photo-to-PDF building pipeline. Holds the ordered photo collection,
    plans grid pages, rotates and fits each photo at the output DPI, and
    renders the result to a single PDF.

Key Functions:
    - generate_document(): Main entry point for document generation

Key Classes:
    - DocumentConfig: Configuration for generation
    - PhotoCollection: Ordered, editable photo list
    - PhotoSession: Collection + single-flight generation for UIs

Dependencies:
    - PIL: Image manipulation
    - reportlab: PDF output

Used By:
    - pics2pdf.cli: Command line interface
"""

from .config import DocumentConfig, Alignment, Resample
from .collection import PhotoCollection
from .controller import generate_document, GenerateResult
from .session import PhotoSession

__all__ = [
    # Config
    "DocumentConfig",
    "Alignment",
    "Resample",
    # Collection
    "PhotoCollection",
    # Controller
    "generate_document",
    "GenerateResult",
    "PhotoSession",
]

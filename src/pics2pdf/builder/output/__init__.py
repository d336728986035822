"""
Module: builder.output

Purpose:
    PDF output for the builder. Places rendered bitmaps page by page
    and saves the result using ReportLab.

Key Functions:
    - assemble(): Place bitmaps and save the document

Key Classes:
    - DocumentContainer: Abstract page container
    - ReportLabDocument: ReportLab-backed PDF container
    - AssemblyResult: Summary of the saved document

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - builder.controller: Pipeline orchestration
"""

from .container import DocumentContainer, ReportLabDocument
from .assembler import assemble, place_in_cell, AssemblyResult

__all__ = [
    "DocumentContainer",
    "ReportLabDocument",
    "assemble",
    "place_in_cell",
    "AssemblyResult",
]

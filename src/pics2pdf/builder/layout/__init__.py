"""
Module: builder.layout

Purpose:
    Grid pagination. Converts an ordered entry list into per-entry
    page indices and cell rectangles.

Key Functions:
    - plan(): Main entry point for layout
    - count_pages(): Page count for a number of entries

Key Classes:
    - PlannedEntry: Entry positioned on a page

Used By:
    - builder.controller: Document generation
"""

from .models import PlannedEntry
from .planner import plan, count_pages

__all__ = [
    "PlannedEntry",
    "plan",
    "count_pages",
]

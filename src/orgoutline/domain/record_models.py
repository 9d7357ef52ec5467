from __future__ import annotations

"""
Flat Record Data Models.

Defines the transfer object handed from the record readers (CSV exports,
plain DN lists) to the tree builder.
"""

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FlatRecord:
    """
    A single directory object as exported by the query collaborator.

    Attributes:
        path: Hierarchical path string (leaf first, comma separated).
        raw_type: Raw class token of the object (e.g. 'user', 'printQueue').
        category_hint: Optional secondary classification (object category).
        enabled: Account state flag reported by the source.
        line_no: 1-based source line, for diagnostics only.
    """
    path: str
    raw_type: str = ""
    category_hint: str = ""
    enabled: bool = True
    line_no: int = 0

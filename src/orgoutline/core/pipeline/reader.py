from __future__ import annotations

"""
Record and Outline Readers.

Loads the flat directory records exported by the query collaborator
(CSV with a path column and a type column, or a plain list of paths) and
streams outline text. Disabled-account filtering happens here, before any
record reaches the tree builder.
"""

import csv
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from orgoutline.domain.record_models import FlatRecord

logger = logging.getLogger(__name__)

DISABLED_VALUES = frozenset({"false", "0", "no", "n", "disabled"})

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def stream_file_content(file_path: str) -> Iterator[str]:
    """
    Generate a line-by-line stream of file content.

    Undecodable bytes are replaced rather than raising, so a stray
    non-UTF-8 name does not abort a whole conversion.

    Args:
        file_path: Path to the target file.

    Yields:
        str: Lines from the file, newline terminators removed.
    """
    with open(file_path, "r", encoding="utf-8-sig", errors="replace") as f:
        for line in f:
            yield line.rstrip("\r\n")


def read_text(file_path: str) -> str:
    """Read a whole text file through the tolerant stream."""
    return "\n".join(stream_file_content(file_path))

# -----------------------------------------------------------------------------
# RECORD READERS
# -----------------------------------------------------------------------------

def read_records(
        file_path: str,
        *,
        path_column: str = "DistinguishedName",
        type_column: str = "ObjectClass",
        category_column: str = "ObjectCategory",
        enabled_column: str = "Enabled",
        delimiter: str = ",",
        include_disabled: bool = False,
) -> Tuple[List[FlatRecord], int]:
    """
    Read flat records from a CSV export.

    Header names are matched case-insensitively. Multi-valued type cells
    ('top;person;user') keep their most-derived (last) value.

    Args:
        file_path: CSV file to read.
        path_column: Header of the hierarchical path column.
        type_column: Header of the raw type column (may be missing).
        category_column: Header of the optional category hint column.
        enabled_column: Header of the optional enabled flag column.
        delimiter: Field separator.
        include_disabled: Keep records flagged as disabled.

    Returns:
        Tuple[List[FlatRecord], int]: Kept records and the number of
        disabled records dropped.

    Raises:
        ValueError: If the file has no header or no path column.
    """
    records: List[FlatRecord] = []
    dropped = 0

    with open(file_path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        if not reader.fieldnames:
            raise ValueError(f"'{file_path}' has no header row")

        columns = _resolve_columns(reader.fieldnames)
        path_key = columns.get(path_column.lower())
        if path_key is None:
            raise ValueError(f"'{file_path}' has no '{path_column}' column")

        type_key = columns.get(type_column.lower()) if type_column else None
        category_key = columns.get(category_column.lower()) if category_column else None
        enabled_key = columns.get(enabled_column.lower()) if enabled_column else None

        for row in reader:
            enabled = _parse_enabled(row.get(enabled_key) if enabled_key else None)
            if not enabled and not include_disabled:
                dropped += 1
                continue

            records.append(FlatRecord(
                path=(row.get(path_key) or "").strip(),
                raw_type=_last_value(row.get(type_key) if type_key else None),
                category_hint=(row.get(category_key) or "").strip() if category_key else "",
                enabled=enabled,
                line_no=reader.line_num,
            ))

    logger.info(f"Loaded {len(records)} records from {file_path} ({dropped} disabled dropped).")
    return records, dropped


def read_path_list(file_path: str) -> List[FlatRecord]:
    """
    Read a plain list of paths, one per line, without type information.

    Blank lines and lines starting with '#' are ignored.

    Args:
        file_path: Text file to read.

    Returns:
        List[FlatRecord]: Records with empty raw types.
    """
    records = [
        FlatRecord(path=line.strip(), line_no=i)
        for i, line in enumerate(stream_file_content(file_path), start=1)
        if line.strip() and not line.lstrip().startswith("#")
    ]
    logger.info(f"Loaded {len(records)} paths from {file_path}.")
    return records


def looks_like_csv(file_path: str, delimiter: str = ",") -> bool:
    """Heuristic: a CSV export has a header with an '=' free first line."""
    for line in stream_file_content(file_path):
        if not line.strip():
            continue
        return delimiter in line and "=" not in line
    return False

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_columns(fieldnames: List[str]) -> Dict[str, str]:
    """Map lower-cased header names to their original spelling."""
    return {name.strip().lower(): name for name in fieldnames if name}


def _parse_enabled(value: Optional[str]) -> bool:
    """Missing or empty flags count as enabled."""
    if value is None:
        return True
    return value.strip().lower() not in DISABLED_VALUES


def _last_value(value: Optional[str]) -> str:
    if not value:
        return ""
    parts = [p.strip() for p in value.replace(",", ";").split(";") if p.strip()]
    return parts[-1] if parts else ""

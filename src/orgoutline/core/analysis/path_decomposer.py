from __future__ import annotations

"""
Hierarchical Path Decomposer.

Splits a directory-style path ('CN=x,OU=y,DC=corp,DC=com') into root-first
typed components. Trailing domain labels are merged into a single domain
root; every other segment remains its own hierarchy level.
"""

import logging
import re
from typing import List, Optional, Tuple

from orgoutline.domain.diagnostics import Diagnostics, WarningKind
from orgoutline.domain.tree_models import ComponentKind, PathComponent

logger = logging.getLogger(__name__)

DOMAIN_LABEL = "DC"
ORG_UNIT_LABEL = "OU"

# A comma only separates segments when the next segment starts with 'label='
_SEGMENT_SPLIT_RX = re.compile(r",\s*(?=\w+=)")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def decompose_path(path: str, diagnostics: Optional[Diagnostics] = None) -> List[PathComponent]:
    """
    Decompose one hierarchical path string into root-first components.

    Args:
        path: Path string, leaf segment first.
        diagnostics: Optional sink for malformed-path and empty-segment warnings.

    Returns:
        List[PathComponent]: Domain component (if any) followed by the
        remaining hierarchy from root to leaf. Empty when the path is blank
        or unparseable.
    """
    if not path or not path.strip():
        return []

    segments = split_segments(path)
    if segments is None:
        msg = "Path does not start with a 'label=value' segment"
        if diagnostics is not None:
            diagnostics.warn(WarningKind.MALFORMED_PATH, path, msg)
        else:
            logger.warning(f"{msg}: '{path}'")
        return []

    # 1. Locate the trailing run of domain labels
    suffix_start = len(segments)
    while suffix_start > 0 and segments[suffix_start - 1][0] == DOMAIN_LABEL:
        suffix_start -= 1

    hierarchy = segments[:suffix_start]
    domain_suffix = segments[suffix_start:]

    components: List[PathComponent] = []

    # 2. Merge domain labels into one synthetic root
    domain_parts = [
        value for _, value in domain_suffix
        if _keep_value(value, path, diagnostics)
    ]
    if domain_parts:
        components.append(PathComponent(
            kind=ComponentKind.DOMAIN_LABEL,
            name=".".join(domain_parts),
            is_domain_root=True,
        ))

    # 3. Remaining levels, reversed to root-first order
    for label, value in reversed(hierarchy):
        if not _keep_value(value, path, diagnostics):
            continue
        kind = (
            ComponentKind.ORGANIZATIONAL_UNIT if label == ORG_UNIT_LABEL
            else ComponentKind.COMMON_NAME
        )
        components.append(PathComponent(kind=kind, name=value))

    return components


def split_segments(path: str) -> Optional[List[Tuple[str, str]]]:
    """
    Split a path into (LABEL, value) pairs in the order given.

    Labels are upper-cased, values trimmed. Returns None when the first
    segment carries no label, which makes the whole path unparseable.
    """
    segments: List[Tuple[str, str]] = []
    for raw in _SEGMENT_SPLIT_RX.split(path.strip()):
        label, sep, value = raw.partition("=")
        if not sep or not label.strip():
            return None
        segments.append((label.strip().upper(), value.strip()))
    return segments

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _keep_value(value: str, path: str, diagnostics: Optional[Diagnostics]) -> bool:
    """Report and reject segments whose value trims to nothing."""
    if value:
        return True
    if diagnostics is not None:
        diagnostics.warn(WarningKind.EMPTY_COMPONENT, path, "Empty path segment dropped")
    else:
        logger.warning(f"Empty path segment dropped in '{path}'")
    return False

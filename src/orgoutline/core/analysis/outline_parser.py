from __future__ import annotations

"""
Outline Parser.

Reads indented markdown-list outlines back into a forest. Parent inference
uses an explicit (depth, node) ancestor stack: a line attaches to the
nearest remaining ancestor whose depth is lower than its own, so depth
jumps larger than one level are accepted without filler nodes. A line
repeating a sibling name reopens that sibling, so paths stay unique.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from orgoutline.core.analysis.type_normalizer import NormalizedType, kind_from_marker
from orgoutline.domain.diagnostics import Diagnostics, WarningKind
from orgoutline.domain.tree_models import Forest, NodeKind, TreeNode

logger = logging.getLogger(__name__)

INDENT_WIDTH = 2

_LINE_RX = re.compile(r"^(\s*)[-*]\s+(.+?)(?:\s\[([^\[\]]+)\])?$")

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of an outline parse.

    Attributes:
        roots: Forest roots in encounter order.
        line_count: Number of outline lines turned into nodes.
        diagnostics: Warning sink used during the pass.
    """
    roots: Forest
    line_count: int = 0
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class _Draft:
    name: str
    path: Tuple[str, ...]
    resolved: NormalizedType
    children: List["_Draft"] = field(default_factory=list)


@dataclass(frozen=True)
class OutlineLine:
    """A single recognized outline line."""
    line_no: int
    depth: int
    name: str
    marker: Optional[str]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_outline(text: str, diagnostics: Optional[Diagnostics] = None) -> ParseResult:
    """
    Parse outline text into a forest.

    Args:
        text: Outline content, one node per line.
        diagnostics: Optional warning sink; a fresh one is used otherwise.

    Returns:
        ParseResult: Immutable forest and line counter.
    """
    diag = diagnostics if diagnostics is not None else Diagnostics()

    roots: List[_Draft] = []
    drafts: Dict[Tuple[str, ...], _Draft] = {}
    stack: List[Tuple[int, _Draft]] = []
    count = 0

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        parsed = parse_line(raw_line, line_no, diag)
        if parsed is None:
            continue
        count += 1

        # Pop siblings and deeper levels; what remains on top is the parent
        while stack and stack[-1][0] >= parsed.depth:
            stack.pop()
        parent = stack[-1][1] if stack else None

        path = (parent.path if parent else ()) + (parsed.name,)

        # Duplicate sibling: keep the first node and its kind, collect children under it
        draft = drafts.get(path)
        if draft is None:
            if parsed.marker is None:
                resolved = NormalizedType(NodeKind.ORGANIZATIONAL_UNIT, "")
            else:
                resolved = kind_from_marker(parsed.marker)
            draft = _Draft(name=parsed.name, path=path, resolved=resolved)
            drafts[path] = draft
            if parent is None:
                roots.append(draft)
            else:
                parent.children.append(draft)
        else:
            logger.debug(f"Line {line_no}: '{parsed.name}' repeats an existing sibling; merged.")
        stack.append((parsed.depth, draft))

    logger.debug(f"Parsed {count} outline lines into {len(roots)} roots.")
    return ParseResult(
        roots=tuple(_freeze(d) for d in roots),
        line_count=count,
        diagnostics=diag,
    )


def parse_line(
        raw_line: str,
        line_no: int = 0,
        diagnostics: Optional[Diagnostics] = None,
) -> Optional[OutlineLine]:
    """
    Recognize one outline line.

    Args:
        raw_line: Line text, with or without its newline.
        line_no: 1-based line number for diagnostics.
        diagnostics: Optional sink for ambiguous-indentation warnings.

    Returns:
        Optional[OutlineLine]: None for blank lines and non-list content.
    """
    line = raw_line.rstrip()
    if not line.strip():
        return None

    match = _LINE_RX.match(line)
    if match is None:
        logger.debug(f"Line {line_no} is not a list item; ignored.")
        return None

    indent, name, marker = match.groups()
    width = _indent_width(indent)
    if width % INDENT_WIDTH:
        msg = f"Indentation of {width} spaces is not a multiple of {INDENT_WIDTH}; floored"
        if diagnostics is not None:
            diagnostics.warn(WarningKind.AMBIGUOUS_INDENT, f"line {line_no}", msg)
        else:
            logger.warning(f"{msg} (line {line_no})")

    return OutlineLine(
        line_no=line_no,
        depth=width // INDENT_WIDTH,
        name=name.strip(),
        marker=marker,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _indent_width(indent: str) -> int:
    """Leading whitespace width; a tab counts as one full indent unit."""
    return sum(INDENT_WIDTH if ch == "\t" else 1 for ch in indent)


def _freeze(draft: _Draft) -> TreeNode:
    return TreeNode(
        name=draft.name,
        kind=draft.resolved.kind,
        path=draft.path,
        children=tuple(_freeze(c) for c in draft.children),
        display_kind=draft.resolved.display,
    )

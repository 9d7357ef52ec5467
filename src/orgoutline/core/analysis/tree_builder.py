from __future__ import annotations

"""
Organizational Tree Builder.

Folds flat (path, raw type) records into one deduplicated forest. Every
record is decomposed root-first; each path prefix becomes exactly one node,
claimed by the first record that reaches it (first-writer-wins). Only the
last level of a record carries its declared type; every other level is
structural.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from orgoutline.core.analysis.path_decomposer import decompose_path
from orgoutline.core.analysis.type_normalizer import NormalizedType, normalize_type
from orgoutline.domain.diagnostics import Diagnostics, WarningKind
from orgoutline.domain.record_models import FlatRecord
from orgoutline.domain.tree_models import Forest, TreeNode

logger = logging.getLogger(__name__)

PathKey = Tuple[str, ...]

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of a build pass.

    Attributes:
        roots: Forest roots sorted by name.
        nodes: Read-only map from path key to node.
        type_counts: Occurrences of each raw type token in the input.
        records_total: Number of records folded.
        records_skipped: Records dropped because their path was unusable.
        diagnostics: Warning sink used during the pass.
    """
    roots: Forest
    nodes: Mapping[PathKey, TreeNode]
    type_counts: Dict[str, int] = field(default_factory=dict)
    records_total: int = 0
    records_skipped: int = 0
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class _Draft:
    """Mutable node used only while the fold is in progress."""
    name: str
    path: PathKey
    resolved: NormalizedType
    children: List["_Draft"] = field(default_factory=list)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        records: Iterable[FlatRecord],
        diagnostics: Optional[Diagnostics] = None,
) -> BuildResult:
    """
    Build a forest from flat directory records.

    Args:
        records: Records in processing order. Order matters for paths that
            are both an intermediate prefix and a record of their own.
        diagnostics: Optional warning sink; a fresh one is used otherwise.

    Returns:
        BuildResult: Immutable forest, path map and counters.
    """
    diag = diagnostics if diagnostics is not None else Diagnostics()

    drafts: Dict[PathKey, _Draft] = {}
    roots: List[_Draft] = []
    type_counts: Counter = Counter()
    total = 0
    skipped = 0

    for record in records:
        total += 1
        type_counts[(record.raw_type or "").strip() or "<empty>"] += 1

        malformed_before = diag.count(WarningKind.MALFORMED_PATH)
        components = decompose_path(record.path, diag)
        if not components:
            skipped += 1
            # One malformed warning per skipped record
            if diag.count(WarningKind.MALFORMED_PATH) == malformed_before:
                source = record.path or f"line {record.line_no}"
                diag.warn(WarningKind.MALFORMED_PATH, source, "Record skipped: no usable path components")
            continue

        key: PathKey = ()
        last = len(components) - 1
        for i, component in enumerate(components):
            parent_key = key
            key = key + (component.name,)

            # First writer claims the path
            if key in drafts:
                continue

            resolved = normalize_type(
                record.raw_type,
                category_hint=record.category_hint,
                leaf=(i == last),
                component_kind=component.kind,
                diagnostics=diag,
            )
            draft = _Draft(name=component.name, path=key, resolved=resolved)
            drafts[key] = draft

            if parent_key:
                drafts[parent_key].children.append(draft)
            else:
                roots.append(draft)

    logger.debug(f"Folded {total} records into {len(drafts)} nodes ({skipped} skipped).")

    nodes: Dict[PathKey, TreeNode] = {}
    frozen_roots = tuple(_freeze(d, nodes) for d in _sorted(roots))

    return BuildResult(
        roots=frozen_roots,
        nodes=MappingProxyType(nodes),
        type_counts=dict(type_counts),
        records_total=total,
        records_skipped=skipped,
        diagnostics=diag,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _sorted(drafts: List[_Draft]) -> List[_Draft]:
    """Case-sensitive ordinal order by name."""
    return sorted(drafts, key=lambda d: d.name)


def _freeze(draft: _Draft, nodes: Dict[PathKey, TreeNode]) -> TreeNode:
    """Convert a draft subtree into immutable nodes, registering each by path."""
    children = tuple(_freeze(c, nodes) for c in _sorted(draft.children))
    node = TreeNode(
        name=draft.name,
        kind=draft.resolved.kind,
        path=draft.path,
        children=children,
        display_kind=draft.resolved.display,
    )
    nodes[draft.path] = node
    return node

from __future__ import annotations

"""
Organizational Tree Data Models.

Provides the node taxonomy, the path components produced by the path
decomposer, and the immutable tree nodes shared by the builder, the
outline parser and every rendering consumer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

# -----------------------------------------------------------------------------
# TAXONOMY
# -----------------------------------------------------------------------------

class ComponentKind(Enum):
    """Label family of a single path segment."""
    DOMAIN_LABEL = "DomainLabel"
    ORGANIZATIONAL_UNIT = "OrganizationalUnit"
    COMMON_NAME = "CommonName"


class NodeKind(Enum):
    """
    Closed set of semantic node kinds.

    The three container kinds carry no outline marker; every other kind is
    annotated with its lowercase name in brackets.
    """
    DOMAIN = "Domain"
    ORGANIZATIONAL_UNIT = "OrganizationalUnit"
    CONTAINER = "Container"
    USER = "User"
    COMPUTER = "Computer"
    GROUP = "Group"
    CONTACT = "Contact"
    PRINTER = "Printer"
    SHARE = "Share"
    POLICY = "Policy"
    UNKNOWN = "Unknown"

    @property
    def marker(self) -> Optional[str]:
        if self in _MARKERLESS_KINDS:
            return None
        return self.value.lower()


_MARKERLESS_KINDS = frozenset({
    NodeKind.DOMAIN,
    NodeKind.ORGANIZATIONAL_UNIT,
    NodeKind.CONTAINER,
})

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PathComponent:
    """
    One typed level of a decomposed hierarchical path.

    Attributes:
        kind: Label family the segment belongs to.
        name: Trimmed segment value (joined labels for the domain root).
        is_domain_root: True only for the synthetic merged domain component.
    """
    kind: ComponentKind
    name: str
    is_domain_root: bool = False


@dataclass(frozen=True)
class TreeNode:
    """
    Immutable node of an organizational forest.

    Attributes:
        name: Display name of the node.
        kind: Semantic kind resolved by the builder or the parser.
        path: Root-first sequence of names; unique across the forest.
        children: Child nodes in presentation order.
        display_kind: Marker text shown in the outline. For unknown kinds
            this is the original raw type token so unmapped classes stay
            visible.
    """
    name: str
    kind: NodeKind
    path: Tuple[str, ...]
    children: Tuple["TreeNode", ...] = field(default_factory=tuple)
    display_kind: str = ""

    @property
    def marker(self) -> Optional[str]:
        """Bracket annotation for this node, or None for markerless kinds."""
        if self.kind is NodeKind.UNKNOWN:
            return self.display_kind or "unknown"
        return self.kind.marker

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    def walk(self, depth: int = 0) -> Iterator[Tuple["TreeNode", int]]:
        """Yield (node, depth) pairs in depth-first pre-order."""
        yield self, depth
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree into a JSON-ready dictionary."""
        result: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "path": list(self.path),
        }
        if self.kind is NodeKind.UNKNOWN:
            result["display_kind"] = self.display_kind
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


Forest = Tuple[TreeNode, ...]


def count_nodes(roots: Forest) -> int:
    """Count every node reachable from the given roots."""
    return sum(1 for root in roots for _ in root.walk())

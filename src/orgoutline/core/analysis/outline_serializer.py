from __future__ import annotations

"""
Outline Serializer.

Renders a forest as an indented markdown list, one node per line, with the
node kind as a trailing bracket annotation.
"""

from typing import Iterable, Iterator

from orgoutline.domain.tree_models import NodeKind, TreeNode

INDENT_UNIT = "  "
BULLET = "- "

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def iter_outline_lines(
        roots: Iterable[TreeNode],
        *,
        strip_computer_suffix: bool = True,
) -> Iterator[str]:
    """
    Lazily yield outline lines for a forest in depth-first pre-order.

    Each call returns a fresh generator; nothing is cached between calls.

    Args:
        roots: Forest roots; emitted sorted by name.
        strip_computer_suffix: Drop one trailing '$' from computer names.

    Yields:
        str: One outline line without the newline terminator.
    """
    for root in sorted(roots, key=lambda n: n.name):
        yield from _iter_node(root, 0, strip_computer_suffix)


def serialize_outline(roots: Iterable[TreeNode], *, strip_computer_suffix: bool = True) -> str:
    """Join the outline lines of a forest with newlines."""
    return "\n".join(iter_outline_lines(roots, strip_computer_suffix=strip_computer_suffix))


def format_outline_line(node: TreeNode, depth: int, strip_computer_suffix: bool = True) -> str:
    """
    Format a single node as an outline line.

    Args:
        node: Node to format.
        depth: Indentation level (0 for roots).
        strip_computer_suffix: Drop one trailing '$' from computer names.

    Returns:
        str: e.g. '    - WKS01 [computer]'.
    """
    name = node.name
    if strip_computer_suffix and node.kind is NodeKind.COMPUTER and name.endswith("$"):
        name = name[:-1]

    marker = node.marker
    suffix = f" [{marker}]" if marker else ""
    return f"{INDENT_UNIT * depth}{BULLET}{name}{suffix}"

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _iter_node(node: TreeNode, depth: int, strip_computer_suffix: bool) -> Iterator[str]:
    yield format_outline_line(node, depth, strip_computer_suffix)
    for child in sorted(node.children, key=lambda n: n.name):
        yield from _iter_node(child, depth + 1, strip_computer_suffix)

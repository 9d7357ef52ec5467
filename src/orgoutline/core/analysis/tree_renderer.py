from __future__ import annotations

"""
Tree Renderer.

Converts an organizational forest into a visual ASCII representation for
terminal previews. Each entry shows the node name followed by its kind
marker when the kind has one.
"""

from typing import List, Sequence

from orgoutline.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        nodes: Sequence[TreeNode],
        lines: List[str],
        prefix: str = "",
) -> None:
    """
    Recursively transform a forest into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested containers.

    Args:
        nodes: Nodes of the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = sorted(nodes, key=lambda n: n.name)
    total = len(entries)

    for i, node in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        label = node.name
        if node.marker:
            label = f"{label} [{node.marker}]"
        lines.append(f"{prefix}{connector}{label}")

        if node.children:
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(node.children, lines, prefix=new_prefix)


def render_forest(roots: Sequence[TreeNode]) -> List[str]:
    """Render a whole forest and return the preview lines."""
    lines: List[str] = []
    render_tree_structure(roots, lines)
    return lines

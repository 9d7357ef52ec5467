from __future__ import annotations

"""
Unit tests for the ASCII tree preview.
"""

from typing import List

from orgoutline.core.analysis.tree_builder import build_tree
from orgoutline.core.analysis.tree_renderer import render_forest, render_tree_structure
from orgoutline.domain.record_models import FlatRecord
from orgoutline.domain.tree_models import NodeKind, TreeNode


def test_render_forest_connectors(sample_records: List[FlatRecord]) -> None:
    lines = render_forest(build_tree(sample_records).roots)

    assert lines[0] == "└── corp.com"
    assert lines[1] == "    ├── IT"
    assert lines[2] == "    │   ├── Widget [msExchWidget]"
    assert lines[3] == "    │   └── Workstations"
    assert lines[4] == "    │       └── WKS01$ [computer]"
    assert lines[-1] == "        └── Sales Team [group]"
    assert len(lines) == 10


def test_render_tree_structure_appends_with_prefix() -> None:
    nodes = (
        TreeNode("b", NodeKind.USER, ("b",)),
        TreeNode("a", NodeKind.ORGANIZATIONAL_UNIT, ("a",)),
    )
    lines: List[str] = ["header"]

    render_tree_structure(nodes, lines, prefix="> ")

    assert lines == ["header", "> ├── a", "> └── b [user]"]


def test_empty_forest_renders_nothing() -> None:
    assert render_forest(()) == []

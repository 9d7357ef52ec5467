from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. Data integrity of ConversionResult factories (Success/Error).
2. Immutability of frozen dataclasses.
3. Tree node helpers and diagnostics counters.
"""

import dataclasses
import json
import logging

import pytest

from orgoutline.domain.diagnostics import Diagnostics, WarningKind
from orgoutline.domain.pipeline_models import (
    ConversionResult,
    ErrorKind,
    create_error_result,
    create_success_result,
)
from orgoutline.domain.record_models import FlatRecord
from orgoutline.domain.tree_models import NodeKind, TreeNode, count_nodes


@pytest.fixture
def small_forest():
    alice = TreeNode("Alice", NodeKind.USER, ("corp", "Sales", "Alice"))
    widget = TreeNode("Widget", NodeKind.UNKNOWN, ("corp", "Sales", "Widget"), display_kind="msExchWidget")
    sales = TreeNode("Sales", NodeKind.ORGANIZATIONAL_UNIT, ("corp", "Sales"), children=(alice, widget))
    return (TreeNode("corp", NodeKind.DOMAIN, ("corp",), children=(sales,)),)


def test_node_kind_markers() -> None:
    assert NodeKind.DOMAIN.marker is None
    assert NodeKind.ORGANIZATIONAL_UNIT.marker is None
    assert NodeKind.CONTAINER.marker is None
    assert NodeKind.PRINTER.marker == "printer"
    assert NodeKind.POLICY.marker == "policy"


def test_tree_node_walk_and_depth(small_forest) -> None:
    visited = [(node.name, depth) for node, depth in small_forest[0].walk()]

    assert visited == [("corp", 0), ("Sales", 1), ("Alice", 2), ("Widget", 2)]
    assert small_forest[0].children[0].children[0].depth == 2
    assert count_nodes(small_forest) == 4


def test_tree_node_to_dict_is_json_ready(small_forest) -> None:
    data = small_forest[0].to_dict()

    assert json.loads(json.dumps(data)) == data
    sales = data["children"][0]
    assert sales["kind"] == "OrganizationalUnit"
    assert sales["children"][1]["display_kind"] == "msExchWidget"
    assert "children" not in sales["children"][0]


def test_tree_node_is_immutable(small_forest) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        small_forest[0].name = "other"  # type: ignore[misc]


def test_flat_record_defaults() -> None:
    record = FlatRecord("CN=a,DC=corp")

    assert record.raw_type == ""
    assert record.enabled is True
    assert record.line_no == 0


def test_diagnostics_counts_are_zero_filled() -> None:
    diagnostics = Diagnostics()
    diagnostics.warn(WarningKind.UNMAPPED_TYPE, "foo", "Unmapped")
    diagnostics.warn(WarningKind.UNMAPPED_TYPE, "bar", "Unmapped")

    counts = diagnostics.counts()

    assert counts == {
        "malformed_path": 0,
        "empty_component": 0,
        "unmapped_type": 2,
        "ambiguous_indent": 0,
    }
    assert len(diagnostics) == 2
    assert [w.source for w in diagnostics.warnings] == ["foo", "bar"]


def test_diagnostics_mirror_warnings_to_log(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="orgoutline.domain.diagnostics"):
        Diagnostics().warn(WarningKind.AMBIGUOUS_INDENT, "line 4", "Odd indent")

    assert "[ambiguous_indent] Odd indent (line 4)" in caplog.text


def test_create_success_result_populates_fields(small_forest) -> None:
    result = create_success_result(
        input_path="/tmp/export.csv",
        input_format="records",
        roots=small_forest,
        outline_lines=["- corp"],
        node_count=4,
        warning_counts={"unmapped_type": 1},
        output_path="/tmp/org.md",
        summary_extra={"lines": 1},
    )

    assert isinstance(result, ConversionResult)
    assert result.ok is True
    assert result.error == ""
    assert result.output_path == "/tmp/org.md"
    assert result.summary == {"lines": 1}

    data = result.to_dict()
    assert data["tree"][0]["name"] == "corp"
    assert "tree" not in result.to_dict(include_tree=False)


def test_create_error_result_handles_defaults() -> None:
    result = create_error_result("Critical disk error", "/tmp/export.csv", ErrorKind.WRITE_FAILED)

    assert result.ok is False
    assert result.error_kind is ErrorKind.WRITE_FAILED
    assert result.to_dict()["error_kind"] == "write_failed"
    assert result.error == "Critical disk error"
    assert result.roots == ()
    assert result.outline_lines == []
    assert result.summary == {}

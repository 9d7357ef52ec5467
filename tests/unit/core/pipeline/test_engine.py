from __future__ import annotations

"""
Unit tests for the conversion pipeline engine.

Verifies:
1. Records to outline conversion with statistics.
2. Outline input detection and re-serialization.
3. Output collision protection and dry-run behavior.
4. Error results for missing or unreadable inputs.
"""

from pathlib import Path
from typing import Any, Dict

import pytest

from orgoutline.core.pipeline.engine import resolve_format, run_conversion
from orgoutline.domain.pipeline_models import ErrorKind

CSV_EXPORT = (
    "DistinguishedName,ObjectClass,Enabled\n"
    '"CN=Alice,OU=Sales,DC=corp,DC=com",user,True\n'
    '"CN=WKS01$,OU=IT,DC=corp,DC=com",computer,True\n'
    '"CN=Old,OU=Sales,DC=corp,DC=com",user,False\n'
    "garbage,user,True\n"
)


@pytest.fixture
def base_config(tmp_path: Path, mock_config_dict: Dict[str, Any]) -> Dict[str, Any]:
    input_file = tmp_path / "export.csv"
    input_file.write_text(CSV_EXPORT, encoding="utf-8")

    cfg = dict(mock_config_dict)
    cfg["input_path"] = str(input_file)
    cfg["output_path"] = str(tmp_path / "out" / "org.md")
    return cfg


def test_records_conversion_writes_outline(base_config: Dict[str, Any]) -> None:
    """TC-01: CSV export becomes an outline file."""
    result = run_conversion(base_config)

    assert result.ok is True, result.error
    assert result.input_format == "records"
    assert result.outline_lines == [
        "- corp.com",
        "  - IT",
        "    - WKS01 [computer]",
        "  - Sales",
        "    - Alice [user]",
    ]
    assert result.node_count == 5

    written = Path(result.output_path).read_text(encoding="utf-8")
    assert written == "\n".join(result.outline_lines) + "\n"


def test_records_summary_statistics(base_config: Dict[str, Any]) -> None:
    result = run_conversion(base_config)

    assert result.summary["records_total"] == 3
    assert result.summary["records_skipped"] == 1
    assert result.summary["records_disabled"] == 1
    assert result.summary["type_counts"] == {"computer": 1, "user": 2}
    assert result.summary["lines"] == 5
    assert result.warning_counts["malformed_path"] == result.summary["records_skipped"] == 1


def test_keep_dollar_suffix(base_config: Dict[str, Any]) -> None:
    base_config["strip_computer_suffix"] = False

    result = run_conversion(base_config)

    assert "    - WKS01$ [computer]" in result.outline_lines


def test_outline_input_is_detected_by_extension(tmp_path: Path, mock_config_dict: Dict[str, Any]) -> None:
    """TC-02: Outline files are parsed and re-serialized in sorted order."""
    source = tmp_path / "org.md"
    source.write_text("- corp\n  - Zed [user]\n  - Amy [user]\n", encoding="utf-8")

    cfg = dict(mock_config_dict, input_path=str(source), output_path="")
    result = run_conversion(cfg)

    assert result.ok is True
    assert result.input_format == "outline"
    assert result.outline_lines == ["- corp", "  - Amy [user]", "  - Zed [user]"]
    assert result.summary["outline_lines_read"] == 3
    assert result.output_path == ""


def test_plain_path_list_input(tmp_path: Path, mock_config_dict: Dict[str, Any]) -> None:
    source = tmp_path / "paths.txt"
    source.write_text("CN=Alice,OU=Sales,DC=corp\n", encoding="utf-8")

    cfg = dict(mock_config_dict, input_path=str(source), output_path="")
    result = run_conversion(cfg)

    assert result.ok is True
    assert result.outline_lines == ["- corp", "  - Sales", "    - Alice [unknown]"]


def test_existing_output_is_not_overwritten(base_config: Dict[str, Any]) -> None:
    """TC-03: Collisions abort unless overwrite is requested."""
    out = Path(base_config["output_path"])
    out.parent.mkdir(parents=True)
    out.write_text("keep me", encoding="utf-8")

    result = run_conversion(base_config)

    assert result.ok is False
    assert "overwrite=False" in result.error
    assert result.error_kind is ErrorKind.OUTPUT_EXISTS
    assert result.summary["existing_file"] == str(out)
    assert out.read_text(encoding="utf-8") == "keep me"

    result = run_conversion(base_config, overwrite=True)
    assert result.ok is True
    assert out.read_text(encoding="utf-8").startswith("- corp.com")


def test_dry_run_writes_nothing(base_config: Dict[str, Any]) -> None:
    result = run_conversion(base_config, dry_run=True)

    assert result.ok is True
    assert result.output_path == ""
    assert result.summary["dry_run"] is True
    assert result.summary["will_write"] == base_config["output_path"]
    assert not Path(base_config["output_path"]).exists()


def test_missing_input_returns_error(tmp_path: Path, mock_config_dict: Dict[str, Any]) -> None:
    cfg = dict(mock_config_dict, input_path=str(tmp_path / "nope.csv"))

    result = run_conversion(cfg)

    assert result.ok is False
    assert result.error_kind is ErrorKind.MISSING_INPUT


def test_csv_without_path_column_returns_error(tmp_path: Path, mock_config_dict: Dict[str, Any]) -> None:
    source = tmp_path / "bad.csv"
    source.write_text("Name,Class\nAlice,user\n", encoding="utf-8")

    result = run_conversion(dict(mock_config_dict, input_path=str(source), output_path=""))

    assert result.ok is False
    assert "Failed to read" in result.error
    assert result.error_kind is ErrorKind.READ_FAILED


def test_resolve_format() -> None:
    assert resolve_format("/x/org.MD", "auto") == "outline"
    assert resolve_format("/x/org.outline", "auto") == "outline"
    assert resolve_format("/x/export.csv", "auto") == "records"
    assert resolve_format("/x/org.md", "records") == "records"

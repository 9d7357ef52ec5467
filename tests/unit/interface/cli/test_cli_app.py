from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Verifies:
1. Exit codes are chosen from the failure category, not the message text.
2. Summary labels come from the active locale.
"""

from typing import Any, Dict

import pytest

from orgoutline.domain.pipeline_models import (
    ErrorKind,
    create_error_result,
    create_success_result,
)
from orgoutline.interface.cli import app
from orgoutline.utils.i18n import i18n


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the controller from installing handlers on the test process."""
    monkeypatch.setattr(app, "configure_logging", lambda *a, **kw: None)


def _stub_conversion(monkeypatch: pytest.MonkeyPatch, result) -> None:
    monkeypatch.setattr(app, "run_conversion", lambda cfg, **kw: result)


@pytest.mark.parametrize("kind, expected", [
    (ErrorKind.MISSING_INPUT, 2),
    (ErrorKind.READ_FAILED, 1),
    (ErrorKind.OUTPUT_EXISTS, 1),
])
def test_exit_code_follows_error_kind(
        monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, kind: ErrorKind, expected: int
) -> None:
    """TC-01: The wording of the error has no influence on the exit code."""
    _stub_conversion(monkeypatch, create_error_result("reworded message", "/data/in.csv", kind))

    assert app.main(["-i", "/data/in.csv", "--use-defaults"]) == expected
    assert "ERROR" in capsys.readouterr().err


def test_summary_labels_are_translated(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """TC-02: Statistics and warning lines use locale strings."""
    summary: Dict[str, Any] = {"dry_run": True, "records_total": 4, "records_skipped": 1}
    result = create_success_result(
        input_path="/data/in.csv",
        input_format="records",
        roots=(),
        outline_lines=[],
        node_count=3,
        warning_counts={"malformed_path": 1, "unmapped_type": 0},
        summary_extra=summary,
    )
    _stub_conversion(monkeypatch, result)

    assert app.main(["-i", "/data/in.csv", "--use-defaults", "--dry-run"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert i18n.t("cli.summary.records_total", count=4) in out
    assert i18n.t("cli.summary.records_skipped", count=1) in out
    assert i18n.t("cli.summary.warning", kind="malformed_path", count=1) in out
    assert not any("unmapped_type" in line for line in out)
    assert not any(line.startswith("cli.summary") for line in out)

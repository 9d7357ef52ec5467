from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate
conversion outcomes between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from orgoutline.domain.tree_models import Forest

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

class ErrorKind(Enum):
    """Why a conversion run failed. The CLI maps these to exit codes."""
    MISSING_INPUT = "missing_input"
    OUTPUT_EXISTS = "output_exists"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"



@dataclass(frozen=True)
class ConversionResult:
    """
    Unified result object of a complete conversion run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Failure category, None on success.
        input_path: Normalized input file.
        input_format: Resolved format ('records' or 'outline').
        output_path: Destination of the outline ('' when not written).
        roots: Resulting forest.
        outline_lines: Serialized outline.
        node_count: Number of nodes in the forest.
        warning_counts: Recoverable warnings per category.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    input_path: str
    input_format: str
    output_path: str = ""
    error_kind: Optional[ErrorKind] = None

    roots: Forest = field(default_factory=tuple)
    outline_lines: List[str] = field(default_factory=list)
    node_count: int = 0
    warning_counts: Dict[str, int] = field(default_factory=dict)

    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self, include_tree: bool = True) -> Dict[str, Any]:
        """JSON-ready view of the result."""
        data: Dict[str, Any] = {
            "ok": self.ok,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "input_path": self.input_path,
            "input_format": self.input_format,
            "output_path": self.output_path,
            "node_count": self.node_count,
            "warning_counts": dict(self.warning_counts),
            "summary": dict(self.summary),
        }
        if include_tree:
            data["tree"] = [root.to_dict() for root in self.roots]
        return data

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        input_path: str,
        kind: ErrorKind,
        input_format: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ConversionResult:
    """
    Create a failed conversion result.

    Args:
        error: Detailed error description.
        input_path: The target input file.
        kind: Failure category.
        input_format: Format resolved before the failure, if any.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        ConversionResult: An immutable error result object.
    """
    return ConversionResult(
        ok=False,
        error=error,
        input_path=input_path,
        input_format=input_format,
        error_kind=kind,
        summary=summary_extra or {},
    )


def create_success_result(
        input_path: str,
        input_format: str,
        roots: Forest,
        outline_lines: List[str],
        node_count: int,
        warning_counts: Dict[str, int],
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ConversionResult:
    """
    Create a successful conversion result.

    Args:
        input_path: Normalized input file.
        input_format: Resolved input format.
        roots: Resulting forest.
        outline_lines: Serialized outline.
        node_count: Number of nodes in the forest.
        warning_counts: Recoverable warnings per category.
        output_path: Written outline file, if any.
        summary_extra: Execution statistics.

    Returns:
        ConversionResult: An immutable success result object.
    """
    return ConversionResult(
        ok=True,
        error="",
        input_path=input_path,
        input_format=input_format,
        output_path=output_path,
        roots=roots,
        outline_lines=outline_lines,
        node_count=node_count,
        warning_counts=warning_counts,
        summary=summary_extra or {},
    )

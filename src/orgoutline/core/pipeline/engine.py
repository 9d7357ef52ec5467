from __future__ import annotations

"""
Core conversion pipeline.

This module coordinates a complete conversion run:
1. Validates configuration and paths.
2. Resolves the input format (flat records or outline).
3. Builds or parses the forest.
4. Serializes the outline and checks for output collisions.
5. Persists the outline and reports statistics.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from orgoutline.core.analysis.outline_parser import parse_outline
from orgoutline.core.analysis.outline_serializer import iter_outline_lines
from orgoutline.core.analysis.tree_builder import build_tree
from orgoutline.core.pipeline.reader import (
    looks_like_csv,
    read_path_list,
    read_records,
    read_text,
)
from orgoutline.core.pipeline.validator import validate_config
from orgoutline.domain.config import OUTLINE_EXTENSIONS
from orgoutline.domain.diagnostics import Diagnostics
from orgoutline.domain.pipeline_models import (
    ConversionResult,
    ErrorKind,
    create_error_result,
    create_success_result,
)
from orgoutline.domain.tree_models import Forest, count_nodes
from orgoutline.infra.fs import normalize_path, write_lines

logger = logging.getLogger(__name__)


def run_conversion(
        config: Optional[Dict[str, Any]],
        *,
        overwrite: bool = False,
        dry_run: bool = False,
) -> ConversionResult:
    """
    Execute a full conversion run.

    Args:
        config: The configuration dictionary (raw or partial).
        overwrite: If True, replace an existing output file.
        dry_run: If True, convert without writing to disk.

    Returns:
        ConversionResult: Status, forest, outline and statistics.
    """
    logger.info("Conversion started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    input_path = normalize_path(cfg["input_path"])
    if not input_path or not os.path.isfile(input_path):
        msg = f"Input file does not exist: {input_path or cfg['input_path']}"
        logger.error(msg)
        return create_error_result(msg, input_path, ErrorKind.MISSING_INPUT)

    output_path = normalize_path(cfg["output_path"])
    input_format = resolve_format(input_path, cfg["input_format"])

    # -------------------------------------------------------------------------
    # 2) Overwrite Check
    # -------------------------------------------------------------------------
    if output_path and os.path.exists(output_path) and not overwrite and not dry_run:
        msg = "Output file exists and overwrite=False. Aborting."
        logger.warning(f"{msg} File: {output_path}")
        return create_error_result(
            msg, input_path, ErrorKind.OUTPUT_EXISTS, input_format,
            summary_extra={"existing_file": output_path},
        )

    # -------------------------------------------------------------------------
    # 3) Build or Parse
    # -------------------------------------------------------------------------
    diagnostics = Diagnostics()
    summary: Dict[str, Any] = {"dry_run": dry_run}

    try:
        if input_format == "outline":
            roots = _parse_stage(input_path, diagnostics, summary)
        else:
            roots = _build_stage(input_path, cfg, diagnostics, summary)
    except (OSError, ValueError) as e:
        msg = f"Failed to read '{input_path}': {e}"
        logger.error(msg)
        return create_error_result(msg, input_path, ErrorKind.READ_FAILED, input_format)

    lines: List[str] = list(iter_outline_lines(
        roots, strip_computer_suffix=cfg["strip_computer_suffix"]
    ))

    # -------------------------------------------------------------------------
    # 4) Persistence
    # -------------------------------------------------------------------------
    written_path = ""
    if output_path and not dry_run:
        try:
            write_lines(output_path, lines)
        except OSError as e:
            msg = f"Failed to write outline to '{output_path}': {e}"
            logger.error(msg)
            return create_error_result(msg, input_path, ErrorKind.WRITE_FAILED, input_format)
        written_path = output_path
        logger.info(f"Outline saved to file: {output_path}")

    summary["lines"] = len(lines)
    summary["will_write"] = output_path if dry_run else ""
    node_count = count_nodes(roots)

    logger.info(
        f"Conversion finished: {node_count} nodes, {len(diagnostics)} warnings."
    )

    return create_success_result(
        input_path=input_path,
        input_format=input_format,
        roots=roots,
        outline_lines=lines,
        node_count=node_count,
        warning_counts=diagnostics.counts(),
        output_path=written_path,
        summary_extra=summary,
    )


def resolve_format(input_path: str, requested: str) -> str:
    """
    Resolve 'auto' into a concrete input format from the file extension.

    Args:
        input_path: Input file path.
        requested: Configured format ('auto', 'records' or 'outline').

    Returns:
        str: 'records' or 'outline'.
    """
    if requested != "auto":
        return requested
    _, ext = os.path.splitext(input_path)
    return "outline" if ext.lower() in OUTLINE_EXTENSIONS else "records"

# -----------------------------------------------------------------------------
# STAGES
# -----------------------------------------------------------------------------

def _build_stage(
        input_path: str,
        cfg: Dict[str, Any],
        diagnostics: Diagnostics,
        summary: Dict[str, Any],
) -> Forest:
    """Load flat records and fold them into a forest."""
    if looks_like_csv(input_path, cfg["csv_delimiter"]):
        records, disabled = read_records(
            input_path,
            path_column=cfg["path_column"],
            type_column=cfg["type_column"],
            category_column=cfg["category_column"],
            enabled_column=cfg["enabled_column"],
            delimiter=cfg["csv_delimiter"],
            include_disabled=cfg["include_disabled"],
        )
    else:
        records, disabled = read_path_list(input_path), 0

    result = build_tree(records, diagnostics)

    summary["records_total"] = result.records_total
    summary["records_skipped"] = result.records_skipped
    summary["records_disabled"] = disabled
    summary["type_counts"] = dict(sorted(result.type_counts.items()))
    return result.roots


def _parse_stage(input_path: str, diagnostics: Diagnostics, summary: Dict[str, Any]) -> Forest:
    """Parse an outline file into a forest."""
    result = parse_outline(read_text(input_path), diagnostics)
    summary["outline_lines_read"] = result.line_count
    return result.roots

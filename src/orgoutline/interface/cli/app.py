from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, saved configuration, command-line overrides), conversion and
result rendering.
"""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

from orgoutline.core.analysis.tree_renderer import render_forest
from orgoutline.core.pipeline.engine import run_conversion
from orgoutline.core.pipeline.validator import validate_config
from orgoutline.domain.config import get_default_config, load_config, save_config
from orgoutline.domain.pipeline_models import ConversionResult, ErrorKind
from orgoutline.infra.logs import configure_logging
from orgoutline.interface.cli import args as cli_args
from orgoutline.utils.i18n import i18n

logger = logging.getLogger(__name__)

# Summary counters printed after the outline, in this order
SUMMARY_KEYS = ("records_total", "records_skipped", "records_disabled", "outline_lines_read")

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on conversion failure, 2 on missing input,
        130 when interrupted.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console handler writes to stderr)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(log_level, log_file=args.log_file)

    # 3. Resolve base configuration
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 4. Merge command-line overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        if save_config(clean_conf):
            print(i18n.t("cli.status.config_saved"), file=sys.stderr)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 5. Pre-flight input verification
    if not clean_conf["input_path"]:
        print(f"ERROR: {i18n.t('cli.errors.missing_input')}", file=sys.stderr)
        return 2

    # 6. Conversion phase
    try:
        result = run_conversion(clean_conf, overwrite=args.overwrite, dry_run=args.dry_run)
    except KeyboardInterrupt:
        print(i18n.t("cli.status.interrupted"), file=sys.stderr)
        return 130

    if result.error_kind is ErrorKind.MISSING_INPUT:
        print(f"ERROR: {i18n.t('cli.errors.path_not_exist', path=result.input_path)}", file=sys.stderr)
        return 2

    # 7. Output rendering phase
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, print_tree=clean_conf["print_tree"])

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None overrides for known keys into the base.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ConversionResult, print_tree: bool = False) -> None:
    """
    Print the conversion result to the standard output.

    Without an output file the outline itself is printed so the command
    can be used in shell pipelines.

    Args:
        result: The conversion result to render.
        print_tree: Also print the ASCII preview.
    """
    if not result.ok:
        print(f"ERROR: {i18n.t('cli.errors.conversion_fail', error=result.error)}", file=sys.stderr)
        return

    if print_tree:
        print("\n".join(render_forest(result.roots)))

    if result.summary.get("dry_run"):
        print(i18n.t("cli.status.dry_run"))
    elif result.output_path:
        print(i18n.t("cli.status.success"))
        print(i18n.t("cli.status.output_file", path=result.output_path))
    elif not print_tree:
        print("\n".join(result.outline_lines))
        return

    print(i18n.t("cli.status.nodes", count=result.node_count))

    summary = result.summary
    for key in SUMMARY_KEYS:
        if key in summary:
            print(i18n.t(f"cli.summary.{key}", count=summary[key]))

    for kind, count in result.warning_counts.items():
        if count:
            print(i18n.t("cli.summary.warning", kind=kind, count=count))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from orgoutline.domain.config import INPUT_FORMATS
from orgoutline.infra.logs import get_default_log_path
from orgoutline.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the OrgOutline CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="orgoutline",
        description=i18n.t("app.description"),
    )

    # --- Path Management ---
    p.add_argument("-i", "--input", dest="input_path", default=None, help=i18n.t("cli.args.input"))
    p.add_argument("-o", "--output", dest="output_path", default=None, help=i18n.t("cli.args.output"))
    p.add_argument(
        "--from",
        dest="input_format",
        choices=INPUT_FORMATS,
        default=None,
        help=i18n.t("cli.args.format"),
    )

    # --- Record Columns ---
    p.add_argument("--path-column", dest="path_column", default=None, help=i18n.t("cli.args.path_column"))
    p.add_argument("--type-column", dest="type_column", default=None, help=i18n.t("cli.args.type_column"))
    p.add_argument(
        "--category-column", dest="category_column", default=None,
        help=i18n.t("cli.args.category_column"),
    )
    p.add_argument(
        "--enabled-column", dest="enabled_column", default=None,
        help=i18n.t("cli.args.enabled_column"),
    )
    p.add_argument("--delimiter", dest="csv_delimiter", default=None, help=i18n.t("cli.args.delimiter"))

    # --- Conversion Behaviour ---
    p.add_argument("--include-disabled", action="store_true", help=i18n.t("cli.args.include_disabled"))
    p.add_argument("--keep-dollar", action="store_true", help=i18n.t("cli.args.keep_dollar"))

    # --- Output Rendering ---
    p.add_argument("--print-tree", action="store_true", help=i18n.t("cli.args.print_tree"))
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))

    # --- Runtime Constraints and Safety ---
    p.add_argument("--overwrite", action="store_true", help=i18n.t("cli.args.overwrite"))
    p.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--save-config", action="store_true", help=i18n.t("cli.args.save"))
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const=get_default_log_path(),
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Value options are always present (None when not given); boolean flags
    only appear when set, so they never reset a saved preference.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "input_format": args.input_format,
        "path_column": args.path_column,
        "type_column": args.type_column,
        "category_column": args.category_column,
        "enabled_column": args.enabled_column,
        "csv_delimiter": args.csv_delimiter,
    }

    if args.include_disabled:
        overrides["include_disabled"] = True
    if args.keep_dollar:
        overrides["strip_computer_suffix"] = False
    if args.print_tree:
        overrides["print_tree"] = True

    return overrides

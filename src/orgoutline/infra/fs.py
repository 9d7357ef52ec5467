from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, persistent data directory
resolution and safe text persistence for generated outlines.
"""

import os
from typing import Iterable, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "OrgOutline"
UNIX_APP_DIR_NAME = ".orgoutline"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/OrgOutline
    - Linux/Mac: ~/.orgoutline (overridable with ORGOUTLINE_HOME)

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = os.environ.get("ORGOUTLINE_HOME", "")

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Value to use when the input is blank.

    Returns:
        str: Normalized absolute path, or '' when both inputs are blank.
    """
    p = (path or "").strip() or (fallback or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_lines(path: str, lines: Iterable[str]) -> int:
    """
    Stream text lines to a UTF-8 file, creating parent directories.

    Args:
        path: Destination file.
        lines: Lines without newline terminators.

    Returns:
        int: Number of lines written.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise OSError(f"Cannot create output directory '{parent}': {err}")

    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line + "\n")
            count += 1
    return count

from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory so tests never touch real settings.
3. Shared fixtures for records, outlines and configuration dictionaries.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from orgoutline.domain.record_models import FlatRecord  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_user_data_dir(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the persistent data directory at a throwaway location."""
    home = str(tmp_path_factory.mktemp("orgoutline_home"))
    monkeypatch.setenv("ORGOUTLINE_HOME", home)
    return home


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_records() -> List[FlatRecord]:
    """
    Return a small directory export covering every structural case.

    Includes a merged domain root, nested OUs, a CN container level, a
    computer account with its '$' suffix and an unmapped class.
    """
    return [
        FlatRecord("CN=Alice,OU=Sales,DC=corp,DC=com", "user"),
        FlatRecord("CN=WKS01$,OU=Workstations,OU=IT,DC=corp,DC=com", "computer"),
        FlatRecord("CN=Sales Team,OU=Sales,DC=corp,DC=com", "group"),
        FlatRecord("CN=HP-4F,CN=Printers,DC=corp,DC=com", "printQueue"),
        FlatRecord("CN=Widget,OU=IT,DC=corp,DC=com", "msExchWidget"),
    ]


@pytest.fixture
def sample_outline() -> str:
    """Return the outline produced for 'sample_records'."""
    return "\n".join([
        "- corp.com",
        "  - IT",
        "    - Widget [msExchWidget]",
        "    - Workstations",
        "      - WKS01 [computer]",
        "  - Printers",
        "    - HP-4F [printer]",
        "  - Sales",
        "    - Alice [user]",
        "    - Sales Team [group]",
    ])


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'orgoutline.domain.config',
    ensuring all keys expected by the pipeline are present.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # IO Paths
        "input_path": "/tmp/test_input.csv",
        "output_path": "/tmp/test_output.md",
        "input_format": "auto",

        # Record Columns
        "path_column": "DistinguishedName",
        "type_column": "ObjectClass",
        "category_column": "ObjectCategory",
        "enabled_column": "Enabled",
        "csv_delimiter": ",",

        # Conversion
        "include_disabled": False,
        "strip_computer_suffix": True,

        # Preview
        "print_tree": False,
    }

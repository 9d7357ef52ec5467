from __future__ import annotations

"""
Conversion Diagnostics.

Defines the non-fatal warning taxonomy shared by the conversion components
and the append-only sink used to collect and count warnings during a pass.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# WARNING TAXONOMY
# -----------------------------------------------------------------------------

class WarningKind(Enum):
    """Categories of recoverable problems found in a single record or line."""
    MALFORMED_PATH = "malformed_path"
    EMPTY_COMPONENT = "empty_component"
    UNMAPPED_TYPE = "unmapped_type"
    AMBIGUOUS_INDENT = "ambiguous_indent"


@dataclass(frozen=True)
class ConversionWarning:
    """
    Encapsulates one recoverable conversion problem.

    Attributes:
        kind: Warning category.
        source: Offending path string or 'line N' identifier.
        message: Human readable description.
    """
    kind: WarningKind
    source: str
    message: str

# -----------------------------------------------------------------------------
# WARNING SINK
# -----------------------------------------------------------------------------

class Diagnostics:
    """
    Append-only collector of conversion warnings.

    Components only ever write to the sink; callers read the accumulated
    warnings and per-category counts once the pass completes.
    """

    def __init__(self) -> None:
        self._warnings: List[ConversionWarning] = []
        self._tally: Counter = Counter()

    def warn(self, kind: WarningKind, source: str, message: str) -> None:
        """
        Record a warning and mirror it to the module logger.

        Args:
            kind: Warning category.
            source: Offending path or line identifier.
            message: Description of the problem.
        """
        self._warnings.append(ConversionWarning(kind=kind, source=source, message=message))
        self._tally[kind] += 1
        logger.warning(f"[{kind.value}] {message} ({source})")

    @property
    def warnings(self) -> Tuple[ConversionWarning, ...]:
        return tuple(self._warnings)

    def count(self, kind: WarningKind) -> int:
        return self._tally[kind]

    def counts(self) -> Dict[str, int]:
        """
        Aggregate the recorded warnings per category.

        Returns:
            Dict[str, int]: Count for every WarningKind, zero-filled.
        """
        return {kind.value: self._tally[kind] for kind in WarningKind}

    def __len__(self) -> int:
        return len(self._warnings)

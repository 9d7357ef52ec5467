from __future__ import annotations

"""
Object Type Normalizer.

Maps raw directory class tokens onto the closed NodeKind taxonomy. The
mapping is expressed as data: an exact-match table followed by an ordered
list of (predicate, kind) fallback rules evaluated in priority order.
Intermediate path levels never consult these tables; their kind follows
the label family of the segment.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from orgoutline.domain.diagnostics import Diagnostics, WarningKind
from orgoutline.domain.tree_models import ComponentKind, NodeKind

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# MAPPING DATA
# -----------------------------------------------------------------------------

# Keys are compared lower-cased
EXACT_TYPES: Dict[str, NodeKind] = {
    "user": NodeKind.USER,
    "computer": NodeKind.COMPUTER,
    "group": NodeKind.GROUP,
    "contact": NodeKind.CONTACT,
    "printqueue": NodeKind.PRINTER,
    "volume": NodeKind.SHARE,
    "grouppolicycontainer": NodeKind.POLICY,
    "organizationalunit": NodeKind.ORGANIZATIONAL_UNIT,
    "container": NodeKind.CONTAINER,
    "domain": NodeKind.DOMAIN,
    "domaindns": NodeKind.DOMAIN,
    "msds-managedserviceaccount": NodeKind.COMPUTER,
    "msds-groupmanagedserviceaccount": NodeKind.COMPUTER,
    # Object categories differing from their class name
    "person": NodeKind.USER,
    "print-queue": NodeKind.PRINTER,
    "group-policy-container": NodeKind.POLICY,
    "organizational-unit": NodeKind.ORGANIZATIONAL_UNIT,
    "domain-dns": NodeKind.DOMAIN,
}

# Already-normalized kind names and markers map onto themselves
for _kind in NodeKind:
    if _kind is not NodeKind.UNKNOWN:
        EXACT_TYPES.setdefault(_kind.value.lower(), _kind)

STRUCTURAL_KINDS: Dict[ComponentKind, NodeKind] = {
    ComponentKind.DOMAIN_LABEL: NodeKind.DOMAIN,
    ComponentKind.ORGANIZATIONAL_UNIT: NodeKind.ORGANIZATIONAL_UNIT,
    ComponentKind.COMMON_NAME: NodeKind.CONTAINER,
}

Rule = Tuple[Callable[[str], bool], NodeKind]

# Wildcard fallbacks, evaluated in order against the lower-cased token
RULES: List[Rule] = [
    (lambda token: "serviceaccount" in token, NodeKind.COMPUTER),
]

SUBSTRING_RULES: List[Rule] = [
    (lambda token: "computer" in token, NodeKind.COMPUTER),
    (lambda token: "user" in token, NodeKind.USER),
    (lambda token: "group" in token, NodeKind.GROUP),
]

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NormalizedType:
    """
    Outcome of a type normalization.

    Attributes:
        kind: Resolved semantic kind.
        display: Marker text to show; the raw token for unknown kinds.
    """
    kind: NodeKind
    display: str = ""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def normalize_type(
        raw_type: str,
        *,
        category_hint: str = "",
        leaf: bool = True,
        component_kind: Optional[ComponentKind] = None,
        diagnostics: Optional[Diagnostics] = None,
) -> NormalizedType:
    """
    Resolve a raw class token into a NodeKind.

    Args:
        raw_type: Raw class token reported for the object.
        category_hint: Optional secondary classification (object category
            DN or bare name), consulted only when the token is ambiguous.
        leaf: False for levels synthesized from path structure alone.
        component_kind: Label family of the level; required in structural mode.
        diagnostics: Optional sink for unmapped-type warnings.

    Returns:
        NormalizedType: Kind plus the display text for unknown kinds.
    """
    if not leaf:
        return structural_kind(component_kind)

    token = (raw_type or "").strip()
    if not token:
        return NormalizedType(NodeKind.UNKNOWN, "unknown")

    key = token.lower()
    if key in EXACT_TYPES:
        return _resolved(EXACT_TYPES[key])

    for predicate, kind in RULES:
        if predicate(key):
            return _resolved(kind)

    hinted = _kind_from_hint(category_hint)
    if hinted is not None:
        return _resolved(hinted)

    for predicate, kind in SUBSTRING_RULES:
        if predicate(key):
            return _resolved(kind)

    msg = f"Unmapped object type '{token}' kept as unknown"
    if diagnostics is not None:
        diagnostics.warn(WarningKind.UNMAPPED_TYPE, token, msg)
    else:
        logger.warning(msg)
    return NormalizedType(NodeKind.UNKNOWN, token)


def structural_kind(component_kind: Optional[ComponentKind]) -> NormalizedType:
    """
    Kind of an intermediate level inferred purely from its label family.

    Args:
        component_kind: Label family of the path component.

    Returns:
        NormalizedType: Domain, OrganizationalUnit or Container.
    """
    if component_kind is None:
        raise ValueError("Structural normalization requires a component kind")
    return _resolved(STRUCTURAL_KINDS[component_kind])


def kind_from_marker(marker: str) -> NormalizedType:
    """
    Inverse of the outline marker table.

    Args:
        marker: Bracket text read from an outline line.

    Returns:
        NormalizedType: Matching kind, or Unknown with the text verbatim.
    """
    text = marker.strip()
    kind = _MARKER_KINDS.get(text.lower())
    if kind is None:
        return NormalizedType(NodeKind.UNKNOWN, text)
    return _resolved(kind)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

_MARKER_KINDS: Dict[str, NodeKind] = {
    "user": NodeKind.USER,
    "computer": NodeKind.COMPUTER,
    "group": NodeKind.GROUP,
    "contact": NodeKind.CONTACT,
    "printer": NodeKind.PRINTER,
    "share": NodeKind.SHARE,
    "policy": NodeKind.POLICY,
    "container": NodeKind.CONTAINER,
}


def _resolved(kind: NodeKind) -> NormalizedType:
    return NormalizedType(kind, kind.marker or "")


def _kind_from_hint(category_hint: str) -> Optional[NodeKind]:
    """Resolve an object category ('CN=Person,CN=Schema,...' or 'Person')."""
    hint = (category_hint or "").strip()
    if not hint:
        return None
    first = hint.split(",", 1)[0]
    _, sep, value = first.partition("=")
    name = value if sep else first
    return EXACT_TYPES.get(name.strip().lower())

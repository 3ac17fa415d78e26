"""
Permission set normalisation and capability lookup (pure, no I/O).

Every resolver in the back-office layer receives raw permission codes from
the auth collaborator and must degrade to "no capability" for anything it
cannot understand.  These helpers hold that fail-closed behaviour in one
place.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def to_permission_set(permission_codes: Any = None) -> frozenset[str]:
    """Normalise raw permission codes into a frozenset.

    Anything that is not a list/tuple/set yields an empty set (a bare
    string is not a collection of codes).  Elements are stringified and
    stripped; ``None`` and blank codes are dropped.
    """
    if not isinstance(permission_codes, _SEQUENCE_TYPES):
        return frozenset()
    codes = set()
    for code in permission_codes:
        if code is None:
            continue
        text = str(code).strip()
        if text:
            codes.add(text)
    return frozenset(codes)


def resolve_capabilities(
    table: Mapping[str, str],
    permission_codes: Any = None,
) -> dict[str, bool]:
    """Evaluate a capability -> permission code table against a permission set."""
    permission_set = to_permission_set(permission_codes)
    return {
        capability: code in permission_set
        for capability, code in table.items()
    }


def normalize_status(value: Any) -> str:
    """Upper-case, stripped status code; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value).strip().upper()


def normalize_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_positive_int(value: Any) -> int | None:
    """Return ``value`` as a positive int, or None.

    Accepts ints and integral numeric strings ("12", "12.0"); booleans are
    rejected.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    try:
        parsed = float(value) if isinstance(value, float) else float(str(value).strip())
    except ValueError:
        return None
    # nan and inf are never integral
    return int(parsed) if parsed.is_integer() and parsed > 0 else None


_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")


def snake_to_camel(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


def gate_flag(gates: Any, name: str) -> bool:
    """Read one boolean capability from a gate object or a plain mapping.

    Mappings may use the snake_case field name or its camelCase JSON form
    (``can_activate_contract`` / ``canActivateContract``).  Missing flags
    and ``None`` gates read as False.
    """
    if gates is None:
        return False
    if isinstance(gates, Mapping):
        if name in gates:
            return bool(gates[name])
        return bool(gates.get(snake_to_camel(name), False))
    return bool(getattr(gates, name, False))

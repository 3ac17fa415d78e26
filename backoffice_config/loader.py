"""
Lifecycle Loader (``backoffice_config.loader``).

Responsibility
--------------
Loads the lifecycle YAML file and parses each entry into the frozen
``backoffice_kernel.domain.lifecycle`` dataclasses.  Services never call
this directly; the runtime entry point is
``backoffice_config.get_lifecycle_registry()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing or mistyped required keys  -> ``LifecycleDefinitionError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from backoffice_kernel.domain.lifecycle import (
    LifecycleDefinition,
    StatusDefinition,
    TransitionRule,
)
from backoffice_kernel.domain.permissions import normalize_status
from backoffice_kernel.exceptions import LifecycleDefinitionError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        LifecycleDefinitionError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise LifecycleDefinitionError(str(path), "top level must be a mapping")
    return data


def _require(entity_type: str, data: dict[str, Any], key: str) -> Any:
    if key not in data or data[key] in (None, ""):
        raise LifecycleDefinitionError(entity_type, f"missing required key {key!r}")
    return data[key]


def _as_list(entity_type: str, value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise LifecycleDefinitionError(entity_type, f"{what} must be a list")
    return value


def parse_status(entity_type: str, data: Any) -> StatusDefinition:
    """Parse one ``statuses`` entry."""
    if not isinstance(data, dict):
        raise LifecycleDefinitionError(entity_type, "status entries must be mappings")
    return StatusDefinition(
        code=normalize_status(_require(entity_type, data, "code")),
        label=str(_require(entity_type, data, "label")),
        description=str(data.get("description") or ""),
    )


def parse_transition(entity_type: str, action: str, data: Any) -> TransitionRule:
    """Parse one ``transitions`` entry keyed by action name."""
    if not isinstance(data, dict):
        raise LifecycleDefinitionError(
            entity_type, f"transition {action!r} must be a mapping"
        )
    from_statuses = _as_list(
        entity_type, _require(entity_type, data, "from"), f"transition {action!r} from"
    )
    return TransitionRule(
        action=str(action),
        from_statuses=frozenset(normalize_status(code) for code in from_statuses),
        to_status=normalize_status(_require(entity_type, data, "to")),
        label=str(data.get("label") or action),
    )


def parse_lifecycle_definition(entity_type: str, data: Any) -> LifecycleDefinition:
    """
    Parse a ``LifecycleDefinition`` from a dict.

    Preconditions:
        - ``data`` contains ``label``, a non-empty ``statuses`` list, and a
          ``transitions`` mapping (may be empty).
    Postconditions:
        - Status order and transition order follow the YAML order.
    Raises:
        LifecycleDefinitionError: on missing keys or wrong shapes.
    """
    if not isinstance(data, dict):
        raise LifecycleDefinitionError(entity_type, "definition must be a mapping")

    statuses = tuple(
        parse_status(entity_type, row)
        for row in _as_list(entity_type, _require(entity_type, data, "statuses"), "statuses")
    )

    transitions_raw = data.get("transitions") or {}
    if not isinstance(transitions_raw, dict):
        raise LifecycleDefinitionError(entity_type, "transitions must be a mapping")
    transitions = tuple(
        parse_transition(entity_type, action, row)
        for action, row in transitions_raw.items()
    )

    terminal = _as_list(
        entity_type, data.get("terminal_statuses") or [], "terminal_statuses"
    )

    return LifecycleDefinition(
        id=str(data.get("id") or entity_type),
        label=str(_require(entity_type, data, "label")),
        statuses=statuses,
        transitions=transitions,
        terminal_statuses=tuple(normalize_status(code) for code in terminal),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()

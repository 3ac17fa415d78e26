"""
Lifecycle definition validation (``backoffice_config.validator``).

Structural checks run once when the registry is built.  A definition that
fails here never reaches the resolvers, so the resolvers can treat every
loaded table as well-formed.
"""

from __future__ import annotations

from collections.abc import Mapping

from backoffice_kernel.domain.lifecycle import LifecycleDefinition
from backoffice_kernel.exceptions import LifecycleDefinitionError


def validate_lifecycle_definition(key: str, definition: LifecycleDefinition) -> None:
    """Raise ``LifecycleDefinitionError`` if the definition is inconsistent."""
    if definition.id != key:
        raise LifecycleDefinitionError(
            key, f"id {definition.id!r} does not match its key"
        )
    if not definition.statuses:
        raise LifecycleDefinitionError(key, "at least one status is required")

    codes = definition.status_codes
    if any(not code for code in codes):
        raise LifecycleDefinitionError(key, "status codes must be non-empty")
    duplicates = sorted({code for code in codes if codes.count(code) > 1})
    if duplicates:
        raise LifecycleDefinitionError(key, f"duplicate status codes {duplicates}")

    known = set(codes)
    for terminal in definition.terminal_statuses:
        if terminal not in known:
            raise LifecycleDefinitionError(
                key, f"terminal status {terminal!r} is not a declared status"
            )

    seen_actions: set[str] = set()
    for transition in definition.transitions:
        if transition.action in seen_actions:
            raise LifecycleDefinitionError(
                key, f"duplicate action {transition.action!r}"
            )
        seen_actions.add(transition.action)
        if not transition.from_statuses:
            raise LifecycleDefinitionError(
                key, f"action {transition.action!r} has no source statuses"
            )
        unknown = sorted(transition.from_statuses - known)
        if unknown:
            raise LifecycleDefinitionError(
                key,
                f"action {transition.action!r} references unknown source statuses {unknown}",
            )
        if transition.to_status not in known:
            raise LifecycleDefinitionError(
                key,
                f"action {transition.action!r} targets unknown status {transition.to_status!r}",
            )


def validate_lifecycle_definitions(
    definitions: Mapping[str, LifecycleDefinition],
) -> None:
    if not definitions:
        raise LifecycleDefinitionError("*", "no lifecycle definitions found")
    for key, definition in definitions.items():
        validate_lifecycle_definition(key, definition)

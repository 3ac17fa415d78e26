"""
Pure domain layer.

Value objects and normalisation helpers with NO dependencies on
configuration files, services, or I/O.  All objects are immutable and
deterministic.
"""

from backoffice_kernel.domain.lifecycle import (
    ActionState,
    AllowedAction,
    LifecycleDefinition,
    StatusDefinition,
    StatusMeta,
    TimelineState,
    TimelineStep,
    TransitionRule,
    missing_permission_reason,
)
from backoffice_kernel.domain.permissions import (
    gate_flag,
    normalize_optional_text,
    normalize_status,
    resolve_capabilities,
    to_permission_set,
    to_positive_int,
)

__all__ = [
    "ActionState",
    "AllowedAction",
    "LifecycleDefinition",
    "StatusDefinition",
    "StatusMeta",
    "TimelineState",
    "TimelineStep",
    "TransitionRule",
    "gate_flag",
    "missing_permission_reason",
    "normalize_optional_text",
    "normalize_status",
    "resolve_capabilities",
    "to_permission_set",
    "to_positive_int",
]

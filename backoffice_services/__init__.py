"""
backoffice_services -- lifecycle lookups and action enablement.

Stateless services over the lifecycle registry.  Nothing here performs
I/O beyond the one-time registry load in ``backoffice_config``.
"""

from backoffice_services.lifecycle_rules import (
    LIFECYCLE_ENTITY_TYPES,
    assert_lifecycle_transition,
    build_lifecycle_timeline_steps,
    can_transition,
    get_lifecycle_allowed_actions,
    get_lifecycle_definition,
    get_lifecycle_status_meta,
)
from backoffice_services.permission_gates import (
    ACTION_PERMISSIONS,
    get_permission_for_action,
    resolve_action_states,
)

__all__ = [
    "ACTION_PERMISSIONS",
    "LIFECYCLE_ENTITY_TYPES",
    "assert_lifecycle_transition",
    "build_lifecycle_timeline_steps",
    "can_transition",
    "get_lifecycle_allowed_actions",
    "get_lifecycle_definition",
    "get_lifecycle_status_meta",
    "get_permission_for_action",
    "resolve_action_states",
]

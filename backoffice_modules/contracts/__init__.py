"""
backoffice_modules.contracts
============================

Responsibility:
    Permission gates and lifecycle action states for customer and vendor
    contracts (activation, suspension, closing, cancellation, document
    links, billing and revenue-recognition generation).

Architecture:
    Module layer.  May import from backoffice_kernel and
    backoffice_services.  MUST NOT be imported by either.
"""

from backoffice_modules.contracts.gates import (
    CAPABILITY_PERMISSIONS,
    CONTRACT_STATUSES,
    LIFECYCLE_ACTION_GATES,
    ContractPermissionGates,
    can_adjust_contract_link,
    can_transition_contract_status,
    can_unlink_contract_link,
    get_lifecycle_action_states,
    resolve_contracts_permission_gates,
    resolve_gates,
)

__all__ = [
    "CAPABILITY_PERMISSIONS",
    "CONTRACT_STATUSES",
    "LIFECYCLE_ACTION_GATES",
    "ContractPermissionGates",
    "can_adjust_contract_link",
    "can_transition_contract_status",
    "can_unlink_contract_link",
    "get_lifecycle_action_states",
    "resolve_contracts_permission_gates",
    "resolve_gates",
]

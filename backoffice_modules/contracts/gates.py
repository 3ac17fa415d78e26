"""
backoffice_modules.contracts.gates
==================================

Responsibility:
    Capability flags for the contracts screen, contract lifecycle action
    states, and the link adjust/unlink gates.

Architecture:
    Module layer.  Lifecycle validity comes from
    ``backoffice_services.lifecycle_rules`` (the ``contract`` table), the
    permission code per action from ``backoffice_services.permission_gates``.

Invariants enforced:
    - Every gate field is a plain membership test or a named derivation
      declared below; nothing else grants a capability.
    - ``should_fetch_documents`` requires ``contract.link_document``.
      ``cari.doc.read`` alone is deliberately insufficient.
    - Resolvers never raise; malformed input means no capability.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from backoffice_kernel.domain.lifecycle import ActionState, missing_permission_reason
from backoffice_kernel.domain.permissions import (
    gate_flag,
    resolve_capabilities,
    to_positive_int,
)
from backoffice_services.lifecycle_rules import can_transition, get_lifecycle_definition
from backoffice_services.permission_gates import evaluate_action

CONTRACT_ENTITY_TYPE = "contract"
CONTRACT_STATUSES: tuple[str, ...] = get_lifecycle_definition(CONTRACT_ENTITY_TYPE).status_codes
LINK_DOCUMENT_PERMISSION = "contract.link_document"

# capability -> permission code
CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read_contracts_route": "contract.read",
    "can_upsert_contract": "contract.upsert",
    "can_activate_contract": "contract.activate",
    "can_suspend_contract": "contract.suspend",
    "can_close_contract": "contract.close",
    "can_cancel_contract": "contract.cancel",
    "can_link_document": LINK_DOCUMENT_PERMISSION,
    "can_generate_billing": LINK_DOCUMENT_PERMISSION,
    "can_generate_revrec": "revenue.schedule.generate",
    "can_read_counterparty_picker": "cari.card.read",
    "can_read_account_picker": "gl.account.read",
    "can_read_document_picker": LINK_DOCUMENT_PERMISSION,
})

# lifecycle action -> gate field that grants it
LIFECYCLE_ACTION_GATES: Mapping[str, str] = MappingProxyType({
    "activate": "can_activate_contract",
    "suspend": "can_suspend_contract",
    "close": "can_close_contract",
    "cancel": "can_cancel_contract",
})


@dataclass(frozen=True)
class ContractPermissionGates:
    """Capability flags for the contracts screen.

    ``should_fetch_*`` decide whether picker data is loaded at all; they
    mirror the matching ``can_read_*`` picker gate.
    """

    can_read_contracts_route: bool = False
    can_upsert_contract: bool = False
    can_activate_contract: bool = False
    can_suspend_contract: bool = False
    can_close_contract: bool = False
    can_cancel_contract: bool = False
    can_link_document: bool = False
    can_generate_billing: bool = False
    can_generate_revrec: bool = False
    can_read_counterparty_picker: bool = False
    can_read_account_picker: bool = False
    can_read_document_picker: bool = False
    should_fetch_counterparties: bool = False
    should_fetch_accounts: bool = False
    should_fetch_documents: bool = False


def resolve_contracts_permission_gates(permission_codes: Any = None) -> ContractPermissionGates:
    """Compute contract capability flags from the actor's permission codes."""
    flags = resolve_capabilities(CAPABILITY_PERMISSIONS, permission_codes)
    return ContractPermissionGates(
        **flags,
        should_fetch_counterparties=flags["can_read_counterparty_picker"],
        should_fetch_accounts=flags["can_read_account_picker"],
        should_fetch_documents=flags["can_read_document_picker"],
    )


resolve_gates = resolve_contracts_permission_gates


def can_transition_contract_status(status: Any, action: Any) -> bool:
    """True if the contract ``action`` is valid from ``status``."""
    return can_transition(CONTRACT_ENTITY_TYPE, status, action)


def get_lifecycle_action_states(
    status: Any,
    gates: ContractPermissionGates | Mapping[str, Any] | None = None,
) -> dict[str, ActionState]:
    """
    Enablement of activate/suspend/close/cancel for a contract.

    ``allowed`` needs both the permission gate and a valid transition from
    ``status``.  ``reason`` names the missing permission, or is None when
    the gate is granted.
    """
    return {
        action: evaluate_action(
            CONTRACT_ENTITY_TYPE,
            status,
            action,
            has_permission=gate_flag(gates, gate_name),
        )
        for action, gate_name in LIFECYCLE_ACTION_GATES.items()
    }


def _check_link_row(link_row: Any, gates: Any) -> ActionState:
    if not gate_flag(gates, "can_link_document"):
        return ActionState(
            allowed=False,
            reason=missing_permission_reason(LINK_DOCUMENT_PERMISSION),
        )

    row = link_row if isinstance(link_row, Mapping) else {}
    raw_id = row.get("linkId")
    if raw_id is None:
        raw_id = row.get("link_id")
    if raw_id is None:
        raw_id = row.get("id")
    if not to_positive_int(raw_id):
        return ActionState(allowed=False, reason="linkId is missing")

    if row.get("isUnlinked") or row.get("is_unlinked"):
        return ActionState(allowed=False, reason="Link is already unlinked")

    return ActionState(allowed=True, reason=None)


def can_adjust_contract_link(link_row: Any, gates: Any = None) -> ActionState:
    """Whether a linked document's amounts may be adjusted."""
    return _check_link_row(link_row, gates)


def can_unlink_contract_link(link_row: Any, gates: Any = None) -> ActionState:
    """Whether a linked document may be unlinked."""
    return _check_link_row(link_row, gates)

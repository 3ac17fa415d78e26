"""
backoffice_services.permission_gates -- Lifecycle action enablement.

Responsibility:
    Combine the actor's permission codes with the lifecycle transition
    table into per-action ``ActionState`` values.  An action is enabled only
    when BOTH the actor holds the action's permission AND the action is
    valid from the entity's current status.

Architecture position:
    Services layer.  Consumes ``lifecycle_rules`` for transition validity.
    Called by the module gate resolvers and by page view-models.

Invariants:
    - Resolver holds no state; callers re-evaluate whenever the permission
      set or the status changes.
    - Fail closed: unknown entity types, actions without a mapped
      permission, and malformed permission input all yield "not allowed".
    - ``reason`` is None when the permission is held, otherwise the fixed
      ``"Missing permission: <code>"`` text.  A held permission with an
      invalid source status reports ``allowed=False`` with no reason; the
      status table explains that case.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from backoffice_kernel.domain.lifecycle import ActionState, missing_permission_reason
from backoffice_kernel.domain.permissions import to_permission_set
from backoffice_services.lifecycle_rules import can_transition, get_lifecycle_definition

# (entity_type, action) -> permission code required to request the transition
ACTION_PERMISSIONS: Mapping[tuple[str, str], str] = MappingProxyType({
    # Contracts
    ("contract", "activate"): "contract.activate",
    ("contract", "suspend"): "contract.suspend",
    ("contract", "close"): "contract.close",
    ("contract", "cancel"): "contract.cancel",
    # Cari documents
    ("cariDocument", "post"): "cari.doc.post",
    ("cariDocument", "settlePartial"): "cari.settlement.apply",
    ("cariDocument", "settleFull"): "cari.settlement.apply",
    ("cariDocument", "cancel"): "cari.doc.update",
    ("cariDocument", "reverse"): "cari.doc.reverse",
    # Cash
    ("cashTransaction", "submit"): "cash.txn.create",
    ("cashTransaction", "approve"): "cash.txn.post",
    ("cashTransaction", "post"): "cash.txn.post",
    ("cashTransaction", "cancel"): "cash.txn.cancel",
    ("cashTransaction", "reverse"): "cash.txn.reverse",
    ("cashSession", "close"): "cash.session.close",
    # Payroll
    ("payrollRun", "import"): "payroll.runs.import",
    ("payrollRun", "review"): "payroll.runs.review",
    ("payrollRun", "finalize"): "payroll.runs.finalize",
    ("payrollClose", "prepare"): "payroll.close.prepare",
    ("payrollClose", "request"): "payroll.close.request",
    ("payrollClose", "approveClose"): "payroll.close.approve",
    ("payrollClose", "reopen"): "payroll.close.reopen",
})


def get_permission_for_action(entity_type: str, action: str) -> str | None:
    """Return the permission required for this lifecycle action, or None if not mapped."""
    return ACTION_PERMISSIONS.get((entity_type, action))


def evaluate_action(
    entity_type: str,
    status: Any,
    action: str,
    has_permission: bool,
) -> ActionState:
    """Dual-gate one action: permission held AND transition valid."""
    permission = get_permission_for_action(entity_type, action)
    if permission is None:
        return ActionState(allowed=False, reason=f"No permission mapped for action: {action}")
    if not has_permission:
        return ActionState(allowed=False, reason=missing_permission_reason(permission))
    return ActionState(allowed=can_transition(entity_type, status, action), reason=None)


def resolve_action_states(
    entity_type: Any,
    status: Any,
    permission_codes: Any = None,
) -> dict[str, ActionState]:
    """
    Action states for every action of ``entity_type``, in table order.

    Args:
        entity_type: Lifecycle key (``contract``, ``cashSession``, ...).
        status: Current entity status (any case).
        permission_codes: Codes held by the actor (from the auth collaborator).

    Returns:
        ``{action: ActionState}``; empty for an unknown entity type.
    """
    definition = get_lifecycle_definition(entity_type)
    if definition is None:
        return {}
    permission_set = to_permission_set(permission_codes)
    states = {}
    for transition in definition.transitions:
        permission = get_permission_for_action(definition.id, transition.action)
        states[transition.action] = evaluate_action(
            definition.id,
            status,
            transition.action,
            has_permission=permission is not None and permission in permission_set,
        )
    return states

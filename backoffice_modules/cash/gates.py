"""
backoffice_modules.cash.gates
=============================

Responsibility:
    Capability flags for the cash sessions and cash transactions screens,
    plus lifecycle action states for both entity kinds.

Invariants enforced:
    - Closing a session needs ``cash.session.close`` AND an OPEN session.
    - Cari and GL pickers on the transaction screen are fetched only when
      their read permission is held.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from backoffice_kernel.domain.lifecycle import ActionState
from backoffice_kernel.domain.permissions import resolve_capabilities
from backoffice_services.permission_gates import resolve_action_states

CASH_SESSION_ENTITY_TYPE = "cashSession"
CASH_TRANSACTION_ENTITY_TYPE = "cashTransaction"

SESSION_CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read_registers": "cash.register.read",
    "can_open_session": "cash.session.open",
    "can_close_session": "cash.session.close",
    "can_approve_variance": "cash.variance.approve",
})

TRANSACTION_CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read": "cash.txn.read",
    "can_create": "cash.txn.create",
    "can_post": "cash.txn.post",
    "can_cancel": "cash.txn.cancel",
    "can_reverse": "cash.txn.reverse",
    "can_override_post": "cash.override.post",
    "can_read_accounts": "gl.account.read",
    "can_read_cari_cards": "cari.card.read",
    "can_read_cari_reports": "cari.report.read",
    "can_apply_cari": "cari.settlement.apply",
})


@dataclass(frozen=True)
class CashSessionPermissionGates:
    can_read_registers: bool = False
    can_open_session: bool = False
    can_close_session: bool = False
    can_approve_variance: bool = False


@dataclass(frozen=True)
class CashTransactionPermissionGates:
    can_read: bool = False
    can_create: bool = False
    can_post: bool = False
    can_cancel: bool = False
    can_reverse: bool = False
    can_override_post: bool = False
    can_read_accounts: bool = False
    can_read_cari_cards: bool = False
    can_read_cari_reports: bool = False
    can_apply_cari: bool = False
    should_fetch_accounts: bool = False
    should_fetch_counterparties: bool = False


def resolve_cash_session_permission_gates(
    permission_codes: Any = None,
) -> CashSessionPermissionGates:
    return CashSessionPermissionGates(
        **resolve_capabilities(SESSION_CAPABILITY_PERMISSIONS, permission_codes)
    )


def resolve_cash_transaction_permission_gates(
    permission_codes: Any = None,
) -> CashTransactionPermissionGates:
    flags = resolve_capabilities(TRANSACTION_CAPABILITY_PERMISSIONS, permission_codes)
    return CashTransactionPermissionGates(
        **flags,
        should_fetch_accounts=flags["can_read_accounts"],
        should_fetch_counterparties=flags["can_read_cari_cards"],
    )


def resolve_cash_session_action_states(
    status: Any, permission_codes: Any = None
) -> dict[str, ActionState]:
    return resolve_action_states(CASH_SESSION_ENTITY_TYPE, status, permission_codes)


def resolve_cash_transaction_action_states(
    status: Any, permission_codes: Any = None
) -> dict[str, ActionState]:
    return resolve_action_states(CASH_TRANSACTION_ENTITY_TYPE, status, permission_codes)

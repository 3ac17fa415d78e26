"""
backoffice_modules.cash
=======================

Responsibility:
    Permission gates and lifecycle action states for cash register
    sessions and cash transactions.
"""

from backoffice_modules.cash.gates import (
    SESSION_CAPABILITY_PERMISSIONS,
    TRANSACTION_CAPABILITY_PERMISSIONS,
    CashSessionPermissionGates,
    CashTransactionPermissionGates,
    resolve_cash_session_action_states,
    resolve_cash_session_permission_gates,
    resolve_cash_transaction_action_states,
    resolve_cash_transaction_permission_gates,
)

__all__ = [
    "SESSION_CAPABILITY_PERMISSIONS",
    "TRANSACTION_CAPABILITY_PERMISSIONS",
    "CashSessionPermissionGates",
    "CashTransactionPermissionGates",
    "resolve_cash_session_action_states",
    "resolve_cash_session_permission_gates",
    "resolve_cash_transaction_action_states",
    "resolve_cash_transaction_permission_gates",
]

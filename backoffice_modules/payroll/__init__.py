"""
backoffice_modules.payroll
==========================

Responsibility:
    Permission gates and lifecycle action states for payroll runs and
    payroll period close.
"""

from backoffice_modules.payroll.gates import (
    CLOSE_CAPABILITY_PERMISSIONS,
    RUN_CAPABILITY_PERMISSIONS,
    PayrollClosePermissionGates,
    PayrollRunPermissionGates,
    resolve_payroll_close_action_states,
    resolve_payroll_close_permission_gates,
    resolve_payroll_run_action_states,
    resolve_payroll_run_permission_gates,
)

__all__ = [
    "CLOSE_CAPABILITY_PERMISSIONS",
    "RUN_CAPABILITY_PERMISSIONS",
    "PayrollClosePermissionGates",
    "PayrollRunPermissionGates",
    "resolve_payroll_close_action_states",
    "resolve_payroll_close_permission_gates",
    "resolve_payroll_run_action_states",
    "resolve_payroll_run_permission_gates",
]

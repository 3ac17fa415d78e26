"""Payroll run and payroll close permission gates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from backoffice_kernel.domain.lifecycle import ActionState
from backoffice_kernel.domain.permissions import resolve_capabilities
from backoffice_services.permission_gates import resolve_action_states

PAYROLL_RUN_ENTITY_TYPE = "payrollRun"
PAYROLL_CLOSE_ENTITY_TYPE = "payrollClose"

RUN_CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read": "payroll.runs.read",
    "can_import": "payroll.runs.import",
    "can_review": "payroll.runs.review",
    "can_finalize": "payroll.runs.finalize",
})

CLOSE_CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read": "payroll.close.read",
    "can_prepare": "payroll.close.prepare",
    "can_request": "payroll.close.request",
    "can_approve": "payroll.close.approve",
    "can_reopen": "payroll.close.reopen",
})


@dataclass(frozen=True)
class PayrollRunPermissionGates:
    can_read: bool = False
    can_import: bool = False
    can_review: bool = False
    can_finalize: bool = False


@dataclass(frozen=True)
class PayrollClosePermissionGates:
    can_read: bool = False
    can_prepare: bool = False
    can_request: bool = False
    can_approve: bool = False
    can_reopen: bool = False


def resolve_payroll_run_permission_gates(
    permission_codes: Any = None,
) -> PayrollRunPermissionGates:
    return PayrollRunPermissionGates(
        **resolve_capabilities(RUN_CAPABILITY_PERMISSIONS, permission_codes)
    )


def resolve_payroll_close_permission_gates(
    permission_codes: Any = None,
) -> PayrollClosePermissionGates:
    return PayrollClosePermissionGates(
        **resolve_capabilities(CLOSE_CAPABILITY_PERMISSIONS, permission_codes)
    )


def resolve_payroll_run_action_states(
    status: Any, permission_codes: Any = None
) -> dict[str, ActionState]:
    return resolve_action_states(PAYROLL_RUN_ENTITY_TYPE, status, permission_codes)


def resolve_payroll_close_action_states(
    status: Any, permission_codes: Any = None
) -> dict[str, ActionState]:
    return resolve_action_states(PAYROLL_CLOSE_ENTITY_TYPE, status, permission_codes)

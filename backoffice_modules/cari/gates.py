"""Cari (AR/AP counterparty) permission gates.

Counterparty form account pickers and the cari documents screen.  Document
lifecycle actions (post, settle, cancel, reverse) resolve through
``resolve_cari_document_action_states``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from backoffice_kernel.domain.lifecycle import ActionState
from backoffice_kernel.domain.permissions import resolve_capabilities
from backoffice_services.permission_gates import resolve_action_states

CARI_DOCUMENT_ENTITY_TYPE = "cariDocument"

ACCOUNT_PICKER_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read_gl_accounts": "gl.account.read",
})

DOCUMENT_CAPABILITY_PERMISSIONS: Mapping[str, str] = MappingProxyType({
    "can_read": "cari.doc.read",
    "can_create": "cari.doc.create",
    "can_update": "cari.doc.update",
    "can_post": "cari.doc.post",
    "can_reverse": "cari.doc.reverse",
    "can_fx_override": "cari.fx.override",
    "can_read_reports": "cari.report.read",
    "can_apply_settlement": "cari.settlement.apply",
})


@dataclass(frozen=True)
class CounterpartyAccountPickerGates:
    can_read_gl_accounts: bool = False
    should_fetch_gl_accounts: bool = False
    show_account_pickers: bool = False


@dataclass(frozen=True)
class CariDocumentPermissionGates:
    """Capability flags for the cari documents screen.

    ``can_update`` also covers cancelling a DRAFT document.
    """

    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_post: bool = False
    can_reverse: bool = False
    can_fx_override: bool = False
    can_read_reports: bool = False
    can_apply_settlement: bool = False


def resolve_counterparty_account_picker_gates(
    permission_codes: Any = None,
) -> CounterpartyAccountPickerGates:
    """AR/AP account pickers are shown and loaded only with ``gl.account.read``."""
    flags = resolve_capabilities(ACCOUNT_PICKER_PERMISSIONS, permission_codes)
    can_read = flags["can_read_gl_accounts"]
    return CounterpartyAccountPickerGates(
        can_read_gl_accounts=can_read,
        should_fetch_gl_accounts=can_read,
        show_account_pickers=can_read,
    )


def resolve_cari_document_permission_gates(
    permission_codes: Any = None,
) -> CariDocumentPermissionGates:
    return CariDocumentPermissionGates(
        **resolve_capabilities(DOCUMENT_CAPABILITY_PERMISSIONS, permission_codes)
    )


def resolve_cari_document_action_states(
    status: Any, permission_codes: Any = None
) -> dict[str, ActionState]:
    return resolve_action_states(CARI_DOCUMENT_ENTITY_TYPE, status, permission_codes)

"""
backoffice_modules.cari
=======================

Responsibility:
    Permission gates for counterparty master data and cari (AR/AP)
    documents, and cari document lifecycle action states.
"""

from backoffice_modules.cari.gates import (
    ACCOUNT_PICKER_PERMISSIONS,
    DOCUMENT_CAPABILITY_PERMISSIONS,
    CariDocumentPermissionGates,
    CounterpartyAccountPickerGates,
    resolve_cari_document_action_states,
    resolve_cari_document_permission_gates,
    resolve_counterparty_account_picker_gates,
)

__all__ = [
    "ACCOUNT_PICKER_PERMISSIONS",
    "DOCUMENT_CAPABILITY_PERMISSIONS",
    "CariDocumentPermissionGates",
    "CounterpartyAccountPickerGates",
    "resolve_cari_document_action_states",
    "resolve_cari_document_permission_gates",
    "resolve_counterparty_account_picker_gates",
]

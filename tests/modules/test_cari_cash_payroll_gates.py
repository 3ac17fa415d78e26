"""
Permission gates and lifecycle action states for the cari, cash and
payroll screens.
"""

import dataclasses

import pytest

from backoffice_kernel.domain.lifecycle import ActionState
from backoffice_modules.cari import (
    DOCUMENT_CAPABILITY_PERMISSIONS,
    CariDocumentPermissionGates,
    resolve_cari_document_action_states,
    resolve_cari_document_permission_gates,
    resolve_counterparty_account_picker_gates,
)
from backoffice_modules.cash import (
    SESSION_CAPABILITY_PERMISSIONS,
    TRANSACTION_CAPABILITY_PERMISSIONS,
    CashSessionPermissionGates,
    resolve_cash_session_action_states,
    resolve_cash_session_permission_gates,
    resolve_cash_transaction_action_states,
    resolve_cash_transaction_permission_gates,
)
from backoffice_modules.payroll import (
    CLOSE_CAPABILITY_PERMISSIONS,
    RUN_CAPABILITY_PERMISSIONS,
    PayrollClosePermissionGates,
    PayrollRunPermissionGates,
    resolve_payroll_close_action_states,
    resolve_payroll_close_permission_gates,
    resolve_payroll_run_action_states,
    resolve_payroll_run_permission_gates,
)

CAPABILITY_TABLES = [
    pytest.param(resolve_cari_document_permission_gates, DOCUMENT_CAPABILITY_PERMISSIONS, id="cari-doc"),
    pytest.param(resolve_cash_session_permission_gates, SESSION_CAPABILITY_PERMISSIONS, id="cash-session"),
    pytest.param(resolve_cash_transaction_permission_gates, TRANSACTION_CAPABILITY_PERMISSIONS, id="cash-txn"),
    pytest.param(resolve_payroll_run_permission_gates, RUN_CAPABILITY_PERMISSIONS, id="payroll-run"),
    pytest.param(resolve_payroll_close_permission_gates, CLOSE_CAPABILITY_PERMISSIONS, id="payroll-close"),
]


# ---------------------------------------------------------------------------
# Capability tables, shared rules
# ---------------------------------------------------------------------------


class TestCapabilityTables:

    @pytest.mark.parametrize("resolver,table", CAPABILITY_TABLES)
    def test_each_capability_needs_its_code(self, resolver, table):
        for capability, code in table.items():
            assert getattr(resolver([code]), capability) is True
            assert getattr(resolver([c for c in table.values() if c != code]), capability) is False

    @pytest.mark.parametrize("resolver,table", CAPABILITY_TABLES)
    @pytest.mark.parametrize("codes", [None, "", "cash.txn.read", 12])
    def test_malformed_input_grants_nothing(self, resolver, table, codes):
        assert not any(dataclasses.asdict(resolver(codes)).values())


# ---------------------------------------------------------------------------
# Cari
# ---------------------------------------------------------------------------


class TestCariGates:

    def test_account_pickers_need_gl_read(self):
        gates = resolve_counterparty_account_picker_gates(["gl.account.read"])
        assert gates.can_read_gl_accounts is True
        assert gates.should_fetch_gl_accounts is True
        assert gates.show_account_pickers is True

    def test_account_pickers_hidden_without_gl_read(self):
        gates = resolve_counterparty_account_picker_gates(["cari.card.read", "cari.card.upsert"])
        assert (
            gates.can_read_gl_accounts,
            gates.should_fetch_gl_accounts,
            gates.show_account_pickers,
        ) == (False, False, False)

    def test_document_defaults(self):
        assert resolve_cari_document_permission_gates([]) == CariDocumentPermissionGates()

    def test_posted_document_actions(self):
        states = resolve_cari_document_action_states(
            "POSTED", ["cari.settlement.apply", "cari.doc.post"]
        )
        assert states["settlePartial"] == ActionState(True, None)
        assert states["settleFull"] == ActionState(True, None)
        assert states["post"] == ActionState(False, None)
        assert states["reverse"] == ActionState(False, "Missing permission: cari.doc.reverse")

    def test_cancel_draft_uses_update_permission(self):
        states = resolve_cari_document_action_states("draft", ["cari.doc.update"])
        assert states["cancel"] == ActionState(True, None)
        assert states["post"].reason == "Missing permission: cari.doc.post"

    def test_settled_document_is_final(self):
        codes = list(DOCUMENT_CAPABILITY_PERMISSIONS.values())
        states = resolve_cari_document_action_states("SETTLED", codes)
        assert not any(state.allowed for state in states.values())


# ---------------------------------------------------------------------------
# Cash
# ---------------------------------------------------------------------------


class TestCashGates:

    def test_session_gates(self):
        gates = resolve_cash_session_permission_gates(["cash.session.open", "cash.register.read"])
        assert gates == CashSessionPermissionGates(can_read_registers=True, can_open_session=True)

    def test_close_session_needs_permission_and_open_status(self):
        assert resolve_cash_session_action_states("OPEN", ["cash.session.close"]) == {
            "close": ActionState(True, None)
        }
        assert resolve_cash_session_action_states("CLOSED", ["cash.session.close"]) == {
            "close": ActionState(False, None)
        }
        assert resolve_cash_session_action_states("OPEN", ["cash.session.open"]) == {
            "close": ActionState(False, "Missing permission: cash.session.close")
        }

    def test_transaction_fetch_flags(self):
        gates = resolve_cash_transaction_permission_gates(["gl.account.read"])
        assert gates.should_fetch_accounts is True
        assert gates.should_fetch_counterparties is False

        gates = resolve_cash_transaction_permission_gates(["cari.card.read"])
        assert gates.should_fetch_counterparties is True
        assert gates.should_fetch_accounts is False

    def test_cari_report_read_does_not_fetch_counterparties(self):
        gates = resolve_cash_transaction_permission_gates(["cari.report.read"])
        assert gates.can_read_cari_reports is True
        assert gates.should_fetch_counterparties is False

    def test_submitted_transaction_actions(self):
        states = resolve_cash_transaction_action_states(
            "SUBMITTED", ["cash.txn.post", "cash.txn.cancel"]
        )
        assert states["approve"] == ActionState(True, None)
        assert states["post"] == ActionState(True, None)
        assert states["cancel"] == ActionState(True, None)
        assert states["submit"] == ActionState(False, "Missing permission: cash.txn.create")
        assert states["reverse"] == ActionState(False, "Missing permission: cash.txn.reverse")

    def test_posted_transaction_can_only_reverse(self):
        codes = list(TRANSACTION_CAPABILITY_PERMISSIONS.values())
        states = resolve_cash_transaction_action_states("posted", codes)
        assert [action for action, state in states.items() if state.allowed] == ["reverse"]


# ---------------------------------------------------------------------------
# Payroll
# ---------------------------------------------------------------------------


class TestPayrollGates:

    def test_run_defaults(self):
        assert resolve_payroll_run_permission_gates(None) == PayrollRunPermissionGates()
        assert resolve_payroll_close_permission_gates(None) == PayrollClosePermissionGates()

    @pytest.mark.parametrize(
        "status,action",
        [("DRAFT", "import"), ("IMPORTED", "review"), ("REVIEWED", "finalize")],
    )
    def test_run_steps(self, status, action):
        codes = list(RUN_CAPABILITY_PERMISSIONS.values())
        states = resolve_payroll_run_action_states(status, codes)
        assert [a for a, s in states.items() if s.allowed] == [action]

    def test_finalized_run_is_final(self):
        codes = list(RUN_CAPABILITY_PERMISSIONS.values())
        states = resolve_payroll_run_action_states("FINALIZED", codes)
        assert not any(state.allowed for state in states.values())

    def test_approve_close_needs_approve_permission(self):
        states = resolve_payroll_close_action_states(
            "REQUESTED", ["payroll.close.read", "payroll.close.request"]
        )
        assert states["approveClose"] == ActionState(
            False, "Missing permission: payroll.close.approve"
        )
        states = resolve_payroll_close_action_states("REQUESTED", ["payroll.close.approve"])
        assert states["approveClose"] == ActionState(True, None)

    def test_reopen_only_from_closed(self):
        codes = ["payroll.close.reopen"]
        assert resolve_payroll_close_action_states("CLOSED", codes)["reopen"].allowed is True
        assert resolve_payroll_close_action_states("REOPENED", codes)["reopen"].allowed is False
        assert resolve_payroll_close_action_states("READY", codes)["reopen"].allowed is False

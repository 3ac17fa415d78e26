"""
Tests for lifecycle action enablement (backoffice_services.permission_gates).

An action is enabled only when the actor holds its permission AND the
action is valid from the current status.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from backoffice_kernel.domain.lifecycle import ActionState
from backoffice_services.lifecycle_rules import (
    LIFECYCLE_ENTITY_TYPES,
    can_transition,
    get_lifecycle_definition,
)
from backoffice_services.permission_gates import (
    ACTION_PERMISSIONS,
    evaluate_action,
    get_permission_for_action,
    resolve_action_states,
)

ALL_CODES = sorted(set(ACTION_PERMISSIONS.values()))


# ---------------------------------------------------------------------------
# Table consistency
# ---------------------------------------------------------------------------


class TestActionPermissionTable:

    def test_every_mapped_action_exists_in_lifecycle(self):
        for entity_type, action in ACTION_PERMISSIONS:
            definition = get_lifecycle_definition(entity_type)
            assert definition is not None, entity_type
            assert definition.find_transition(action) is not None, (entity_type, action)

    def test_every_lifecycle_action_is_mapped(self):
        for entity_type in LIFECYCLE_ENTITY_TYPES:
            for transition in get_lifecycle_definition(entity_type).transitions:
                assert get_permission_for_action(entity_type, transition.action), (
                    entity_type,
                    transition.action,
                )

    @pytest.mark.parametrize(
        "entity_type,action,code",
        [
            ("contract", "activate", "contract.activate"),
            ("cariDocument", "settlePartial", "cari.settlement.apply"),
            ("cariDocument", "settleFull", "cari.settlement.apply"),
            ("cariDocument", "cancel", "cari.doc.update"),
            ("cashSession", "close", "cash.session.close"),
            ("payrollClose", "approveClose", "payroll.close.approve"),
        ],
    )
    def test_known_mappings(self, entity_type, action, code):
        assert get_permission_for_action(entity_type, action) == code

    def test_unmapped(self):
        assert get_permission_for_action("contract", "archive") is None
        assert get_permission_for_action("invoice", "post") is None


# ---------------------------------------------------------------------------
# evaluate_action
# ---------------------------------------------------------------------------


class TestEvaluateAction:

    def test_permission_and_valid_transition(self):
        assert evaluate_action("contract", "DRAFT", "activate", True) == ActionState(True, None)

    def test_permission_but_invalid_transition(self):
        assert evaluate_action("contract", "CLOSED", "activate", True) == ActionState(False, None)

    def test_missing_permission_reason(self):
        assert evaluate_action("contract", "DRAFT", "activate", False) == ActionState(
            False, "Missing permission: contract.activate"
        )

    def test_missing_permission_reported_even_when_transition_invalid(self):
        state = evaluate_action("contract", "CLOSED", "close", False)
        assert state == ActionState(False, "Missing permission: contract.close")

    def test_unmapped_action(self):
        state = evaluate_action("contract", "DRAFT", "archive", True)
        assert state == ActionState(False, "No permission mapped for action: archive")


# ---------------------------------------------------------------------------
# resolve_action_states
# ---------------------------------------------------------------------------


class TestResolveActionStates:

    def test_table_order(self):
        states = resolve_action_states("cashTransaction", "DRAFT", ALL_CODES)
        assert list(states) == ["submit", "approve", "post", "cancel", "reverse"]

    def test_cash_transaction_draft_with_all_codes(self):
        states = resolve_action_states("cashTransaction", "draft", ALL_CODES)
        assert {action: s.allowed for action, s in states.items()} == {
            "submit": True,
            "approve": False,
            "post": True,
            "cancel": True,
            "reverse": False,
        }

    def test_cash_session_close_needs_open_session(self):
        codes = ["cash.session.close"]
        assert resolve_action_states("cashSession", "OPEN", codes)["close"].allowed is True
        assert resolve_action_states("cashSession", "CLOSED", codes)["close"].allowed is False

    def test_unknown_entity_type(self):
        assert resolve_action_states("invoice", "DRAFT", ALL_CODES) == {}

    @pytest.mark.parametrize("codes", [None, "contract.activate", 7, {"contract.activate": 1}])
    def test_malformed_codes_grant_nothing(self, codes):
        states = resolve_action_states("contract", "DRAFT", codes)
        assert not any(state.allowed for state in states.values())
        assert states["activate"].reason == "Missing permission: contract.activate"

    @given(
        entity_type=st.sampled_from(sorted({key[0] for key in ACTION_PERMISSIONS})),
        status=st.sampled_from(
            ["DRAFT", "ACTIVE", "SUSPENDED", "POSTED", "OPEN", "CLOSED", "READY", "REQUESTED", "X"]
        ),
        codes=st.lists(st.sampled_from(ALL_CODES), max_size=len(ALL_CODES)),
    )
    @settings(max_examples=200)
    def test_allowed_iff_permission_and_transition(self, entity_type, status, codes):
        held = set(codes)
        for action, state in resolve_action_states(entity_type, status, codes).items():
            code = get_permission_for_action(entity_type, action)
            expected = code in held and can_transition(entity_type, status, action)
            assert state.allowed is expected
            if code in held:
                assert state.reason is None
            else:
                assert state.reason == f"Missing permission: {code}"

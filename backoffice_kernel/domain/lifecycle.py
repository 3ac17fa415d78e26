"""
Canonical lifecycle types (``backoffice_kernel.domain.lifecycle``).

Responsibility
--------------
Pure value objects for entity status lifecycles.  Used by every area
(contracts, cari documents, cash, payroll) so that status metadata,
transition rules, timeline steps, and action states are defined once.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.  No imports
from ``backoffice_config``, ``backoffice_services``, or outer layers.

Invariants enforced
-------------------
* Transitions reference only statuses in ``LifecycleDefinition.statuses``
  (enforced at config load time by ``backoffice_config.validator``).
* Status codes are upper-case; action names are case-sensitive.
* All objects are frozen; resolvers return new instances, never mutate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@dataclass(frozen=True)
class StatusDefinition:
    """One status in an entity kind's canonical ordered sequence."""

    code: str
    label: str
    description: str = ""


@dataclass(frozen=True)
class TransitionRule:
    """A lifecycle action and the statuses from which it is valid.

    Contract: frozen.  ``from_statuses`` is the complete set of source
    statuses; an action missing from the table is invalid from everywhere.
    """

    action: str
    from_statuses: frozenset[str]
    to_status: str
    label: str

    def applies_to(self, status: str) -> bool:
        return status in self.from_statuses


@dataclass(frozen=True)
class LifecycleDefinition:
    """A status lifecycle for one entity kind.

    Contract: frozen; ``statuses`` is ordered (canonical timeline order).
    Guarantees: ``terminal_statuses`` and every transition endpoint are
    members of ``statuses``.
    """

    id: str
    label: str
    statuses: tuple[StatusDefinition, ...]
    transitions: tuple[TransitionRule, ...]
    terminal_statuses: tuple[str, ...] = ()

    @property
    def status_codes(self) -> tuple[str, ...]:
        return tuple(status.code for status in self.statuses)

    def find_status(self, code: str) -> StatusDefinition | None:
        for status in self.statuses:
            if status.code == code:
                return status
        return None

    def find_transition(self, action: str) -> TransitionRule | None:
        for transition in self.transitions:
            if transition.action == action:
                return transition
        return None

    def status_index(self, code: str) -> int:
        """Position of ``code`` in canonical order, or -1 when unknown."""
        for index, status in enumerate(self.statuses):
            if status.code == code:
                return index
        return -1


@dataclass(frozen=True)
class StatusMeta:
    """Display metadata for a status; the fallback carries no description."""

    code: str
    label: str
    description: str | None = None


@dataclass(frozen=True)
class AllowedAction:
    """An action valid from the current status per the transition table."""

    action: str
    label: str
    to_status: str


@unique
class TimelineState(str, Enum):
    """Display state of one timeline step."""

    DONE = "done"
    CURRENT = "current"
    PENDING = "pending"


@dataclass(frozen=True)
class TimelineStep:
    """One reconstructed point of an entity's status history (view-model)."""

    key: str
    status_code: str
    label: str
    description: str
    state: TimelineState
    event_at: str | None = None
    actor_name: str | None = None
    note: str | None = None


@dataclass(frozen=True)
class ActionState:
    """Whether a lifecycle action is enabled, and why not when it is not.

    ``reason`` is None when the actor holds the permission; otherwise the
    fixed ``"Missing permission: <code>"`` text the UI displays.
    """

    allowed: bool
    reason: str | None = None


def missing_permission_reason(permission_code: str) -> str:
    return f"Missing permission: {permission_code}"

"""
backoffice_services.lifecycle_rules -- Status metadata, allowed actions and
timeline reconstruction for every entity kind.

Responsibility:
    Read-only lookups over the lifecycle registry: canonical status order,
    status metadata, the action -> source-status table, and the timeline
    view-model built from an entity's status-change events.

Architecture position:
    Services layer.  Consumes ``LifecycleRegistry`` from backoffice_config.
    Called by the module gate resolvers and by page view-models.

Invariants:
    - Advisory lookups never raise: unknown entity types, statuses and
      actions degrade to fallback metadata, ``()`` or ``False``.
    - Same inputs always produce equal outputs; inputs are never mutated.
    - ``assert_lifecycle_transition`` is the only raising function.  It is
      the authoritative check used before a status is actually changed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from backoffice_config import get_lifecycle_registry
from backoffice_kernel.domain.lifecycle import (
    AllowedAction,
    LifecycleDefinition,
    StatusMeta,
    TimelineState,
    TimelineStep,
)
from backoffice_kernel.domain.permissions import (
    normalize_optional_text,
    normalize_status,
)
from backoffice_kernel.exceptions import (
    InvalidLifecycleTransitionError,
    UnknownLifecycleEntityError,
    UnsupportedLifecycleActionError,
)
from backoffice_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.lifecycle_rules")

# Event field aliases, first non-blank wins.
_EVENT_STATUS_KEYS = ("statusCode", "status_code", "toStatus", "to_status", "status")
_EVENT_AT_KEYS = ("at", "createdAt", "created_at")
_EVENT_ACTOR_KEYS = ("actorName", "actor_name", "actor", "performedBy", "performed_by")
_EVENT_NOTE_KEYS = ("note", "reason", "description")


LIFECYCLE_ENTITY_TYPES: tuple[str, ...] = get_lifecycle_registry().entity_types


def get_lifecycle_definition(entity_type: Any) -> LifecycleDefinition | None:
    """Definition for ``entity_type`` (exact, whitespace-trimmed key), or None."""
    if entity_type is None:
        return None
    key = str(entity_type).strip()
    definition = get_lifecycle_registry().get(key)
    if definition is None:
        logger.debug("lifecycle_entity_type_unknown", extra={"entity_type": key})
    return definition


def get_lifecycle_status_meta(entity_type: Any, status: Any) -> StatusMeta:
    """Metadata for ``status``; unknown input yields ``StatusMeta(code, code, None)``."""
    code = normalize_status(status)
    definition = get_lifecycle_definition(entity_type)
    found = definition.find_status(code) if definition else None
    if found is None:
        return StatusMeta(code=code, label=code, description=None)
    return StatusMeta(
        code=found.code,
        label=found.label,
        description=found.description or None,
    )


def get_lifecycle_allowed_actions(
    entity_type: Any, current_status: Any
) -> tuple[AllowedAction, ...]:
    """Actions whose source statuses include ``current_status``, in table order."""
    definition = get_lifecycle_definition(entity_type)
    if definition is None:
        return ()
    status = normalize_status(current_status)
    return tuple(
        AllowedAction(
            action=transition.action,
            label=transition.label,
            to_status=transition.to_status,
        )
        for transition in definition.transitions
        if transition.applies_to(status)
    )


def can_transition(entity_type: Any, status: Any, action: Any) -> bool:
    """True if ``action`` is valid from ``status``; False for anything unknown."""
    definition = get_lifecycle_definition(entity_type)
    if definition is None or not isinstance(action, str):
        return False
    transition = definition.find_transition(action)
    if transition is None:
        return False
    return transition.applies_to(normalize_status(status))


def assert_lifecycle_transition(
    entity_type: str,
    action: str,
    current_status: Any,
    *,
    entity_id: Any = None,
) -> str:
    """Return the target status of ``action`` or raise.

    ``entity_type`` and ``entity_id`` are bound into ``LogContext`` while
    the check runs, so a rejection log line names the entity.

    Raises:
        UnknownLifecycleEntityError: no definition for ``entity_type``.
        UnsupportedLifecycleActionError: action not in the table.
        InvalidLifecycleTransitionError: action not valid from the status.
    """
    definition = get_lifecycle_definition(entity_type)
    if definition is None:
        raise UnknownLifecycleEntityError(str(entity_type))
    transition = definition.find_transition(action)
    if transition is None:
        raise UnsupportedLifecycleActionError(definition.id, str(action))

    status = normalize_status(current_status)
    with LogContext.bind(entity_type=definition.id, entity_id=entity_id):
        if not transition.applies_to(status):
            logger.warning(
                "lifecycle_transition_rejected",
                extra={
                    "action": transition.action,
                    "current_status": status,
                    "allowed_from": transition.from_statuses,
                },
            )
            raise InvalidLifecycleTransitionError(
                definition.id,
                transition.action,
                status,
                allowed_from=tuple(sorted(transition.from_statuses)),
            )
    return transition.to_status


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------


def _first_present(event: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = event.get(key)
        if value is not None and str(value).strip():
            return value
    return None


def normalize_event_time(value: Any) -> str | None:
    """ISO-8601 UTC text for datetimes, epoch milliseconds and ISO strings.

    Naive values are taken as UTC.  Unparseable values, and values that
    fall outside the datetime range once shifted to UTC, keep their
    stripped string form so the UI can still show them.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = datetime.fromtimestamp(value / 1000, UTC)
        else:
            parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC).isoformat()
    except (ValueError, OverflowError, OSError):
        return text


def _parse_normalized(value: str | None) -> datetime | None:
    """Aware UTC datetime for a normalised time, None when it is raw text."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            return None
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def _collect_latest_events(events: Any) -> dict[str, dict[str, str | None]]:
    """Map status code -> chosen event fields.

    The first event per status is kept unless a later one carries a
    strictly more recent parseable time.
    """
    chosen: dict[str, dict[str, str | None]] = {}
    if events is None or isinstance(events, (str, bytes, Mapping)):
        return chosen
    if not isinstance(events, Iterable):
        return chosen

    for event in events:
        if not isinstance(event, Mapping):
            continue
        status = normalize_status(_first_present(event, _EVENT_STATUS_KEYS))
        if not status:
            continue
        incoming = {
            "at": normalize_event_time(_first_present(event, _EVENT_AT_KEYS)),
            "actor_name": normalize_optional_text(_first_present(event, _EVENT_ACTOR_KEYS)),
            "note": normalize_optional_text(_first_present(event, _EVENT_NOTE_KEYS)),
        }
        existing = chosen.get(status)
        if existing is None:
            chosen[status] = incoming
            continue
        existing_at = _parse_normalized(existing["at"])
        incoming_at = _parse_normalized(incoming["at"])
        if existing_at and incoming_at and incoming_at > existing_at:
            chosen[status] = incoming
    return chosen


def build_lifecycle_timeline_steps(
    entity_type: Any,
    current_status: Any,
    events: Iterable[Mapping[str, Any]] | None = None,
) -> tuple[TimelineStep, ...]:
    """
    Rebuild the status timeline for one entity.

    One step per canonical status.  A step is ``current`` when it is the
    current status, ``done`` when it precedes the current status and a
    matching event exists, ``pending`` otherwise.  Steps with a matching
    event carry its time, actor and note.
    """
    definition = get_lifecycle_definition(entity_type)
    if definition is None:
        return ()

    status = normalize_status(current_status)
    current_index = definition.status_index(status)
    latest = _collect_latest_events(events)

    steps = []
    for index, row in enumerate(definition.statuses):
        match = latest.get(row.code)
        if row.code == status:
            state = TimelineState.CURRENT
        elif current_index >= 0 and index < current_index and match is not None:
            state = TimelineState.DONE
        else:
            state = TimelineState.PENDING
        steps.append(
            TimelineStep(
                key=row.code,
                status_code=row.code,
                label=row.label,
                description=row.description,
                state=state,
                event_at=match["at"] if match else None,
                actor_name=match["actor_name"] if match else None,
                note=match["note"] if match else None,
            )
        )
    return tuple(steps)

"""
Typed Exception Hierarchy for the back-office lifecycle layer.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to tell a bad lifecycle request apart from a broken
configuration without parsing message text. Every error therefore has:
  1. A TYPED exception class (catch by type, not message)
  2. A CODE attribute (machine-readable, API-safe)
  3. Structured DATA (entity_type, action, status) instead of only a string

The advisory resolvers (permission gates, status metadata, timelines, action
states) never raise: unknown input degrades to "no capability". Only the
authoritative transition check and the configuration loader raise.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BackofficeError (base)
    |
    +-- LifecycleError
    |   +-- UnknownLifecycleEntityError
    |   +-- UnsupportedLifecycleActionError
    |   +-- InvalidLifecycleTransitionError
    |
    +-- ConfigurationError
        +-- LifecycleDefinitionError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                          | When Raised
----------------|-------------------------------|---------------------------------
Lifecycle       | UNKNOWN_LIFECYCLE_ENTITY      | Entity type has no definition
                | UNSUPPORTED_LIFECYCLE_ACTION  | Action not in the kind's table
                | INVALID_LIFECYCLE_TRANSITION  | Action not valid from status
----------------|-------------------------------|---------------------------------
Configuration   | LIFECYCLE_DEFINITION_INVALID  | YAML definition fails validation
"""


class BackofficeError(Exception):
    """
    Base exception for all back-office errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BACKOFFICE_ERROR"


# Lifecycle exceptions


class LifecycleError(BackofficeError):
    """Base exception for lifecycle transition errors."""

    code: str = "LIFECYCLE_ERROR"


class UnknownLifecycleEntityError(LifecycleError):
    """No lifecycle definition exists for the entity type."""

    code: str = "UNKNOWN_LIFECYCLE_ENTITY"

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"Unknown lifecycle entity type: {entity_type!r}")


class UnsupportedLifecycleActionError(LifecycleError):
    """The action is not declared in the entity type's transition table."""

    code: str = "UNSUPPORTED_LIFECYCLE_ACTION"

    def __init__(self, entity_type: str, action: str):
        self.entity_type = entity_type
        self.action = action
        super().__init__(
            f"Unsupported {entity_type} lifecycle action: {action!r}"
        )


class InvalidLifecycleTransitionError(LifecycleError):
    """
    The action is declared but not valid from the current status.

    Mirrors the server-side rejection ("Cannot activate contract from
    status CLOSED"); the UI-side resolvers only gray out the control.
    """

    code: str = "INVALID_LIFECYCLE_TRANSITION"

    def __init__(
        self,
        entity_type: str,
        action: str,
        current_status: str,
        allowed_from: tuple[str, ...] = (),
    ):
        self.entity_type = entity_type
        self.action = action
        self.current_status = current_status
        self.allowed_from = allowed_from
        super().__init__(
            f"Cannot {action} {entity_type} from status {current_status}"
        )


# Configuration exceptions


class ConfigurationError(BackofficeError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class LifecycleDefinitionError(ConfigurationError):
    """A lifecycle definition failed structural validation."""

    code: str = "LIFECYCLE_DEFINITION_INVALID"

    def __init__(self, entity_type: str, reason: str):
        self.entity_type = entity_type
        self.reason = reason
        super().__init__(
            f"Invalid lifecycle definition {entity_type!r}: {reason}"
        )

"""
backoffice_config -- single public entrypoint for lifecycle configuration.

Responsibility:
    Provides the ONLY way to obtain lifecycle tables at runtime through
    ``get_lifecycle_registry()``.  YAML loading and validation are internal
    tooling; resolvers consume the returned immutable registry.

Architecture position:
    Configuration layer.  Sits above ``backoffice_kernel`` and below
    ``backoffice_services`` / ``backoffice_modules``.  The kernel never
    imports from this package.

Invariants enforced:
    - Build-time validation: every definition passes
      ``validate_lifecycle_definitions`` before a registry is produced.
    - Deterministic loading: the same YAML always yields the same
      checksum and the same status/transition order.
    - The registry is immutable and loaded at most once per path.

Failure modes:
    - ``FileNotFoundError`` -- lifecycle file missing.
    - ``yaml.YAMLError`` -- malformed YAML.
    - ``LifecycleDefinitionError`` -- structural validation failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from backoffice_config.loader import (
    compute_checksum,
    load_yaml_file,
    parse_lifecycle_definition,
)
from backoffice_config.validator import validate_lifecycle_definitions
from backoffice_kernel.domain.lifecycle import LifecycleDefinition
from backoffice_kernel.logging_config import get_logger

logger = get_logger("config")

DEFAULT_LIFECYCLE_FILE = Path(__file__).parent / "sets" / "lifecycles.yaml"


@dataclass(frozen=True)
class LifecycleRegistry:
    """Validated, read-only lifecycle definitions keyed by entity type."""

    definitions: Mapping[str, LifecycleDefinition]
    checksum: str
    source: str

    @property
    def entity_types(self) -> tuple[str, ...]:
        return tuple(self.definitions)

    def get(self, entity_type: str) -> LifecycleDefinition | None:
        return self.definitions.get(entity_type)


def load_lifecycle_registry(path: Path | str) -> LifecycleRegistry:
    """Load, parse and validate a lifecycle YAML file (uncached)."""
    path = Path(path)
    raw = load_yaml_file(path)
    definitions = {
        str(key): parse_lifecycle_definition(str(key), data)
        for key, data in raw.items()
    }
    validate_lifecycle_definitions(definitions)

    registry = LifecycleRegistry(
        definitions=MappingProxyType(definitions),
        checksum=compute_checksum(raw),
        source=str(path),
    )
    logger.info(
        "lifecycle_registry_loaded",
        extra={
            "source": registry.source,
            "checksum": registry.checksum,
            "entity_types": list(registry.entity_types),
        },
    )
    return registry


@lru_cache(maxsize=None)
def _cached_registry(path: str) -> LifecycleRegistry:
    return load_lifecycle_registry(path)


def get_lifecycle_registry(path: Path | str | None = None) -> LifecycleRegistry:
    """Return the lifecycle registry (packaged definitions by default)."""
    return _cached_registry(str(path or DEFAULT_LIFECYCLE_FILE))


__all__ = [
    "DEFAULT_LIFECYCLE_FILE",
    "LifecycleRegistry",
    "get_lifecycle_registry",
    "load_lifecycle_registry",
]

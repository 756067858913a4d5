"""Rule, registry and violation types.

Everything here is immutable once built so that a registry can be shared by
any number of concurrent validations.
"""

from .registry import (
    TypeRegistry,
    get_registry,
    known_versions,
    latest_version,
    publish_registry,
    registry_snapshot,
    withdraw_registry,
)
from .rules import (
    ArrayRule,
    EnumRule,
    EventTypeTable,
    FieldRule,
    LiteralRule,
    ObjectRule,
    Rule,
    ScalarRule,
    UnionRule,
)
from .violation import Severity, ValidationResult, Violation, ViolationKind

__all__ = [
    "ArrayRule",
    "EnumRule",
    "EventTypeTable",
    "FieldRule",
    "LiteralRule",
    "ObjectRule",
    "Rule",
    "ScalarRule",
    "UnionRule",
    "TypeRegistry",
    "get_registry",
    "known_versions",
    "latest_version",
    "publish_registry",
    "registry_snapshot",
    "withdraw_registry",
    "Severity",
    "ValidationResult",
    "Violation",
    "ViolationKind",
]

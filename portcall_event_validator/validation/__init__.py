"""Validation pipeline: lexical, structural, semantic and aggregation stages."""

from .aggregator import aggregate
from .semantic import SemanticValidator
from .structural import StructuralValidator
from .validator import EventValidator, select_registry, validate_event

__all__ = [
    "aggregate",
    "EventValidator",
    "SemanticValidator",
    "StructuralValidator",
    "select_registry",
    "validate_event",
]

"""Schema generations and their JSON Schema rendering.

This package only declares rules and renders them; it does not depend on the
validation passes, so the declarations stay implementation-independent.
"""

from typing import List

from ..models.registry import TypeRegistry
from . import event_v3_2_1


def build_builtin_registries() -> List[TypeRegistry]:
    """Build every schema generation shipped with the package."""
    return [event_v3_2_1.build_registry()]


from .json_schema import build_json_schema, check_with_json_schema, write_json_schema  # noqa: E402

__all__ = [
    "build_builtin_registries",
    "build_json_schema",
    "check_with_json_schema",
    "write_json_schema",
]

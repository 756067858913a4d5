# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Iterable, List, Optional, Set, Tuple

from ..models.registry import TypeRegistry
from ..models.violation import Severity, ValidationResult, Violation
from ..utils.json_path import parse_path


def aggregate(
    *violation_lists: Iterable[Violation],
    schema_version: Optional[str] = None,
    registry: Optional[TypeRegistry] = None,
) -> ValidationResult:
    """Merge violation lists into one ordered, deduplicated result.

    The first violation reported for a (path, rule) pair wins. Violations are
    ordered by path depth, then by the declaration order of the fields on
    their path in *registry*. Violations that tie keep the order they were
    reported in.
    """
    seen: Set[Tuple[str, str]] = set()
    merged: List[Violation] = []
    for violations in violation_lists:
        for violation in violations:
            key = (violation.path, violation.rule)
            if key in seen:
                continue
            seen.add(key)
            merged.append(violation)

    def _order(violation: Violation) -> Tuple[int, Tuple[int, ...]]:
        if registry is None:
            return violation.depth, ()
        return violation.depth, registry.declaration_key(parse_path(violation.path))

    # sorted() is stable
    ordered = tuple(sorted(merged, key=_order))
    valid = not any(v.severity is Severity.ERROR for v in ordered)
    return ValidationResult(valid=valid, violations=ordered, schema_version=schema_version)

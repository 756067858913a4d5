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

"""Lexical rule engine: checks a single scalar value against its rule.

Each check returns ``None`` when the value is acceptable, otherwise exactly
one :class:`Violation`. A value of the wrong JSON type is reported as a type
mismatch and is never run through pattern, format or range rules.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from ..models.rules import EnumRule, LiteralRule, ScalarRule
from ..models.violation import Violation, ViolationKind
from ..utils.json_path import JsonPath
from ..utils.json_values import describe_json_type, is_number, preview

_DATE_TIME_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.[0-9]+)?"
    r"(?:Z|([+-])([0-9]{2}):([0-9]{2}))"
)


def is_iso8601_datetime(value: str) -> bool:
    """``YYYY-MM-DDThh:mm:ss[.s+]TZD`` where TZD is ``Z`` or ``+hh:mm``/``-hh:mm``.

    Any offset is accepted as long as it is well formed; the calendar date
    and clock time must exist.
    """
    m = _DATE_TIME_RE.fullmatch(value)
    if m is None:
        return False
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    try:
        datetime(year, month, day, hour, minute, second)
    except ValueError:
        return False
    if m.group(7) is not None:
        offset_hours, offset_minutes = int(m.group(8)), int(m.group(9))
        if offset_hours > 23 or offset_minutes > 59:
            return False
    return True


_FORMAT_CHECKS: Dict[str, Callable[[str], bool]] = {
    "date-time": is_iso8601_datetime,
}

_FORMAT_HINTS = {
    "date-time": "YYYY-MM-DDThh:mm:ssTZD, e.g. 2017-09-01T12:00:12Z",
}


def _base_type_matches(value: Any, base: str) -> bool:
    if base == "string":
        return isinstance(value, str)
    if base == "boolean":
        return isinstance(value, bool)
    if base == "integer":
        return is_number(value) and (isinstance(value, int) or float(value).is_integer())
    return is_number(value)


def type_mismatch(value: Any, expected: str, rule_name: str, path: JsonPath) -> Violation:
    return Violation.at(
        path,
        f"type:{rule_name}",
        f"Invalid type: expected {expected} ({rule_name}), got {describe_json_type(value)}",
        ViolationKind.TYPE_MISMATCH,
    )


def check(value: Any, rule: ScalarRule, path: JsonPath) -> Optional[Violation]:
    if not _base_type_matches(value, rule.base):
        return type_mismatch(value, rule.base, rule.name, path)

    if rule.base == "string":
        return _check_string(value, rule, path)
    if rule.base in ("number", "integer"):
        return _check_number(value, rule, path)
    return None


def _check_string(value: str, rule: ScalarRule, path: JsonPath) -> Optional[Violation]:
    if not rule.matches_pattern(value):
        return Violation.at(
            path,
            f"pattern:{rule.name}",
            f"Value {preview(value)} does not match the {rule.name} pattern {rule.pattern}",
            ViolationKind.LEXICAL,
        )
    if rule.format is not None:
        format_check = _FORMAT_CHECKS.get(rule.format)
        if format_check is None:
            # unknown formats are annotations only
            return None
        if not format_check(value):
            return Violation.at(
                path,
                f"format:{rule.format}",
                f"Value {preview(value)} is not a valid {rule.format} "
                f"({_FORMAT_HINTS.get(rule.format, rule.name)})",
                ViolationKind.LEXICAL,
            )
    return None


def _check_number(value: Any, rule: ScalarRule, path: JsonPath) -> Optional[Violation]:
    if isinstance(value, float) and not math.isfinite(value):
        return Violation.at(
            path,
            f"range:{rule.name}",
            f"Value {value} is not a finite number",
            ViolationKind.LEXICAL,
        )
    if rule.minimum is not None:
        too_small = value <= rule.minimum if rule.exclusive_minimum else value < rule.minimum
        if too_small:
            bound = ">" if rule.exclusive_minimum else ">="
            return Violation.at(
                path,
                f"minimum:{rule.name}",
                f"Value {value} must be {bound} {rule.minimum:g}",
                ViolationKind.LEXICAL,
            )
    if rule.maximum is not None:
        too_large = value >= rule.maximum if rule.exclusive_maximum else value > rule.maximum
        if too_large:
            bound = "<" if rule.exclusive_maximum else "<="
            return Violation.at(
                path,
                f"maximum:{rule.name}",
                f"Value {value} must be {bound} {rule.maximum:g}",
                ViolationKind.LEXICAL,
            )
    return None


def check_literal(value: Any, rule: LiteralRule, path: JsonPath) -> Optional[Violation]:
    if not isinstance(value, str):
        return type_mismatch(value, "string", rule.name, path)
    if value != rule.value:
        return Violation.at(
            path,
            f"const:{rule.name}",
            f"Value {preview(value)} must be exactly {rule.value!r}",
            ViolationKind.LEXICAL,
        )
    return None


def check_enum(value: Any, rule: EnumRule, path: JsonPath) -> Optional[Violation]:
    if not isinstance(value, str):
        return type_mismatch(value, "string", rule.name, path)
    if value not in rule:
        return Violation.at(
            path,
            f"enum:{rule.name}",
            f"Value {preview(value)} is not a valid {rule.name}; allowed: {', '.join(rule.values)}",
            ViolationKind.LEXICAL,
        )
    return None

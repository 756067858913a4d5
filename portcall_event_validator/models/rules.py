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

"""Rule types held by the type registry.

Every rule is a frozen dataclass carrying only tuples and strings, so a
registry built from them can be shared by any number of threads.
Composite rules reference other rules by name; the registry resolves names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Pattern, Tuple, Union

SCALAR_BASES = ("string", "number", "integer", "boolean")


@dataclass(frozen=True)
class ScalarRule:
    name: str
    base: str = "string"
    pattern: Optional[str] = None
    format: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    description: str = ""
    _regex: Optional[Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.base not in SCALAR_BASES:
            raise ValueError(f"Unsupported scalar base '{self.base}' for rule '{self.name}'")
        if self.pattern is not None:
            object.__setattr__(self, "_regex", re.compile(self.pattern))

    def matches_pattern(self, value: str) -> bool:
        # full-string match, whether or not the pattern carries ^...$ anchors
        if self._regex is None:
            return True
        return self._regex.fullmatch(value) is not None


@dataclass(frozen=True)
class LiteralRule:
    """A single allowed string constant (version literal, geometry tags)."""

    name: str
    value: str
    description: str = ""


@dataclass(frozen=True)
class EnumRule:
    """A closed vocabulary; anything outside it is a violation."""

    name: str
    values: Tuple[str, ...]
    description: str = ""

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and value in self.values


@dataclass(frozen=True)
class ArrayRule:
    name: str
    items: str
    min_items: int = 0
    description: str = ""


@dataclass(frozen=True)
class FieldRule:
    name: str
    type_ref: str
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class ObjectRule:
    """Object shape.

    ``at_least_one_of`` expresses a conditional requirement: the object is
    only complete when one of those (otherwise optional) fields is present.
    ``allow_extra`` marks objects with an extension area for user keys.
    """

    name: str
    fields: Tuple[FieldRule, ...]
    allow_extra: bool = False
    at_least_one_of: Tuple[str, ...] = ()
    description: str = ""

    def get_field(self, name: str) -> Optional[FieldRule]:
        for field_rule in self.fields:
            if field_rule.name == name:
                return field_rule
        return None

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class UnionRule:
    """Tagged union: ``variants`` maps discriminator values to object rules."""

    name: str
    discriminator: str
    variants: Tuple[Tuple[str, str], ...]
    description: str = ""

    @property
    def allowed_values(self) -> Tuple[str, ...]:
        return tuple(tag for tag, _ in self.variants)

    def variant_for(self, tag: object) -> Optional[str]:
        for variant_tag, rule_name in self.variants:
            if tag == variant_tag:
                return rule_name
        return None


@dataclass(frozen=True)
class EventTypeTable:
    """Closed table of valid ``activity.timeType.party`` combinations.

    The three vocabularies describe the components; ``combinations`` is the
    authoritative list, which is deliberately smaller than their product.
    """

    type_name: str
    activities: Tuple[str, ...]
    time_types: Tuple[str, ...]
    parties: Tuple[str, ...]
    combinations: Tuple[str, ...]
    _lookup: FrozenSet[str] = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lookup", frozenset(self.combinations))

    def __contains__(self, event_type: object) -> bool:
        return isinstance(event_type, str) and event_type in self._lookup

    def __len__(self) -> int:
        return len(self.combinations)

    @staticmethod
    def split(event_type: str) -> Optional[Tuple[str, str, str]]:
        parts = event_type.split(".")
        if len(parts) != 3 or not all(parts):
            return None
        return parts[0], parts[1], parts[2]


Rule = Union[ScalarRule, LiteralRule, EnumRule, ArrayRule, ObjectRule, UnionRule]

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

"""Structural validation of a candidate against registry rules.

The walk never stops at the first problem: every node reachable from the
root is visited, except below a union whose discriminator could not be
resolved. Fields are visited in declaration order, followed by undeclared
keys in the order the candidate lists them.
"""

from typing import Any, List, Optional, Union

from ..models.registry import TypeRegistry
from ..models.rules import (
    ArrayRule,
    EnumRule,
    LiteralRule,
    ObjectRule,
    Rule,
    ScalarRule,
    UnionRule,
)
from ..models.violation import Violation, ViolationKind
from ..resolvers.variant_resolver import VariantResolver
from ..utils.json_path import JsonPath
from . import lexical


class StructuralValidator:
    """Presence, type and conditional-group checks driven by a registry."""

    def __init__(self, registry: TypeRegistry, resolver: Optional[VariantResolver] = None):
        self.registry = registry
        self.resolver = resolver if resolver is not None else VariantResolver(registry)

    def validate(self, value: Any, rule: Union[Rule, str], path: JsonPath) -> List[Violation]:
        if isinstance(rule, str):
            rule = self.registry.get(rule)

        if isinstance(rule, ScalarRule):
            return _as_list(lexical.check(value, rule, path))
        if isinstance(rule, LiteralRule):
            return _as_list(lexical.check_literal(value, rule, path))
        if isinstance(rule, EnumRule):
            return _as_list(lexical.check_enum(value, rule, path))
        if isinstance(rule, ArrayRule):
            return self._validate_array(value, rule, path)
        if isinstance(rule, ObjectRule):
            return self._validate_object(value, rule, path)
        if isinstance(rule, UnionRule):
            return self._validate_union(value, rule, path)

        raise TypeError(f"Unsupported rule type {type(rule).__name__}")

    def _validate_array(self, value: Any, rule: ArrayRule, path: JsonPath) -> List[Violation]:
        if not isinstance(value, list):
            return [lexical.type_mismatch(value, "array", rule.name, path)]

        issues: List[Violation] = []
        if len(value) < rule.min_items:
            issues.append(
                Violation.at(
                    path,
                    f"minItems:{rule.name}",
                    f"Expected at least {rule.min_items} item(s) in {rule.name}, got {len(value)}",
                    ViolationKind.LEXICAL,
                )
            )
        item_rule = self.registry.get(rule.items)
        for idx, item in enumerate(value):
            issues.extend(self.validate(item, item_rule, path.child(idx)))
        return issues

    def _validate_object(self, value: Any, rule: ObjectRule, path: JsonPath) -> List[Violation]:
        if not isinstance(value, dict):
            return [lexical.type_mismatch(value, "object", rule.name, path)]

        issues: List[Violation] = []

        if rule.at_least_one_of and not any(value.get(name) is not None for name in rule.at_least_one_of):
            names = ", ".join(rule.at_least_one_of)
            issues.append(
                Violation.at(
                    path,
                    f"atLeastOneOf:{rule.name}",
                    f"{rule.name} must have at least one of: {names}",
                    ViolationKind.PRESENCE,
                )
            )

        for field_rule in rule.fields:
            field_path = path.child(field_rule.name)
            if field_rule.name not in value:
                if field_rule.required:
                    issues.append(
                        Violation.at(
                            field_path,
                            "required",
                            f"Missing required field '{field_rule.name}' in {rule.name}",
                            ViolationKind.PRESENCE,
                        )
                    )
                continue

            field_value = value[field_rule.name]
            if field_value is None:
                if field_rule.required:
                    issues.append(
                        Violation.at(
                            field_path,
                            "required",
                            f"Required field '{field_rule.name}' in {rule.name} must not be null",
                            ViolationKind.PRESENCE,
                        )
                    )
                else:
                    issues.append(
                        Violation.at(
                            field_path,
                            f"type:{field_rule.type_ref}",
                            f"Optional field '{field_rule.name}' must be omitted rather than null",
                            ViolationKind.TYPE_MISMATCH,
                        )
                    )
                continue

            issues.extend(self.validate(field_value, field_rule.type_ref, field_path))

        if not rule.allow_extra:
            declared = rule.field_names
            for key in value:
                if key in declared:
                    continue
                issues.append(
                    Violation.at(
                        path.child(str(key)),
                        "unknownField",
                        f"Unknown field '{key}' in {rule.name}",
                        ViolationKind.UNKNOWN_FIELD,
                    )
                )

        return issues

    def _validate_union(self, value: Any, rule: UnionRule, path: JsonPath) -> List[Violation]:
        variant, violation = self.resolver.resolve(value, rule, path)
        if violation is not None:
            # subtree is undefined without a variant
            return [violation]
        return self._validate_object(value, variant, path)


def _as_list(violation: Optional[Violation]) -> List[Violation]:
    return [violation] if violation is not None else []

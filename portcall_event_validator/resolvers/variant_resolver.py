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

from typing import Any, Optional, Tuple

from ..models.registry import TypeRegistry
from ..models.rules import ObjectRule, UnionRule
from ..models.violation import Violation, ViolationKind
from ..utils.json_path import JsonPath
from ..utils.json_values import describe_json_type, preview

Resolution = Tuple[Optional[ObjectRule], Optional[Violation]]


class VariantResolver:
    """Selects the variant of a tagged union from its discriminator field.

    Exactly one of the returned pair is set. The discriminator is read once;
    variants are never tried one after another, so a bad tag produces a single
    violation instead of one mismatch report per variant.
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    def resolve(self, value: Any, union: UnionRule, path: JsonPath) -> Resolution:
        if not isinstance(value, dict):
            return None, Violation.at(
                path,
                f"type:{union.name}",
                f"Invalid type: expected object ({union.name}), got {describe_json_type(value)}",
                ViolationKind.TYPE_MISMATCH,
            )

        allowed = ", ".join(repr(tag) for tag in union.allowed_values)
        tag_path = path.child(union.discriminator)

        if union.discriminator not in value or value[union.discriminator] is None:
            return None, Violation.at(
                tag_path,
                f"discriminator:{union.name}",
                f"Missing discriminator '{union.discriminator}' for {union.name}; expected one of: {allowed}",
                ViolationKind.DISCRIMINATOR,
            )

        tag = value[union.discriminator]
        if not isinstance(tag, str):
            return None, Violation.at(
                tag_path,
                f"discriminator:{union.name}",
                f"Discriminator '{union.discriminator}' of {union.name} must be a string, "
                f"got {describe_json_type(tag)}; expected one of: {allowed}",
                ViolationKind.DISCRIMINATOR,
            )

        variant_name = union.variant_for(tag)
        if variant_name is None:
            return None, Violation.at(
                tag_path,
                f"discriminator:{union.name}",
                f"Unknown {union.name} variant {preview(tag)}; expected one of: {allowed}",
                ViolationKind.DISCRIMINATOR,
            )

        return self.registry.get(variant_name), None

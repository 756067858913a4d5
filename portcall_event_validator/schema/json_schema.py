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

"""JSON Schema (draft-07) rendering of a type registry.

The rendered artifact is what event producers validate against locally. The
registry-driven validator remains the reference: the artifact cannot express
the semantic rules, and ``date-time`` is only enforced when the optional
format dependencies of ``jsonschema`` are installed.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
from jsonschema.exceptions import ValidationError

from ..models.registry import TypeRegistry, get_registry, latest_version
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
from ..utils.json_path import JsonPath

logger = logging.getLogger(__name__)

DRAFT_07 = "http://json-schema.org/draft-07/schema#"

_KIND_BY_KEYWORD = {
    "required": ViolationKind.PRESENCE,
    "anyOf": ViolationKind.PRESENCE,
    "type": ViolationKind.TYPE_MISMATCH,
    "oneOf": ViolationKind.DISCRIMINATOR,
    "additionalProperties": ViolationKind.UNKNOWN_FIELD,
}


def _ref(name: str) -> Dict[str, str]:
    return {"$ref": f"#/definitions/{name}"}


def _with_description(schema: Dict[str, Any], description: Optional[str]) -> Dict[str, Any]:
    if description:
        schema["description"] = description
    return schema


def _scalar(rule: ScalarRule) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": rule.base}
    if rule.pattern is not None:
        schema["pattern"] = rule.pattern
    if rule.format is not None:
        schema["format"] = rule.format
    if rule.minimum is not None:
        schema["exclusiveMinimum" if rule.exclusive_minimum else "minimum"] = rule.minimum
    if rule.maximum is not None:
        schema["exclusiveMaximum" if rule.exclusive_maximum else "maximum"] = rule.maximum
    return schema


def _object(rule: ObjectRule) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": {f.name: _with_description(_ref(f.type_ref), f.description) for f in rule.fields},
        "additionalProperties": rule.allow_extra,
    }
    required = [f.name for f in rule.fields if f.required]
    if required:
        schema["required"] = required
    if rule.at_least_one_of:
        schema["anyOf"] = [{"required": [name]} for name in rule.at_least_one_of]
    return schema


def _render(rule: Rule, registry: TypeRegistry) -> Dict[str, Any]:
    if rule.name == registry.event_types.type_name:
        # the closed table is stricter than the lexical pattern
        schema: Dict[str, Any] = {"type": "string", "enum": list(registry.event_types.combinations)}
    elif isinstance(rule, ScalarRule):
        schema = _scalar(rule)
    elif isinstance(rule, LiteralRule):
        schema = {"type": "string", "const": rule.value}
    elif isinstance(rule, EnumRule):
        schema = {"type": "string", "enum": list(rule.values)}
    elif isinstance(rule, ArrayRule):
        schema = {"type": "array", "items": _ref(rule.items)}
        if rule.min_items:
            schema["minItems"] = rule.min_items
    elif isinstance(rule, ObjectRule):
        schema = _object(rule)
    elif isinstance(rule, UnionRule):
        schema = {
            "type": "object",
            "required": [rule.discriminator],
            "oneOf": [_ref(variant) for _, variant in rule.variants],
        }
    else:
        raise TypeError(f"Unsupported rule type {type(rule).__name__}")
    return _with_description(schema, rule.description)


def build_json_schema(version: Optional[str] = None) -> Dict[str, Any]:
    """Render the registry for *version* (default: latest) as a JSON Schema document.

    The root event object is inlined at the top level; every named type is
    emitted under ``definitions`` and linked with ``$ref``.
    """
    registry = get_registry(version or latest_version())
    definitions = {
        rule.name: _render(rule, registry)
        for rule in registry
        if rule.name != registry.root.name
    }
    document: Dict[str, Any] = {
        "$schema": DRAFT_07,
        "title": f"Port call event {registry.version}",
    }
    document.update(_render(registry.root, registry))
    document["definitions"] = definitions
    return document


def write_json_schema(version: Optional[str], output_path: Union[str, Path]) -> Path:
    """Write the rendered schema to *output_path* and return the path."""
    output_path = Path(output_path)
    document = build_json_schema(version)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
        f.write("\n")
    logger.info(f"Wrote JSON Schema for event schema {version or latest_version()} to {output_path}")
    return output_path


def _error_to_violations(error: ValidationError) -> List[Violation]:
    path = JsonPath(tuple(error.absolute_path))
    rule = f"jsonschema:{error.validator}"
    kind = _KIND_BY_KEYWORD.get(error.validator, ViolationKind.LEXICAL)

    if error.validator == "required" and isinstance(error.instance, dict):
        missing = [name for name in error.validator_value if name not in error.instance]
        return [
            Violation.at(path.child(name), rule, f"'{name}' is a required property", kind)
            for name in missing
        ]
    if error.validator == "additionalProperties" and isinstance(error.instance, dict):
        declared = error.schema.get("properties", {})
        return [
            Violation.at(path.child(str(key)), rule, f"Unknown field '{key}'", kind)
            for key in error.instance
            if key not in declared
        ]
    return [Violation.at(path, rule, error.message, kind)]


def check_with_json_schema(candidate: Any, version: Optional[str] = None) -> List[Violation]:
    """Validate *candidate* with ``jsonschema`` against the rendered artifact.

    Intended as the producer-side pre-flight check. Errors are converted to
    violations in document order.
    """
    schema = build_json_schema(version)
    validator = jsonschema.Draft7Validator(schema, format_checker=jsonschema.FormatChecker())

    violations: List[Violation] = []
    errors = sorted(validator.iter_errors(candidate), key=lambda e: [str(p) for p in e.absolute_path])
    for error in errors:
        violations.extend(_error_to_violations(error))
    return violations

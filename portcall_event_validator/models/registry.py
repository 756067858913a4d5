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

"""Versioned type registry.

A :class:`TypeRegistry` holds every named rule of one schema generation and
is immutable once constructed. Registries are published into a process-wide
table keyed by version; publishing swaps in a whole new read-only mapping, so
validations running concurrently keep the table they started with and never
need a lock.
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..exceptions import RegistryError, SchemaVersionError
from ..utils.format_version import parse_schema_version
from ..utils.json_path import JsonPath
from .rules import (
    ArrayRule,
    EventTypeTable,
    LiteralRule,
    ObjectRule,
    Rule,
    UnionRule,
)

logger = logging.getLogger(__name__)


class TypeRegistry:
    """All rules of one schema generation, cross-checked at construction."""

    def __init__(
        self,
        version: str,
        rules: Iterable[Rule],
        root: str,
        event_types: EventTypeTable,
    ):
        parse_schema_version(version)
        self._version = version
        self._root_name = root
        self._event_types = event_types

        table: Dict[str, Rule] = {}
        for rule in rules:
            if rule.name in table:
                raise RegistryError(f"Duplicate rule '{rule.name}' in schema {version}")
            table[rule.name] = rule
        self._rules: Mapping[str, Rule] = MappingProxyType(table)

        self._check_consistency()
        logger.debug(f"Built type registry {version} with {len(table)} rules")

    @property
    def version(self) -> str:
        return self._version

    @property
    def root(self) -> ObjectRule:
        return self._rules[self._root_name]

    @property
    def event_types(self) -> EventTypeTable:
        return self._event_types

    def get(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise RegistryError(f"Unknown rule '{name}' in schema {self._version}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def declaration_key(self, path: JsonPath) -> Tuple[int, ...]:
        """Position of *path* in declaration order, one ordinal per token.

        Object keys rank by their index in the object's fields, undeclared
        keys after all declared ones; list items rank by index. Leading
        indices before the root object (events of a list file) rank by index.
        """
        key = []
        rule: Optional[Rule] = self.root
        for token in path.tokens:
            if isinstance(rule, UnionRule) and isinstance(token, str):
                rule = self._variant_declaring(rule, token)
            if isinstance(token, int):
                key.append(token)
                if isinstance(rule, ArrayRule):
                    rule = self._rules.get(rule.items)
            elif isinstance(rule, ObjectRule):
                names = rule.field_names
                if token in names:
                    idx = names.index(token)
                    key.append(idx)
                    rule = self._rules.get(rule.fields[idx].type_ref)
                else:
                    key.append(len(names))
                    rule = None
            else:
                key.append(0)
                rule = None
        return tuple(key)

    def _variant_declaring(self, union: UnionRule, field_name: str) -> Optional[Rule]:
        for _, variant in union.variants:
            rule = self._rules.get(variant)
            if isinstance(rule, ObjectRule) and field_name in rule.field_names:
                return rule
        return None

    # ---- construction checks ------------------------------------------------

    def _check_consistency(self) -> None:
        root = self._rules.get(self._root_name)
        if not isinstance(root, ObjectRule):
            raise RegistryError(f"Root rule '{self._root_name}' must be an object rule")

        if self._event_types.type_name not in self._rules:
            raise RegistryError(f"Event type rule '{self._event_types.type_name}' is not registered")

        for rule in self._rules.values():
            if isinstance(rule, ArrayRule):
                self._require(rule.items, rule.name)
            elif isinstance(rule, ObjectRule):
                for field_rule in rule.fields:
                    self._require(field_rule.type_ref, f"{rule.name}.{field_rule.name}")
                unknown = [n for n in rule.at_least_one_of if rule.get_field(n) is None]
                if unknown:
                    raise RegistryError(f"'{rule.name}' groups undeclared fields {unknown}")
            elif isinstance(rule, UnionRule):
                self._check_union(rule)

        self._check_event_types()

    def _require(self, type_ref: str, owner: str) -> None:
        if type_ref not in self._rules:
            raise RegistryError(f"'{owner}' references unknown type '{type_ref}'")

    def _check_union(self, union: UnionRule) -> None:
        tags = union.allowed_values
        if len(set(tags)) != len(tags):
            raise RegistryError(f"Union '{union.name}' has duplicate discriminator values")
        for tag, variant_name in union.variants:
            self._require(variant_name, union.name)
            variant = self._rules[variant_name]
            if not isinstance(variant, ObjectRule):
                raise RegistryError(f"Variant '{variant_name}' of '{union.name}' must be an object rule")
            tag_field = variant.get_field(union.discriminator)
            tag_rule = self._rules.get(tag_field.type_ref) if tag_field else None
            if not isinstance(tag_rule, LiteralRule) or tag_rule.value != tag or not tag_field.required:
                raise RegistryError(
                    f"Variant '{variant_name}' must declare required literal "
                    f"'{union.discriminator}' == '{tag}'"
                )

    def _check_event_types(self) -> None:
        table = self._event_types
        if len(set(table.combinations)) != len(table.combinations):
            raise RegistryError("Event type table contains duplicate combinations")
        for event_type in table.combinations:
            parts = table.split(event_type)
            if parts is None:
                raise RegistryError(f"Malformed event type combination '{event_type}'")
            activity, time_type, party = parts
            if activity not in table.activities:
                raise RegistryError(f"'{event_type}': unknown activity '{activity}'")
            if time_type not in table.time_types:
                raise RegistryError(f"'{event_type}': unknown time type '{time_type}'")
            if party not in table.parties:
                raise RegistryError(f"'{event_type}': unknown party '{party}'")


# ---- process-wide publication ---------------------------------------------

_REGISTRIES: Mapping[str, TypeRegistry] = MappingProxyType({})
_PUBLISH_LOCK = threading.Lock()
_builtins_loaded = False


def _ensure_builtin_registries() -> None:
    global _builtins_loaded
    if _builtins_loaded:
        return
    with _PUBLISH_LOCK:
        if _builtins_loaded:
            return
        from ..schema import build_builtin_registries

        updated = dict(_REGISTRIES)
        for registry in build_builtin_registries():
            updated.setdefault(registry.version, registry)
        _swap(updated)
        _builtins_loaded = True
    logger.info(f"Loaded built-in event schemas: {', '.join(known_versions())}")


def _swap(updated: Dict[str, TypeRegistry]) -> None:
    global _REGISTRIES
    # single reference assignment: readers see the old or the new table, never a mix
    _REGISTRIES = MappingProxyType(updated)


def publish_registry(registry: TypeRegistry) -> None:
    """Publish (or replace) the registry for ``registry.version``."""
    _ensure_builtin_registries()
    with _PUBLISH_LOCK:
        updated = dict(_REGISTRIES)
        replaced = registry.version in updated
        updated[registry.version] = registry
        _swap(updated)
    logger.info(f"{'Replaced' if replaced else 'Published'} event schema {registry.version}")


def withdraw_registry(version: str) -> None:
    _ensure_builtin_registries()
    with _PUBLISH_LOCK:
        updated = dict(_REGISTRIES)
        if updated.pop(version, None) is None:
            raise SchemaVersionError(f"Schema version {version} is not registered")
        _swap(updated)
    logger.info(f"Withdrew event schema {version}")


def registry_snapshot() -> Mapping[str, TypeRegistry]:
    """Return the current read-only version table."""
    _ensure_builtin_registries()
    return _REGISTRIES


def known_versions() -> Tuple[str, ...]:
    return tuple(sorted(registry_snapshot(), key=parse_schema_version))


def latest_version() -> Optional[str]:
    versions = known_versions()
    return versions[-1] if versions else None


def get_registry(version: str) -> TypeRegistry:
    """Look up a published registry.

    Raises:
        SchemaVersionError: If the version is malformed or not registered.
    """
    parse_schema_version(version)
    registry = registry_snapshot().get(version)
    if registry is None:
        raise SchemaVersionError(
            f"Schema version {version} is not registered "
            f"(registered: {', '.join(known_versions()) or 'none'})"
        )
    return registry

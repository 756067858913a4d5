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

"""Entry points that run the full validation pipeline on one candidate.

candidate -> structural (lexical + union resolution) -> semantic -> aggregate
"""

import logging
from typing import Any, List, Optional, Tuple

from ..config import ValidatorConfig, validator_config
from ..exceptions import SchemaVersionError
from ..models.registry import TypeRegistry, get_registry, known_versions, latest_version
from ..models.violation import ValidationResult, Violation, ViolationKind
from ..utils.format_version import check_schema_version
from ..utils.json_path import ROOT, JsonPath
from ..utils.json_values import describe_json_type, preview
from .aggregator import aggregate
from .semantic import SemanticValidator
from .structural import StructuralValidator

logger = logging.getLogger(__name__)


class EventValidator:
    """Validates candidates against one schema generation."""

    def __init__(self, registry: TypeRegistry, max_suggestions: int = 3):
        self.registry = registry
        self.structural = StructuralValidator(registry)
        self.semantic = SemanticValidator(registry, max_suggestions=max_suggestions)

    @property
    def version(self) -> str:
        return self.registry.version

    def collect(self, candidate: Any, path: JsonPath = ROOT) -> List[Violation]:
        """Return every violation of *candidate*, unordered and not deduplicated."""
        structural = self.structural.validate(candidate, self.registry.root, path)
        semantic = self.semantic.check(candidate, path, structural)
        return structural + semantic

    def validate(self, candidate: Any, path: JsonPath = ROOT) -> ValidationResult:
        return aggregate(self.collect(candidate, path), schema_version=self.version, registry=self.registry)


def _default_version(config: ValidatorConfig) -> str:
    version = config.default_version or latest_version()
    if version is None:
        raise SchemaVersionError("No event schema is registered")
    return version


def select_registry(
    candidate: Any,
    version: Optional[str] = None,
    *,
    config: Optional[ValidatorConfig] = None,
    path: JsonPath = ROOT,
) -> Tuple[Optional[TypeRegistry], List[Violation]]:
    """Pick the registry a candidate is validated against.

    An explicit *version* always wins and must be registered. Otherwise the
    candidate's own ``version`` field decides. When that field is absent the
    default schema is used and the structural pass reports the omission.
    A ``version`` the validator cannot map to a schema returns no registry and
    the single violation explaining why.

    Raises:
        SchemaVersionError: If an explicit *version* is malformed or unknown.
    """
    config = config if config is not None else validator_config

    if version is not None:
        return get_registry(version), []

    declared = candidate.get("version") if isinstance(candidate, dict) else None
    if declared is None:
        return get_registry(_default_version(config)), []

    version_path = path.child("version")
    if not isinstance(declared, str):
        return None, [
            Violation.at(
                version_path,
                "type:Version",
                f"Invalid type: expected string (Version), got {describe_json_type(declared)}",
                ViolationKind.TYPE_MISMATCH,
            )
        ]

    check = check_schema_version(declared, known_versions())
    if check.supported:
        return get_registry(declared), []
    if check.malformed:
        return None, [
            Violation.at(
                version_path,
                "pattern:Version",
                f"Schema version {preview(declared)} is not a MAJOR.MINOR.PATCH string",
                ViolationKind.LEXICAL,
            )
        ]
    return None, [
        Violation.at(
            version_path,
            "discriminator:Version",
            check.message,
            ViolationKind.DISCRIMINATOR,
        )
    ]


def validate_event(
    candidate: Any,
    version: Optional[str] = None,
    *,
    config: Optional[ValidatorConfig] = None,
) -> ValidationResult:
    """Validate one JSON-compatible candidate event.

    Args:
        candidate: Parsed JSON value (dict, list, str, number, bool or None).
        version: Schema generation to apply. Defaults to the candidate's
            ``version`` field.
        config: Overrides the process-wide :data:`validator_config`.

    Returns:
        The aggregated :class:`ValidationResult`. Problems with the candidate
        are always reported as violations, never raised.
    """
    config = config if config is not None else validator_config
    registry, version_issues = select_registry(candidate, version, config=config)
    if registry is None:
        return aggregate(version_issues)

    logger.debug(f"Validating event against schema {registry.version}")
    validator = EventValidator(registry, max_suggestions=config.max_suggestions)
    return validator.validate(candidate)

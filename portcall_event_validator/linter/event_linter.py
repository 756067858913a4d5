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

"""Event conformance linter for event files."""

import logging
from pathlib import Path
from typing import Optional

from ..config import ValidatorConfig, validator_config
from ..exceptions import EventFileError
from ..file_io.event_loader import EventDocument, load_events
from ..models.violation import ValidationResult
from ..validation.aggregator import aggregate
from ..validation.validator import EventValidator, select_registry
from .report import LintResult

logger = logging.getLogger(__name__)


class EventLinter:
    """Validates every event in a file and reports violations with locations."""

    def __init__(self, version: Optional[str] = None, config: Optional[ValidatorConfig] = None):
        self.version = version
        self.config = config if config is not None else validator_config

    def lint(self, file_path: Path, result: LintResult):
        """Lint one event file.

        Args:
            file_path: Path to the file to lint
            result: LintResult to add errors/warnings to
        """
        try:
            document = load_events(file_path)
        except EventFileError as exc:
            result.add_error(str(exc))
            return

        self.lint_document(document, result)

    def lint_document(self, document: EventDocument, result: LintResult):
        for index, event in enumerate(document.events):
            validation = self.validate(document, index, event)
            result.events += 1
            for violation in validation.violations:
                result.add_violation(violation, document.locate(violation.path))

    def validate(self, document: EventDocument, index: int, event) -> ValidationResult:
        path = document.event_path(index)
        registry, version_issues = select_registry(event, self.version, config=self.config, path=path)
        if registry is None:
            return aggregate(version_issues)

        logger.debug(f"Validating event {index} of {document.file_path} against schema {registry.version}")
        validator = EventValidator(registry, max_suggestions=self.config.max_suggestions)
        return validator.validate(event, path)

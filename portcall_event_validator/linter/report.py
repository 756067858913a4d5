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

"""Error reporting for the linter."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..file_io.source_location import SourceLocation
from ..models.violation import Severity, Violation


class LintResult:
    """Container for linting results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
        """
        self.file_path = file_path
        self.events = 0
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @staticmethod
    def _entry(
        message: str,
        line: Optional[int],
        column: Optional[int],
        json_path: Optional[str],
        rule: Optional[str],
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if line is not None:
            entry['line'] = line
        if column is not None:
            entry['column'] = column
        if json_path is not None:
            entry['path'] = json_path
        if rule is not None:
            entry['rule'] = rule
        return entry

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        json_path: Optional[str] = None,
        rule: Optional[str] = None,
    ):
        self.errors.append(self._entry(message, line, column, json_path, rule))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        json_path: Optional[str] = None,
        rule: Optional[str] = None,
    ):
        self.warnings.append(self._entry(message, line, column, json_path, rule))

    def add_violation(self, violation: Violation, location: SourceLocation):
        """Record a validation violation at its source location."""
        add = self.add_error if violation.severity is Severity.ERROR else self.add_warning
        add(
            violation.message,
            line=location.line,
            column=location.column,
            json_path=violation.path,
            rule=violation.rule,
        )

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'events': self.events,
            'errors': self.errors,
            'warnings': self.warnings,
        }

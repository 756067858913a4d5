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

"""Linter package for port-call event files."""

from pathlib import Path
from typing import List, Optional

from .event_linter import EventLinter
from .report import LintResult

__all__ = ['lint_files', 'EventLinter', 'LintResult']


def lint_files(file_paths: List[Path], version: Optional[str] = None) -> List[LintResult]:
    """Lint a list of event files.

    Args:
        file_paths: List of file paths to lint
        version: Schema version to apply instead of each event's own ``version``

    Returns:
        List of LintResult objects, one per file
    """
    results = []
    linter = EventLinter(version=version)

    for file_path in file_paths:
        result = LintResult(file_path)
        linter.lint(file_path, result)
        results.append(result)

    return results

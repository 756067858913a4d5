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

"""Violation and result types returned by validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..utils.json_path import JsonPath


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ViolationKind(str, Enum):
    LEXICAL = "lexical"
    PRESENCE = "presence"
    TYPE_MISMATCH = "type_mismatch"
    DISCRIMINATOR = "discriminator"
    SEMANTIC = "semantic"
    UNKNOWN_FIELD = "unknown_field"


@dataclass(frozen=True)
class Violation:
    path: str
    rule: str
    message: str
    kind: ViolationKind
    severity: Severity = Severity.ERROR
    depth: int = field(default=0, compare=False)

    @classmethod
    def at(
        cls,
        path: JsonPath,
        rule: str,
        message: str,
        kind: ViolationKind,
        severity: Severity = Severity.ERROR,
    ) -> "Violation":
        return cls(path=str(path), rule=rule, message=message, kind=kind, severity=severity, depth=path.depth)

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> Dict[str, str]:
        return {
            "path": self.path,
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    violations: Tuple[Violation, ...] = ()
    schema_version: Optional[str] = None

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity is Severity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "violations": [v.to_dict() for v in self.violations],
        }

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

"""Conformance validation for port-call events."""

EVENT_SCHEMA_VERSION = "3.2.1"

from .exceptions import EventFileError, PortcallEventError, RegistryError, SchemaVersionError  # noqa: E402
from .models import (  # noqa: E402
    Severity,
    TypeRegistry,
    ValidationResult,
    Violation,
    ViolationKind,
    get_registry,
    known_versions,
    publish_registry,
)
from .validation import EventValidator, validate_event  # noqa: E402

__all__ = [
    "EVENT_SCHEMA_VERSION",
    "EventFileError",
    "PortcallEventError",
    "RegistryError",
    "SchemaVersionError",
    "Severity",
    "TypeRegistry",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "get_registry",
    "known_versions",
    "publish_registry",
    "EventValidator",
    "validate_event",
]

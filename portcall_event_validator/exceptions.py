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

"""Custom exceptions for the port-call event validator.

Problems found in candidate events are never raised; they are reported as
violations. These exceptions cover broken schema definitions, unsupported
schema versions requested by callers, and unreadable event files.
"""


class PortcallEventError(Exception):
    """Base exception for validator related errors."""
    pass


class RegistryError(PortcallEventError):
    """Exception raised when a type registry definition is inconsistent."""
    pass


class SchemaVersionError(PortcallEventError):
    """Exception raised for malformed or unregistered schema versions."""
    pass


class EventFileError(PortcallEventError):
    """Exception raised when an event file cannot be read or parsed."""
    pass

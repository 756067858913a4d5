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

"""Schema version utilities for port-call events.

Every event declares the schema generation it conforms to in its ``version``
field (e.g. ``3.2.1``). Versions follow semantic versioning, but unlike a
tolerant file format the event schema is matched exactly: an event is only
ever checked against the schema it declares.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..exceptions import SchemaVersionError


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_schema_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``3.2.1``.

    No ``v`` prefix or surrounding whitespace is tolerated: the value is a
    wire literal.

    Raises:
        SchemaVersionError: If the value is not a ``MAJOR.MINOR.PATCH`` string.
    """
    if not isinstance(raw, str):
        raise SchemaVersionError(
            f"Schema version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.fullmatch(raw)
    if m is None:
        raise SchemaVersionError(
            f"Invalid schema version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '3.2.1')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def is_schema_version(raw: object) -> bool:
    return isinstance(raw, str) and _VERSION_RE.fullmatch(raw) is not None


# ---- compatibility check ----------------------------------------------------


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of matching a declared version against the registered ones."""

    supported: bool
    message: str
    declared_version: Optional[SemanticVersion] = None
    known_versions: Tuple[str, ...] = ()
    malformed: bool = False


def check_schema_version(raw_version: str, known_versions: Iterable[str]) -> VersionCheckResult:
    """Check whether *raw_version* names a registered schema generation.

    Rules:
    * Malformed string → unsupported, ``malformed=True``.
    * Exact match with a registered version → supported.
    * Anything else → unsupported; the message lists what is registered, and
      hints at same-major versions since those are the likeliest typo.
    """
    known = tuple(sorted(known_versions, key=parse_schema_version))

    try:
        declared = parse_schema_version(raw_version)
    except SchemaVersionError as exc:
        return VersionCheckResult(
            supported=False,
            message=str(exc),
            known_versions=known,
            malformed=True,
        )

    if str(declared) in known:
        return VersionCheckResult(
            supported=True,
            message=f"Schema version {declared} is registered.",
            declared_version=declared,
            known_versions=known,
        )

    same_major = [v for v in known if parse_schema_version(v).major == declared.major]
    hint = ""
    if same_major:
        hint = f" Closest generation(s) with the same major version: {', '.join(same_major)}."
    return VersionCheckResult(
        supported=False,
        message=(
            f"Unsupported schema version {declared}; "
            f"registered versions: {', '.join(known) or 'none'}.{hint}"
        ),
        declared_version=declared,
        known_versions=known,
    )

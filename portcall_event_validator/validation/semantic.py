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

"""Cross-field semantic checks.

These are rules a structural pass cannot express: the closed event type
table, context keys whose meaning depends on the event type, dependent
location fields and GeoJSON geometry invariants.

Checks only look at values the structural pass accepted, so a malformed
field is reported once and does not fan out into follow-up semantic noise.
"""

import difflib
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from ..models.registry import TypeRegistry
from ..models.violation import Severity, Violation, ViolationKind
from ..utils.json_path import ROOT, JsonPath
from ..utils.json_values import is_number

EventTypeParts = Tuple[str, str, str]

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)
MIN_RING_POSITIONS = 4


def _semantic(path: JsonPath, rule: str, message: str, severity: Severity = Severity.ERROR) -> Violation:
    return Violation.at(path, rule, message, ViolationKind.SEMANTIC, severity)


def _present(mapping: Dict[str, Any], key: str) -> bool:
    return mapping.get(key) is not None


def _rejected_within(rejected: Set[str], path: JsonPath) -> bool:
    """True if *path* or anything below it failed the structural pass."""
    prefix = str(path)
    return any(r == prefix or r.startswith(prefix + "[") or r.startswith(prefix + ".") for r in rejected)


class SemanticValidator:
    """Event-level rules evaluated after the structural pass."""

    def __init__(self, registry: TypeRegistry, max_suggestions: int = 3):
        self.registry = registry
        self.max_suggestions = max_suggestions

    def check(
        self,
        event: Any,
        path: JsonPath = ROOT,
        structural: Iterable[Violation] = (),
    ) -> List[Violation]:
        if not isinstance(event, dict):
            return []

        rejected: Set[str] = {v.path for v in structural if v.is_fatal}
        issues: List[Violation] = []

        parts = self._check_event_type(event, path, rejected, issues)
        self._check_portcall_prefix(event, path, rejected, issues)

        location = event.get("location")
        if isinstance(location, dict):
            self._check_location(location, path.child("location"), rejected, issues)

        context = event.get("context")
        if isinstance(context, dict):
            self._check_context(context, path.child("context"), parts, issues)

        return issues

    # ---- event type ------------------------------------------------------

    def _check_event_type(
        self,
        event: Dict[str, Any],
        path: JsonPath,
        rejected: Set[str],
        issues: List[Violation],
    ) -> Optional[EventTypeParts]:
        type_path = path.child("eventType")
        value = event.get("eventType")
        if not isinstance(value, str) or str(type_path) in rejected:
            return None

        table = self.registry.event_types
        if value in table:
            return table.split(value)

        parts = table.split(value)
        unknown = []
        if parts is not None:
            activity, time_type, party = parts
            if activity not in table.activities:
                unknown.append(f"activity '{activity}'")
            if time_type not in table.time_types:
                unknown.append(f"time type '{time_type}'")
            if party not in table.parties:
                unknown.append(f"party '{party}'")
        detail = f"unknown {', '.join(unknown)}" if unknown else "this combination is not allowed"

        suggestions = []
        if self.max_suggestions > 0:
            suggestions = difflib.get_close_matches(value, table.combinations, n=self.max_suggestions)
        hint = f"; did you mean: {', '.join(suggestions)}" if suggestions else ""

        issues.append(
            _semantic(
                type_path,
                "eventType.combination",
                f"Event type '{value}' is not in the closed list of {len(table)} valid "
                f"{table.type_name} values ({detail}){hint}",
            )
        )
        return None

    # ---- identifiers -----------------------------------------------------

    def _check_portcall_prefix(
        self,
        event: Dict[str, Any],
        path: JsonPath,
        rejected: Set[str],
        issues: List[Violation],
    ) -> None:
        port = event.get("port")
        portcall_id = event.get("portcallId")
        port_path = path.child("port")
        id_path = path.child("portcallId")
        if not isinstance(port, str) or not isinstance(portcall_id, str):
            return
        if str(port_path) in rejected or str(id_path) in rejected:
            return
        if not portcall_id.startswith(port):
            issues.append(
                _semantic(
                    id_path,
                    "portcallId.portPrefix",
                    f"Port call id '{portcall_id}' is not prefixed by the event port '{port}'",
                    Severity.WARNING,
                )
            )

    # ---- location --------------------------------------------------------

    def _check_location(
        self,
        location: Dict[str, Any],
        path: JsonPath,
        rejected: Set[str],
        issues: List[Violation],
    ) -> None:
        if _present(location, "glnExtension") and not _present(location, "gln"):
            issues.append(
                _semantic(
                    path.child("glnExtension"),
                    "location.glnExtension.requiresGln",
                    "'glnExtension' identifies a sublocation and requires 'gln' to be present",
                )
            )

        if not any(_present(location, key) for key in ("gln", "name", "geo")):
            issues.append(
                _semantic(
                    path,
                    "location.unidentified",
                    "Location has no 'gln', 'name' or 'geo'; consumers cannot link it to a physical location",
                    Severity.WARNING,
                )
            )

        geo = location.get("geo")
        if isinstance(geo, dict):
            self._check_geometry(geo, path.child("geo"), rejected, issues)

    def _check_geometry(
        self,
        geo: Dict[str, Any],
        path: JsonPath,
        rejected: Set[str],
        issues: List[Violation],
    ) -> None:
        coordinates = geo.get("coordinates")
        if not isinstance(coordinates, list):
            return
        coords_path = path.child("coordinates")

        if geo.get("type") == "Point":
            if not _rejected_within(rejected, coords_path):
                self._check_position(coordinates, coords_path, "Point", issues)
        elif geo.get("type") == "Polygon":
            self._check_polygon(coordinates, coords_path, rejected, issues)

    def _check_polygon(self, rings: List[Any], path: JsonPath, rejected: Set[str], issues: List[Violation]) -> None:
        if not rings:
            issues.append(
                _semantic(path, "geo.polygon.rings", "Polygon must have at least one linear ring")
            )
            return

        for ring_idx, ring in enumerate(rings):
            if not isinstance(ring, list):
                continue
            ring_path = path.child(ring_idx)
            if _rejected_within(rejected, ring_path):
                # positions in the ring are already reported as malformed
                continue
            if len(ring) < MIN_RING_POSITIONS:
                issues.append(
                    _semantic(
                        ring_path,
                        "geo.polygon.ringSize",
                        f"Linear ring must have at least {MIN_RING_POSITIONS} positions, got {len(ring)}",
                    )
                )
            if ring and ring[0] != ring[-1]:
                issues.append(
                    _semantic(
                        ring_path,
                        "geo.polygon.closedRing",
                        f"Linear ring is not closed: first position {ring[0]} differs from last position {ring[-1]}",
                    )
                )
            for pos_idx, position in enumerate(ring):
                if isinstance(position, list):
                    self._check_position(position, ring_path.child(pos_idx), "Polygon position", issues)

    def _check_position(self, position: List[Any], path: JsonPath, owner: str, issues: List[Violation]) -> None:
        if len(position) != 2:
            issues.append(
                _semantic(
                    path,
                    "geo.position.arity",
                    f"{owner} must have exactly 2 coordinates (longitude, latitude), got {len(position)}",
                )
            )
            return

        lon, lat = position
        if not (is_number(lon) and is_number(lat)):
            return
        if not LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]:
            issues.append(
                _semantic(
                    path.child(0),
                    "geo.position.range",
                    f"Longitude {lon} is outside the WGS 84 range [-180, 180]",
                )
            )
        if not LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]:
            issues.append(
                _semantic(
                    path.child(1),
                    "geo.position.range",
                    f"Latitude {lat} is outside the WGS 84 range [-90, 90]",
                )
            )

    # ---- context ---------------------------------------------------------

    def _check_context(
        self,
        context: Dict[str, Any],
        path: JsonPath,
        parts: Optional[EventTypeParts],
        issues: List[Violation],
    ) -> None:
        if parts is not None:
            activity, time_type, party = parts

            if _present(context, "mooring") and activity != "berth":
                issues.append(
                    _semantic(
                        path.child("mooring"),
                        "context.mooring.berthOnly",
                        f"Mooring information is only meaningful for berth events, not '{activity}' events",
                        Severity.WARNING,
                    )
                )

            if _present(context, "clearance") and party != "portAuthority":
                issues.append(
                    _semantic(
                        path.child("clearance"),
                        "context.clearance.portAuthorityOnly",
                        f"Clearance is only meaningful for events reported by the portAuthority party, not '{party}'",
                        Severity.WARNING,
                    )
                )

            by_vessel_eta = time_type == "eta" and party == "vessel"
            if _present(context, "distanceToLocationNM") and not (by_vessel_eta or activity == "distanceToPort"):
                issues.append(
                    _semantic(
                        path.child("distanceToLocationNM"),
                        "context.distanceToLocationNM.usage",
                        "Distance to location is meant for eta vessel events or distanceToPort events",
                        Severity.WARNING,
                    )
                )

        draught = context.get("draught")
        if is_number(draught) and not float(draught).is_integer():
            issues.append(
                _semantic(
                    path.child("draught"),
                    "context.draught.centimetres",
                    f"Draught {draught} should be a whole number of centimetres",
                    Severity.WARNING,
                )
            )

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

"""Port-call event schema, generation 3.2.1."""

import logging
from typing import Iterable, List, Tuple

from ..models.registry import TypeRegistry
from ..models.rules import (
    ArrayRule,
    EnumRule,
    EventTypeTable,
    FieldRule,
    LiteralRule,
    ObjectRule,
    Rule,
    ScalarRule,
    UnionRule,
)

logger = logging.getLogger(__name__)

VERSION = "3.2.1"

# -------------------------
# Vocabularies
# -------------------------

# Listed as published, including its authoring slips; see canonicalize().
_EVENT_TYPES_AS_PUBLISHED = (
    "anchorArea.ata.vessel",
    "anchorArea.atd.vessel",
    "anchorArea.eta.portAuthority",
    "anchorArea.ata.portAuthority",
    "anchorArea.etd.portAuthority",
    "anchorArea.atd.portAuthority",
    "berth.ata.portAuthority",
    "berth.ata.terminal",
    "berth.ata.vessel",
    "berth.ata.carrier",
    "berth.atd.portAuthority",
    "berth.atd.terminal",
    "berth.atd.vessel",
    "berth.ata.carrier",
    "berth.cancel.agent",
    "berth.cancel.portAuthority",
    "berth.cancel.terminal",
    "berth.eta.agent",
    "berth.eta.pilot",
    "berth.eta.portAuthority",
    "berth.eta.predictor",
    "berth.etd.agent",
    "berth.etd.pilot",
    "berth.etd.carrier",
    "berth.etd.predictor",
    "berth.etd.terminal",
    "berth.etd.carrier",
    "berth.pta.terminal",
    "berth.ptd.portAuthority",
    "berth.ptd.terminal",
    "berth.rta.terminal",
    "berth.rtd.portAuthority",
    "bunkerPW.atc.vessel",
    "bunkerPW.ats.vessel",
    "bunkerService.atc.bunkerService",
    "bunkerService.atc.portAuthority",
    "bunkerService.atc.vessel",
    "bunkerService.ats.bunkerService",
    "bunkerService.ats.portAuthority",
    "bunkerService.ats.vessel",
    "bunkerService.cancel.bunkerService",
    "bunkerService.cancel.portAuthority",
    "bunkerService.etc.bunkerService",
    "bunkerService.ets.bunkerService",
    "cargoOperations.atc.terminal",
    "cargoOperations.ats.terminal",
    "cargoOperations.etc.terminal",
    "cargoOperations.ets.terminal",
    "customs.atc.vessel",
    "customs.ats.vessel",
    "fairway.ata.vessel",
    "firstLineReleased.at.linesmen",
    "firstLineReleased.at.vessel",
    "firstLineSecured.at.linesmen",
    "firstLineSecured.at.vessel",
    "floatingCrane.atc.vessel",
    "floatingCrane.ats.vessel",
    "immigration.atc.vessel",
    "immigration.ats.vessel",
    "lastLineReleased.at.linesmen",
    "lastLineReleased.at.vessel",
    "lastLineSecured.at.linesmen",
    "lastLineSecured.at.vessel",
    "pilotBoardingPlace.ata.vessel",
    "pilotBoardingPlace.ata.carrier",
    "pilotBoardingPlace.atd.vessel",
    "pilotBoardingPlace.atd.carrier",
    "pilotBoardingPlace.eta.agent",
    "pilotBoardingPlace.eta.pilot",
    "pilotBoardingPlace.eta.predictor",
    "pilotBoardingPlace.eta.vessel",
    "pilotBoardingPlace.eta.carrier",
    "pilotBoardingPlace.etd.predictor",
    "pilotBoardingPlace.etd.carrier",
    "pilotBoardingPlace.pta.portAuthority",
    "pilotBoardingPlace.rta.portAuthority",
    "pilotDisembarked.at.pilot",
    "pilotDisembarked.at.portAuthority",
    "pilotDisembarked.at.vessel",
    "pilotOnBoard.at.pilot",
    "pilotOnBoard.at.portAuthority",
    "pilotOnBoard.at.vessel",
    "pilotOnBoard.et.pilot",
    "port.ata.agent",
    "port.ata.portAuthority",
    "port.ata.vessel",
    "port.ata.carrier",
    "port.atd.agent",
    "port.atd.portAuthority",
    "port.atd.vessel",
    "port.atd.carrier",
    "port.cancel.agent",
    "port.cancel.portAuthority",
    "port.cancel.carrier",
    "port.eta.agent",
    "port.eta.portAuthority",
    "port.eta.carrier",
    "port.etd.agent",
    "port.etd.portAuthority",
    "port.etd.carrier",
    "portAuthority.atc.vessel",
    "portAuthority.ats.vessel",
    "portBasin.ata.vessel",
    "provision.atc.vessel",
    "provision.ats.vessel",
    "slops.atc.vessel",
    "slops.ats.vessel",
    "surveyor.ets.serviceProvider",
    "surveyor.etc.serviceProvider",
    "tender.atc.vessel",
    "tender.ats.vessel",
    "tugsStandby.et.portAuthority",
    "tugsStandby.at.portAuthority",
    "tugsNoMoreStandby.et.portAuthority",
    "tugsNoMoreStandby.at.portAuthority",
    "vtsArea.ata.vessel",
    "vtsArea.atd.vessel",
    "waste.atc.vessel",
    "waste.ats.vessel",
    "waste.ets.serviceProvider",
    "waste.etc.serviceProvider",
    "waste.ats.serviceProvider",
    "waste.atc.serviceProvider",
    "waste.cancel.serviceProvider",
)

EVENT_LOCATION_TYPES = (
    "anchorArea",
    "approachArea",
    "berth",
    "fairway",
    "pilotBoardingPlace",
    "port",
    "portBasin",
    "terminal",
    "tugArea",
)

_PORT_ACTIVITIES_AS_PUBLISHED = (
    "anchorArea",
    "approachArea",
    "barge",
    "berth",
    "bunkerPW",  # bunkers potable water
    "bunkerService",
    "cargoOperations",
    "customs",
    "distanceToPort",
    "fairway",
    "firstLineReleased",
    "firstLineSecured",
    "floatingCrane",
    "immigration",
    "lastLineReleased",
    "lastLineSecured",
    "pilotBoardingPlace",
    "pilotDisembarked",
    "pilotOnBoard",
    "port",
    "portAuthority ",  # a port authority visit to the vessel, not the party
    "portBasin",
    "provision",
    "slops",
    "surveyor",
    "tender",
    "vtsArea",
    "waste",
)

TIME_TYPES = (
    "at",
    "ata",
    "atc",
    "atd",
    "ats",
    "cancel",
    "declare",
    "et",
    "eta",
    "etc",
    "etd",
    "ets",
    "pta",
    "ptd",
    "rta",
    "rtd",
)

_EVENT_PARTIES_AS_PUBLISHED = (
    "agent",
    "bunkerService",
    "carrier",
    "linesmen",
    "pilot",
    "predictor",  # a predicting party which isn't a nautical party
    "portAuthority",
    "serviceProvider",
    "terminal",
    "tugService",
)


def canonicalize(values: Iterable[str], vocabulary: str) -> Tuple[str, ...]:
    """Trim and dedupe a published vocabulary, keeping first-seen order."""
    seen: List[str] = []
    for raw in values:
        value = raw.strip()
        if value != raw:
            logger.debug(f"{vocabulary}: trimmed whitespace from '{raw}'")
        if value in seen:
            logger.debug(f"{vocabulary}: dropped duplicate '{value}'")
            continue
        seen.append(value)
    return tuple(seen)


# Components used by published event types but absent from the published
# vocabularies.
_ACTIVITIES_ONLY_IN_EVENT_TYPES = ("tugsStandby", "tugsNoMoreStandby")
_PARTIES_ONLY_IN_EVENT_TYPES = ("vessel",)

EVENT_TYPES = canonicalize(_EVENT_TYPES_AS_PUBLISHED, "EventType")
PORT_ACTIVITIES = canonicalize(_PORT_ACTIVITIES_AS_PUBLISHED + _ACTIVITIES_ONLY_IN_EVENT_TYPES, "PortActivity")
EVENT_PARTIES = canonicalize(_EVENT_PARTIES_AS_PUBLISHED + _PARTIES_ONLY_IN_EVENT_TYPES, "EventParty")


# -------------------------
# Rules
# -------------------------

def _identifier(name: str, prefix: str, description: str) -> ScalarRule:
    return ScalarRule(
        name,
        pattern=rf"^{prefix}-[a-zA-Z0-9_]+-[a-zA-Z0-9_]+$",
        description=description,
    )


def _rules() -> List[Rule]:
    return [
        # scalars
        ScalarRule("string"),
        ScalarRule("number", base="number"),
        ScalarRule("boolean", base="boolean"),
        ScalarRule(
            "UUID",
            pattern=r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            description="A Universally Unique Identifier for the event, generated by the event creator",
        ),
        ScalarRule(
            "ISO8601DateTime",
            format="date-time",
            description="ISO 8601 date time with timezone, YYYY-MM-DDThh:mm:ssTZD",
        ),
        ScalarRule(
            "UNLOCODE",
            pattern=r"^[A-Z]{2}[A-Z2-9]{3}$",
            description="A UN/LOCODE designating a port",
        ),
        ScalarRule(
            "LocalPortcallId",
            pattern=r"^[A-Z]{2}[A-Z2-9]{3}[a-zA-Z0-9\-_]{1,32}$",
            description="Port call identifier prefixed by the UN/LOCODE of the issuing port",
        ),
        ScalarRule(
            "EventType",
            pattern=r"^[A-Za-z]+\.[a-z]+\.[A-Za-z]+$",
            description="PortActivity.TimeType.EventParty, restricted to the enumerated combinations",
        ),
        ScalarRule("IMO", pattern=r"^[0-9]{7}$", description="IMO ship reference number"),
        ScalarRule("ENI", pattern=r"^[0-9]{8}$", description="European Number of Identification"),
        ScalarRule("MMSI", pattern=r"^[0-9]{9}$", description="Maritime Mobile Service Identity"),
        ScalarRule(
            "USCG",
            pattern=r"^(?:[0-9]{6,8}|[a-zA-Z][0-9]{6,7}|[a-zA-Z]{2}[0-9]{6})$",
            description="United States Coast Guard vessel identification number",
        ),
        ScalarRule("GLN", pattern=r"^[0-9]{13}$", description="GS1 Global Location Number"),
        ScalarRule("GLNExtension", pattern=r"^[0-9]{1,20}$", description="GLN extension (AI 254)"),
        ScalarRule("ServiceShipNumber", base="number", minimum=0),
        _identifier("MovementId", "MID", "Case-insensitive movement identifier"),
        _identifier("BerthVisitId", "BID", "Case-insensitive berth visit identifier"),
        _identifier("ServiceId", "SID", "Case-insensitive service activity identifier"),
        _identifier("OrganisationPortcallId", "PID", "Organisation port call identifier"),
        # literals and enumerations
        LiteralRule("Version", VERSION, description="Schema generation of the event"),
        LiteralRule("PointTag", "Point"),
        LiteralRule("PolygonTag", "Polygon"),
        EnumRule("EventLocationType", EVENT_LOCATION_TYPES),
        EnumRule("MooringOrientation", ("port", "starboard")),
        EnumRule("PortActivity", PORT_ACTIVITIES),
        EnumRule("TimeType", TIME_TYPES),
        EnumRule("EventParty", EVENT_PARTIES),
        # arrays
        ArrayRule("GeoPosition", items="number", description="(lon, lat) in WGS 84"),
        ArrayRule("LinearRing", items="GeoPosition"),
        ArrayRule("PolygonCoordinates", items="LinearRing"),
        ArrayRule("StringList", items="string"),
        # objects
        ObjectRule(
            "Ship",
            fields=(
                FieldRule("imo", "IMO"),
                FieldRule("eni", "ENI"),
                FieldRule("mmsi", "MMSI"),
                FieldRule("uscg", "USCG"),
                FieldRule("name", "string", description="Informative only"),
            ),
            at_least_one_of=("imo", "eni", "mmsi", "uscg"),
            description="Ship identifiers; at least an IMO, ENI, MMSI or USCG number",
        ),
        ObjectRule(
            "Point",
            fields=(
                FieldRule("type", "PointTag", required=True),
                FieldRule("coordinates", "GeoPosition", required=True),
            ),
        ),
        ObjectRule(
            "Polygon",
            fields=(
                FieldRule("type", "PolygonTag", required=True),
                FieldRule("coordinates", "PolygonCoordinates", required=True),
            ),
        ),
        UnionRule("Geometry", discriminator="type", variants=(("Point", "Point"), ("Polygon", "Polygon"))),
        ObjectRule(
            "EventLocation",
            fields=(
                FieldRule("type", "EventLocationType", required=True),
                FieldRule("gln", "GLN"),
                FieldRule("glnExtension", "GLNExtension"),
                FieldRule("geo", "Geometry"),
                FieldRule("name", "string"),
            ),
        ),
        ObjectRule(
            "Mooring",
            fields=(
                FieldRule("bollardFore", "number", required=True),
                FieldRule("bollardAft", "number", required=True),
                FieldRule("doubleBanked", "boolean"),
                FieldRule("orientation", "MooringOrientation"),
            ),
        ),
        ObjectRule(
            "EventContext",
            fields=(
                FieldRule("clearance", "boolean"),
                FieldRule("distanceToLocationNM", "number"),
                FieldRule("draught", "number", description="Draught in centimeters"),
                FieldRule("mooring", "Mooring"),
                FieldRule("serviceShip", "Ship"),
                FieldRule("serviceShipNumber", "ServiceShipNumber"),
                FieldRule("movementId", "MovementId"),
                FieldRule("berthVisitId", "BerthVisitId"),
                FieldRule("serviceId", "ServiceId"),
                FieldRule("organisationPortcallId", "OrganisationPortcallId"),
                FieldRule("stakeholders", "StringList"),
            ),
            allow_extra=True,
            description="Key-value object; custom keys are allowed next to the predefined ones",
        ),
        ObjectRule(
            "Event",
            fields=(
                FieldRule("uuid", "UUID", required=True),
                FieldRule("version", "Version", required=True),
                FieldRule("source", "string", required=True),
                FieldRule("eventType", "EventType", required=True),
                FieldRule("recordTime", "ISO8601DateTime", required=True),
                FieldRule("eventTime", "ISO8601DateTime", required=True),
                FieldRule("ship", "Ship", required=True),
                FieldRule("port", "UNLOCODE", required=True),
                FieldRule("portcallId", "LocalPortcallId"),
                FieldRule("location", "EventLocation"),
                FieldRule("context", "EventContext"),
            ),
        ),
    ]


def build_registry() -> TypeRegistry:
    event_types = EventTypeTable(
        type_name="EventType",
        activities=PORT_ACTIVITIES,
        time_types=TIME_TYPES,
        parties=EVENT_PARTIES,
        combinations=EVENT_TYPES,
    )
    return TypeRegistry(VERSION, _rules(), root="Event", event_types=event_types)

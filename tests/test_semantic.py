import pytest

from portcall_event_validator.config import ValidatorConfig
from portcall_event_validator.models.violation import Severity, ViolationKind
from portcall_event_validator.utils.json_path import ROOT
from portcall_event_validator.validation import validate_event
from portcall_event_validator.validation.semantic import SemanticValidator


def _semantic(result):
    return [v for v in result.violations if v.kind is ViolationKind.SEMANTIC]


def _only(result, rule):
    matches = [v for v in result.violations if v.rule == rule]
    assert len(matches) == 1, result.violations
    return matches[0]


# ---- event type table ------------------------------------------------------


def test_listed_event_type_is_valid(valid_event):
    valid_event["eventType"] = "berth.ata.vessel"
    assert validate_event(valid_event).valid


def test_unlisted_event_type_references_closed_list(valid_event):
    valid_event["eventType"] = "berth.ata.bogus"
    result = validate_event(valid_event)
    assert not result.valid
    violation = _only(result, "eventType.combination")
    assert violation.path == "eventType"
    assert violation.severity is Severity.ERROR
    assert "closed list" in violation.message
    assert "unknown party 'bogus'" in violation.message


def test_known_components_in_unlisted_combination(valid_event):
    valid_event["eventType"] = "slops.eta.agent"
    violation = _only(validate_event(valid_event), "eventType.combination")
    assert "combination is not allowed" in violation.message


def test_suggestions_are_bounded_by_config(valid_event):
    valid_event["eventType"] = "berth.ata.vesel"
    violation = _only(validate_event(valid_event), "eventType.combination")
    assert "did you mean: berth.ata.vessel" in violation.message

    violation = _only(
        validate_event(valid_event, config=ValidatorConfig(max_suggestions=0)),
        "eventType.combination",
    )
    assert "did you mean" not in violation.message


def test_event_type_with_lexical_error_is_not_checked_against_table(valid_event):
    valid_event["eventType"] = "berth"
    result = validate_event(valid_event)
    assert [(v.path, v.kind) for v in result.violations] == [("eventType", ViolationKind.LEXICAL)]


def test_event_type_dependent_rules_skip_invalid_event_type(valid_event):
    valid_event["eventType"] = "port.ata.nobody"
    rules = [v.rule for v in validate_event(valid_event).violations]
    assert rules == ["eventType.combination"]


# ---- context ---------------------------------------------------------------


def test_mooring_outside_berth_event_is_a_warning(valid_event):
    valid_event["eventType"] = "port.ata.agent"
    result = validate_event(valid_event)
    assert result.valid
    violation = _only(result, "context.mooring.berthOnly")
    assert violation.severity is Severity.WARNING
    assert violation.kind is ViolationKind.SEMANTIC
    assert violation.path == "context.mooring"


def test_clearance_only_for_port_authority(valid_event):
    valid_event["context"]["clearance"] = True
    result = validate_event(valid_event)
    assert _only(result, "context.clearance.portAuthorityOnly").severity is Severity.WARNING

    valid_event["eventType"] = "berth.ata.portAuthority"
    assert _semantic(validate_event(valid_event)) == []


@pytest.mark.parametrize(
    "event_type,warned",
    [
        ("pilotBoardingPlace.eta.vessel", False),
        ("berth.ata.vessel", True),
        ("berth.eta.agent", True),
    ],
)
def test_distance_to_location_usage(valid_event, event_type, warned):
    valid_event["eventType"] = event_type
    del valid_event["context"]["mooring"]
    valid_event["context"]["distanceToLocationNM"] = 12.5
    rules = [v.rule for v in validate_event(valid_event).violations]
    assert ("context.distanceToLocationNM.usage" in rules) is warned


def test_fractional_draught_is_a_warning(valid_event):
    valid_event["context"]["draught"] = 820.5
    result = validate_event(valid_event)
    assert result.valid
    assert _only(result, "context.draught.centimetres").path == "context.draught"


# ---- identifiers and location ----------------------------------------------


def test_portcall_id_prefix_must_match_port(valid_event):
    valid_event["portcallId"] = "NLRTM2026-0007"
    result = validate_event(valid_event)
    assert result.valid
    assert _only(result, "portcallId.portPrefix").severity is Severity.WARNING


def test_gln_extension_requires_gln(valid_event):
    del valid_event["location"]["gln"]
    valid_event["location"]["glnExtension"] = "12"
    result = validate_event(valid_event)
    assert not result.valid
    violation = _only(result, "location.glnExtension.requiresGln")
    assert violation.path == "location.glnExtension"


def test_location_without_any_identification_is_a_warning(valid_event):
    valid_event["location"] = {"type": "anchorArea"}
    result = validate_event(valid_event)
    assert result.valid
    assert _only(result, "location.unidentified").path == "location"


# ---- geometry --------------------------------------------------------------


def test_open_polygon_ring_fails_and_closing_it_passes(valid_event, closed_square):
    open_ring = [closed_square[0][:-1] + [[11.5, 57.2]]]
    valid_event["location"]["geo"] = {"type": "Polygon", "coordinates": open_ring}
    result = validate_event(valid_event)
    assert not result.valid
    violation = _only(result, "geo.polygon.closedRing")
    assert violation.kind is ViolationKind.SEMANTIC
    assert violation.path == "location.geo.coordinates[0]"

    valid_event["location"]["geo"]["coordinates"] = closed_square
    assert validate_event(valid_event).valid


def test_ring_needs_four_positions(valid_event):
    valid_event["location"]["geo"] = {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [0, 0]]]}
    assert _only(validate_event(valid_event), "geo.polygon.ringSize").path == "location.geo.coordinates[0]"


def test_polygon_needs_a_ring(valid_event):
    valid_event["location"]["geo"] = {"type": "Polygon", "coordinates": []}
    assert _only(validate_event(valid_event), "geo.polygon.rings").path == "location.geo.coordinates"


def test_polygon_hole_is_checked_too(valid_event, closed_square):
    hole = [[11.2, 57.2], [11.4, 57.2], [11.4, 57.4], [11.2, 57.4]]
    valid_event["location"]["geo"] = {"type": "Polygon", "coordinates": closed_square + [hole]}
    assert _only(validate_event(valid_event), "geo.polygon.closedRing").path == "location.geo.coordinates[1]"


def test_malformed_ring_is_reported_once(valid_event):
    valid_event["location"]["geo"] = {"type": "Polygon", "coordinates": [[1, 2, 3, 4]]}
    result = validate_event(valid_event)
    assert _semantic(result) == []
    assert [(v.path, v.kind) for v in result.violations] == [
        (f"location.geo.coordinates[0][{i}]", ViolationKind.TYPE_MISMATCH) for i in range(4)
    ]


def test_malformed_point_skips_geometry_rules(valid_event):
    valid_event["location"]["geo"]["coordinates"] = ["east", 57.69, 4.0]
    result = validate_event(valid_event)
    assert _semantic(result) == []
    assert [v.path for v in result.violations] == ["location.geo.coordinates[0]"]


def test_point_arity(valid_event):
    valid_event["location"]["geo"]["coordinates"] = [11.8, 57.69, 4.0]
    violation = _only(validate_event(valid_event), "geo.position.arity")
    assert violation.path == "location.geo.coordinates"


def test_wgs84_range(valid_event):
    valid_event["location"]["geo"]["coordinates"] = [191.8, -91.0]
    result = validate_event(valid_event)
    assert [v.path for v in result.violations if v.rule == "geo.position.range"] == [
        "location.geo.coordinates[0]",
        "location.geo.coordinates[1]",
    ]


def test_semantic_validator_ignores_non_objects(registry):
    assert SemanticValidator(registry).check([1, 2, 3], ROOT) == []

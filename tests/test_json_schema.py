import json

import jsonschema
import pytest

from portcall_event_validator.models.violation import ViolationKind
from portcall_event_validator.schema import build_json_schema, check_with_json_schema, write_json_schema


@pytest.fixture(scope="module")
def document():
    return build_json_schema("3.2.1")


def test_document_is_a_valid_draft_07_schema(document):
    assert document["$schema"] == "http://json-schema.org/draft-07/schema#"
    jsonschema.Draft7Validator.check_schema(document)


def test_root_event_is_inlined(document, registry):
    assert document["type"] == "object"
    assert document["additionalProperties"] is False
    assert set(document["required"]) == {
        "uuid", "version", "source", "eventType", "recordTime", "eventTime", "ship", "port",
    }
    assert document["properties"]["ship"]["$ref"] == "#/definitions/Ship"
    assert "Event" not in document["definitions"]


def test_named_types_are_rendered(document, registry):
    definitions = document["definitions"]
    assert definitions["Ship"]["anyOf"] == [
        {"required": ["imo"]},
        {"required": ["eni"]},
        {"required": ["mmsi"]},
        {"required": ["uscg"]},
    ]
    assert definitions["Geometry"]["oneOf"] == [
        {"$ref": "#/definitions/Point"},
        {"$ref": "#/definitions/Polygon"},
    ]
    assert definitions["PointTag"]["const"] == "Point"
    assert definitions["EventContext"]["additionalProperties"] is True
    assert definitions["ServiceShipNumber"]["minimum"] == 0
    assert definitions["EventType"]["enum"] == list(registry.event_types.combinations)


def test_valid_event_passes(valid_event):
    assert check_with_json_schema(valid_event, "3.2.1") == []


def test_ship_group_violation(valid_event):
    valid_event["ship"] = {"name": "Stena Danica"}
    violations = check_with_json_schema(valid_event)
    assert [(v.path, v.kind) for v in violations] == [("ship", ViolationKind.PRESENCE)]


def test_missing_and_unknown_fields(valid_event):
    del valid_event["uuid"]
    valid_event["priority"] = "high"
    violations = check_with_json_schema(valid_event)
    assert sorted((v.path, v.kind.value) for v in violations) == [
        ("priority", "unknown_field"),
        ("uuid", "presence"),
    ]


def test_unlisted_event_type_fails(valid_event):
    valid_event["eventType"] = "berth.ata.bogus"
    violations = check_with_json_schema(valid_event)
    assert [(v.path, v.rule) for v in violations] == [("eventType", "jsonschema:enum")]


def test_write_json_schema(tmp_path, document):
    output = write_json_schema("3.2.1", tmp_path / "3.2.1" / "event.json")
    assert output.exists()
    with open(output, encoding="utf-8") as f:
        assert json.load(f) == document

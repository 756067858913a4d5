import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from portcall_event_validator.exceptions import RegistryError, SchemaVersionError
from portcall_event_validator.models.registry import (
    TypeRegistry,
    get_registry,
    known_versions,
    latest_version,
    publish_registry,
    registry_snapshot,
    withdraw_registry,
)
from portcall_event_validator.models.rules import FieldRule, ObjectRule
from portcall_event_validator.schema import event_v3_2_1
from portcall_event_validator.validation import validate_event


def _registry(version="9.0.0", rules=None, event_types=None):
    base = get_registry("3.2.1")
    return TypeRegistry(
        version,
        rules if rules is not None else list(base),
        root="Event",
        event_types=event_types if event_types is not None else base.event_types,
    )


def test_builtin_schema_is_registered():
    assert "3.2.1" in known_versions()
    assert latest_version() == known_versions()[-1]
    assert get_registry("3.2.1").version == "3.2.1"
    assert "Geometry" in get_registry("3.2.1")
    assert "LineString" not in get_registry("3.2.1")


@pytest.mark.parametrize("version", ["9.9.9", "3.2", "latest"])
def test_unknown_or_malformed_version_raises(version):
    with pytest.raises(SchemaVersionError):
        get_registry(version)


def test_snapshot_is_read_only():
    snapshot = registry_snapshot()
    with pytest.raises(TypeError):
        snapshot["0.0.1"] = None


def test_vocabularies_are_canonical():
    table = get_registry("3.2.1").event_types
    assert "portAuthority" in table.activities
    assert "portAuthority " not in table.activities
    assert table.combinations.count("berth.ata.carrier") == 1
    assert table.combinations.count("berth.etd.carrier") == 1
    assert len(set(table.combinations)) == len(table)


def test_components_used_by_event_types_are_in_vocabularies():
    table = get_registry("3.2.1").event_types
    assert "vessel" in table.parties
    assert {"tugsStandby", "tugsNoMoreStandby"} <= set(table.activities)
    assert "tugsStandby.et.portAuthority" in table


def test_canonicalize_keeps_first_seen_order():
    assert event_v3_2_1.canonicalize(["b", "a ", "b", "a"], "Test") == ("b", "a")


def test_dangling_type_reference_is_rejected():
    rules = [r for r in get_registry("3.2.1") if r.name != "Event"]
    rules.append(ObjectRule("Event", fields=(FieldRule("ship", "Vessel", required=True),)))
    with pytest.raises(RegistryError, match="unknown type 'Vessel'"):
        _registry(rules=rules)


def test_duplicate_rule_is_rejected():
    rules = list(get_registry("3.2.1"))
    with pytest.raises(RegistryError, match="Duplicate rule"):
        _registry(rules=rules + rules[:1])


def test_event_type_outside_vocabulary_is_rejected():
    table = get_registry("3.2.1").event_types
    broken = dataclasses.replace(table, combinations=table.combinations + ("berth.ata.harbourMaster",))
    with pytest.raises(RegistryError, match="unknown party 'harbourMaster'"):
        _registry(event_types=broken)


def test_union_variant_must_carry_literal_tag():
    rules = [r for r in get_registry("3.2.1") if r.name != "Point"]
    rules.append(ObjectRule("Point", fields=(FieldRule("type", "string", required=True),)))
    with pytest.raises(RegistryError, match="required literal"):
        _registry(rules=rules)


def test_publish_and_withdraw(valid_event):
    publish_registry(_registry("9.0.0"))
    try:
        assert "9.0.0" in known_versions()
        valid_event["version"] = "9.0.0"
        # the 9.0.0 test registry still pins the 3.2.1 literal
        result = validate_event(valid_event)
        assert result.schema_version == "9.0.0"
        assert [v.rule for v in result.violations] == ["const:Version"]
    finally:
        withdraw_registry("9.0.0")
    assert "9.0.0" not in known_versions()

    with pytest.raises(SchemaVersionError):
        withdraw_registry("9.0.0")


def test_publication_does_not_disturb_running_validations(valid_event):
    extra = [_registry(f"8.{minor}.0") for minor in range(10)]

    def _validate(_):
        return validate_event(valid_event).valid

    def _churn(registry):
        publish_registry(registry)
        withdraw_registry(registry.version)
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        validations = [pool.submit(_validate, i) for i in range(200)]
        churn = [pool.submit(_churn, r) for r in extra]
        assert all(f.result() for f in validations)
        assert all(f.result() for f in churn)

    assert not any(v.startswith("8.") for v in known_versions())

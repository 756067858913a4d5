import pytest

from portcall_event_validator.models.violation import ViolationKind
from portcall_event_validator.resolvers import VariantResolver
from portcall_event_validator.utils.json_path import path_of

GEO = path_of("location", "geo")


@pytest.fixture
def resolver(registry):
    return VariantResolver(registry)


@pytest.fixture
def geometry(registry):
    return registry.get("Geometry")


@pytest.mark.parametrize("tag", ["Point", "Polygon"])
def test_resolves_variant_by_tag(resolver, geometry, tag):
    variant, violation = resolver.resolve({"type": tag, "coordinates": []}, geometry, GEO)
    assert violation is None
    assert variant.name == tag


def test_unknown_tag_is_single_discriminator_violation(resolver, geometry):
    variant, violation = resolver.resolve({"type": "LineString", "coordinates": []}, geometry, GEO)
    assert variant is None
    assert violation.kind is ViolationKind.DISCRIMINATOR
    assert violation.path == "location.geo.type"
    assert "'Point'" in violation.message and "'Polygon'" in violation.message


def test_missing_tag(resolver, geometry):
    variant, violation = resolver.resolve({"coordinates": [1, 2]}, geometry, GEO)
    assert variant is None
    assert violation.kind is ViolationKind.DISCRIMINATOR
    assert violation.rule == "discriminator:Geometry"


def test_non_string_tag(resolver, geometry):
    _, violation = resolver.resolve({"type": ["Point"]}, geometry, GEO)
    assert violation.kind is ViolationKind.DISCRIMINATOR
    assert "must be a string" in violation.message


def test_non_object_is_type_mismatch(resolver, geometry):
    _, violation = resolver.resolve("Point", geometry, GEO)
    assert violation.kind is ViolationKind.TYPE_MISMATCH
    assert violation.path == "location.geo"

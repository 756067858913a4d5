import pytest

from portcall_event_validator.exceptions import SchemaVersionError
from portcall_event_validator.utils.format_version import (
    SemanticVersion,
    check_schema_version,
    is_schema_version,
    parse_schema_version,
)


def test_parse_schema_version():
    assert parse_schema_version("3.2.1") == SemanticVersion(3, 2, 1)
    assert str(parse_schema_version("10.0.12")) == "10.0.12"


def test_versions_order_numerically():
    assert parse_schema_version("3.10.0") > parse_schema_version("3.9.4")


@pytest.mark.parametrize("raw", ["v3.2.1", "3.2", "3.2.1.0", "03.2.1", " 3.2.1", "3.2.x", ""])
def test_malformed_versions_are_rejected(raw):
    assert not is_schema_version(raw)
    with pytest.raises(SchemaVersionError):
        parse_schema_version(raw)


def test_non_string_version_is_rejected():
    with pytest.raises(SchemaVersionError, match="must be a string"):
        parse_schema_version(3.21)


def test_check_schema_version_exact_match():
    result = check_schema_version("3.2.1", ["3.2.1"])
    assert result.supported
    assert result.declared_version == SemanticVersion(3, 2, 1)


def test_check_schema_version_hints_same_major():
    result = check_schema_version("3.3.0", ["2.0.0", "3.2.1"])
    assert not result.supported
    assert not result.malformed
    assert "3.2.1" in result.message
    assert "same major" in result.message


def test_check_schema_version_malformed():
    result = check_schema_version("latest", ["3.2.1"])
    assert not result.supported
    assert result.malformed
    assert result.known_versions == ("3.2.1",)

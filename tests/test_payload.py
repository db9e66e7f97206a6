"""
Tests for policy payload parsing.
"""

from __future__ import annotations

import pytest

from compliance.exceptions import InvalidPayloadFormat
from compliance.policy.payload import PayloadParser


class TestPayloadNormalization:
    """Tests for accepted and rejected payload shapes."""

    def test_none_is_empty(self) -> None:
        """Test missing payload parses as empty."""
        parser = PayloadParser(None)
        assert parser.to_dict() == {}

    def test_blank_string_is_empty(self) -> None:
        """Test whitespace-only text parses as empty."""
        parser = PayloadParser("   ")
        assert parser.to_dict() == {}

    def test_mapping(self) -> None:
        """Test mapping payload is used as-is."""
        parser = PayloadParser({"ssid": "OfficeNet"})
        assert parser.to_dict() == {"ssid": "OfficeNet"}

    def test_json_text(self) -> None:
        """Test JSON object text is decoded."""
        parser = PayloadParser('{"identifier": "com.example.app"}')
        assert parser.get_string("identifier") == "com.example.app"

    def test_json_bytes(self) -> None:
        """Test JSON bytes are decoded."""
        parser = PayloadParser(b'{"ssid": "OfficeNet"}')
        assert parser.get_string("ssid") == "OfficeNet"

    def test_malformed_json(self) -> None:
        """Test malformed JSON fails before any field access."""
        with pytest.raises(InvalidPayloadFormat, match="Invalid JSON"):
            PayloadParser("{not json")

    def test_json_array_rejected(self) -> None:
        """Test a top-level JSON array is not a structured object."""
        with pytest.raises(InvalidPayloadFormat, match="must be an object"):
            PayloadParser('["ssid"]')

    def test_non_mapping_rejected(self) -> None:
        """Test other Python types are rejected."""
        with pytest.raises(InvalidPayloadFormat):
            PayloadParser(42)

    def test_invalid_utf8_rejected(self) -> None:
        """Test undecodable bytes are rejected."""
        with pytest.raises(InvalidPayloadFormat, match="UTF-8"):
            PayloadParser(b"\xff\xfe\xfa")

    def test_source_mapping_not_shared(self) -> None:
        """Test the parser copies the source mapping."""
        source = {"ssid": "OfficeNet"}
        parser = PayloadParser(source)
        source["ssid"] = "Other"
        assert parser.get_string("ssid") == "OfficeNet"


class TestFieldAccess:
    """Tests for typed field accessors."""

    def test_optional_absent(self) -> None:
        """Test absent optional field returns None."""
        assert PayloadParser({}).get_optional_string("name") is None

    def test_optional_null(self) -> None:
        """Test null optional field returns None."""
        assert PayloadParser({"name": None}).get_optional_string("name") is None

    def test_optional_present(self) -> None:
        """Test present optional field is returned."""
        assert PayloadParser({"name": "Example"}).get_optional_string("name") == "Example"

    def test_optional_wrong_shape(self) -> None:
        """Test non-string value fails even for optional fields."""
        with pytest.raises(InvalidPayloadFormat, match="'name' must be a string"):
            PayloadParser({"name": ["Example"]}).get_optional_string("name")

    def test_required_missing(self) -> None:
        """Test missing required field fails."""
        with pytest.raises(InvalidPayloadFormat, match="Missing required field 'ssid'"):
            PayloadParser({}).get_string("ssid")

    def test_required_null(self) -> None:
        """Test null required field fails."""
        with pytest.raises(InvalidPayloadFormat):
            PayloadParser('{"ssid": null}').get_string("ssid")

    def test_has(self) -> None:
        """Test presence check treats null as absent."""
        parser = PayloadParser({"identifier": "x", "name": None})
        assert parser.has("identifier") is True
        assert parser.has("name") is False
        assert parser.has("ssid") is False

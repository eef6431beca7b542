"""Unit tests for pcisysfs.models.location."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pcisysfs.exceptions import MalformedLocationError
from pcisysfs.models.location import PciLocation, format_location, parse_location

ZERO = {"segment": 0, "bus": 0, "device": 0, "function": 0}


class TestParseLocation:
    def test_dot_before_function(self):
        loc = parse_location("0000:01:00.0")
        assert loc == PciLocation(segment=0, bus=1, device=0, function=0)

    def test_colon_before_function(self):
        assert parse_location("0000:01:00:0") == parse_location("0000:01:00.0")

    def test_hex_components(self):
        loc = parse_location("abcd:ff:1f.7")
        assert (loc.segment, loc.bus, loc.device, loc.function) == (0xABCD, 0xFF, 0x1F, 7)

    def test_upper_case_hex(self):
        assert parse_location("0000:0A:1F.3") == PciLocation(segment=0, bus=0xA, device=0x1F, function=3)

    @pytest.mark.parametrize("text", [
        "",
        "0000:01",
        "01:00.0",
        "0000:01:00",
        "0000:01:00.0.1",
        "0000:01:00:0:1",
        "0000:01:00:0.1",
        "0000:zz:00.0",
        "0000:01:00.",
        "pci0000:00",
        "0000:01:+1.0",
        "0000:01:00.0\n",
        "0000:01:00:0\n",
        "0000\n:01:00.0",
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedLocationError):
            parse_location(text)

    @pytest.mark.parametrize("text", ["10000:00:00.0", "0000:100:00.0", "0000:00:20.0", "0000:00:00.8"])
    def test_out_of_range(self, text):
        with pytest.raises(MalformedLocationError, match="out of range"):
            parse_location(text)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            parse_location("garbage")

    def test_classmethod(self):
        assert PciLocation.parse("0000:00:1f.6") == parse_location("0000:00:1f.6")


class TestFormatLocation:
    def test_canonical_form(self):
        loc = PciLocation(segment=0, bus=1, device=0, function=0)
        assert format_location(loc) == "0000:01:00:0"
        assert str(loc) == "0000:01:00:0"

    def test_directory_name(self):
        loc = PciLocation(segment=0, bus=0, device=0x1F, function=6)
        assert loc.directory_name == "0000:00:1f.6"

    def test_zero_padding(self):
        loc = PciLocation(segment=0x12, bus=0x3, device=0x4, function=5)
        assert str(loc) == "0012:03:04:5"

    @pytest.mark.parametrize("segment,bus,device,function", [
        (0, 0, 0, 0),
        (0xFFFF, 0xFF, 0x1F, 0x7),
        (0x1, 0x80, 0x10, 0x3),
    ])
    def test_round_trip(self, segment, bus, device, function):
        loc = PciLocation(segment=segment, bus=bus, device=device, function=function)
        assert parse_location(format_location(loc)) == loc
        assert parse_location(loc.directory_name) == loc

    @pytest.mark.parametrize("field,max_value", [
        ("segment", 0xFFFF),
        ("bus", 0xFF),
        ("device", 0x1F),
        ("function", 0x7),
    ])
    def test_round_trip_each_field(self, field, max_value):
        values = range(max_value + 1) if max_value <= 0xFF else (0, 1, 0xFF, 0x100, 0xFFFE, max_value)
        for value in values:
            loc = PciLocation(**{**ZERO, field: value})
            assert parse_location(format_location(loc)) == loc
            assert parse_location(loc.directory_name) == loc

    def test_round_trip_all_device_functions(self):
        for device in range(0x20):
            for function in range(8):
                loc = PciLocation(segment=0xFFFF, bus=0xFF, device=device, function=function)
                assert parse_location(str(loc)) == loc


class TestPciLocationModel:
    def test_immutable(self):
        loc = PciLocation(segment=0, bus=1, device=0, function=0)
        with pytest.raises(ValidationError):
            loc.bus = 2

    def test_hashable_and_equal(self):
        a = parse_location("0000:01:00.0")
        b = parse_location("0000:01:00:0")
        assert a == b
        assert len({a, b}) == 1

    def test_different_function_not_equal(self):
        assert parse_location("0000:01:00.0") != parse_location("0000:01:00.1")

"""
Event short code tests.
"""
import pytest
from app.models.event import Event
from app.utils.short_code import (
    SCANNABLE_FORMATS,
    format_short_code,
    generate_short_code,
    parse_scanned_code,
)


class TestGenerateShortCode:
    """Test short code generation and display."""

    def test_generated_codes_are_six_digits(self):
        for _ in range(100):
            code = generate_short_code()
            assert 0 <= code <= 999999
            assert len(format_short_code(code)) == 6

    def test_format_zero_pads(self):
        assert format_short_code(42613) == "042613"
        assert format_short_code(0) == "000000"


class TestParseScannedCode:
    """Test parsing scanner payloads as event codes."""

    @pytest.mark.parametrize("raw,expected", [
        ("42613", 42613),
        ("042613", 42613),
        (" 99999 ", 99999),
        (42613, 42613),
    ])
    def test_parses_base10_integers(self, raw, expected):
        assert parse_scanned_code(raw) == expected

    @pytest.mark.parametrize("raw", [
        "", "abc", "12a", "-5", "4.2", "e1#m1", None, True, -1,
        "1234567", "9" * 5000, 1000000,
    ])
    def test_unparseable_values_are_ignored(self, raw):
        assert parse_scanned_code(raw) is None

    def test_scanner_accepts_three_symbologies(self):
        assert SCANNABLE_FORMATS == {"qr_code", "rm_qr_code", "micro_qr_code"}


class TestShortCodeImmutability:
    """Test that an event keeps the code it was created with."""

    def test_short_code_cannot_change(self):
        event = Event(id="e1", name="Test Event", short_code=42613)

        with pytest.raises(ValueError):
            event.short_code = 99999

        assert event.short_code == 42613

    def test_short_code_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Event(id="e1", name="Test Event", short_code=1000000)

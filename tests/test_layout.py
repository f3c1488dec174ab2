"""Reference layout formatting and strftime directive conversion."""

from datetime import datetime, timedelta, timezone

import pytest

from stampy.errors import (
    IncompleteDirectiveError,
    TemplateError,
    UnsupportedDirectiveError,
)
from stampy.layout import (
    HOUR,
    RFC3339,
    RFC3339_NANO,
    FractionChunk,
    Layout,
    ZoneChunk,
    convert_date_layout,
    format_layout,
)

UTC_NOON = datetime(2024, 7, 4, 12, 0, 0, tzinfo=timezone.utc)
MOUNTAIN = timezone(timedelta(hours=-7), "MST")
MOUNTAIN_TIME = datetime(2024, 1, 2, 15, 4, 5, 123456, tzinfo=MOUNTAIN)
CHRISTMAS = datetime(2023, 12, 25, 18, 30, 7, 123456, tzinfo=timezone.utc)


class TestConvertDateLayout:
    @pytest.mark.parametrize(
        "directives,expected",
        [
            ("%Y-%m-%d %H:%M:%S", "2006-01-02 15:04:05"),
            ("%%Y", "%Y"),
            ("%Y-%m-%dT%H:%M:%S.%fZ", "2006-01-02T15:04:05.000000Z"),
            ("%Y-%m-%dT%H:%M:%S%fZ", "2006-01-02T15:04:05.000000Z"),
            ("%y/%j %I%p", "06/002 03PM"),
            ("%a %A %b %B", "Mon Monday Jan January"),
            ("%H:%M %z %Z", "15:04 -0700 MST"),
            ("15:04:05", "15:04:05"),
            ("", ""),
        ],
    )
    def test_conversion(self, directives, expected):
        assert convert_date_layout(directives) == expected

    def test_unsupported_directive_names_character(self):
        with pytest.raises(UnsupportedDirectiveError) as exc_info:
            convert_date_layout("%Q")
        assert exc_info.value.directive == "Q"
        assert "%Q" in str(exc_info.value)

    def test_trailing_percent(self):
        with pytest.raises(IncompleteDirectiveError):
            convert_date_layout("%H:%")

    def test_errors_are_template_errors(self):
        with pytest.raises(TemplateError):
            convert_date_layout("%k")


class TestLayoutFormat:
    @pytest.mark.parametrize(
        "layout,expected",
        [
            (RFC3339, "2024-07-04T12:00:00Z"),
            (RFC3339_NANO, "2024-07-04T12:00:00Z"),
            ("2006-01-02 15:04", "2024-07-04 12:00"),
            ("15:04:05", "12:00:00"),
            ("Mon Jan _2 15:04:05 2006", "Thu Jul  4 12:00:00 2024"),
            ("Monday, January 2", "Thursday, July 4"),
            ("1/2/06", "7/4/24"),
            ("3:04PM", "12:00PM"),
            ("3:04pm", "12:00pm"),
            ("002", "186"),
            ("__2", "186"),
            ("_2006", "_2024"),
            ("MST", "UTC"),
            ("-0700", "+0000"),
            ("Z07:00", "Z"),
            ("[literal text]", "[literal text]"),
        ],
    )
    def test_utc_instant(self, layout, expected):
        assert format_layout(UTC_NOON, layout) == expected

    @pytest.mark.parametrize(
        "layout,expected",
        [
            (RFC3339, "2024-01-02T15:04:05-07:00"),
            (RFC3339_NANO, "2024-01-02T15:04:05.123456-07:00"),
            ("-0700", "-0700"),
            ("-07", "-07"),
            ("Z0700", "-0700"),
            ("-07:00:00", "-07:00:00"),
            ("MST", "MST"),
            ("15:04:05.000", "15:04:05.123"),
            ("15:04:05,000000", "15:04:05,123456"),
            ("05.000000000", "05.123456000"),
            ("05.9", "05.1"),
        ],
    )
    def test_offset_instant(self, layout, expected):
        assert format_layout(MOUNTAIN_TIME, layout) == expected

    def test_morning_hour12(self):
        early = datetime(2024, 7, 4, 0, 5, tzinfo=timezone.utc)
        assert format_layout(early, "03:04 PM") == "12:05 AM"

    def test_half_hour_offset(self):
        india = timezone(timedelta(hours=5, minutes=30))
        instant = datetime(2024, 7, 4, 17, 30, tzinfo=india)
        assert format_layout(instant, "Z07:00") == "+05:30"

    def test_trimmed_fraction_drops_separator_when_zero(self):
        assert format_layout(UTC_NOON, "05.999") == "00"

    def test_fraction_followed_by_digit_is_literal(self):
        # ".01" is a dot followed by the zero-padded month
        assert format_layout(UTC_NOON, ".01") == ".07"

    def test_layout_compiles_once(self):
        layout = Layout("15:04")
        assert layout.format(UTC_NOON) == "12:00"
        assert layout.format(MOUNTAIN_TIME) == "15:04"

    def test_chunk_kinds(self):
        layout = Layout("15:04:05.000 Z07:00")
        kinds = [kind for kind, _ in layout.chunks]
        assert kinds == [
            "element",
            "literal",
            "element",
            "literal",
            "element",
            "element",
            "literal",
            "element",
        ]
        assert layout.chunks[0] == ("element", HOUR)
        assert layout.chunks[1] == ("literal", ":")
        assert isinstance(layout.chunks[5][1], FractionChunk)
        assert isinstance(layout.chunks[7][1], ZoneChunk)
        assert layout.format(CHRISTMAS) == "18:30:07.123 Z"


class TestDirectiveRoundTrip:
    def test_datetime_round_trip(self):
        directives = "%Y-%m-%d %H:%M:%S"
        text = format_layout(CHRISTMAS, convert_date_layout(directives))
        assert text == "2023-12-25 18:30:07"
        parsed = datetime.strptime(text, directives)
        assert parsed == CHRISTMAS.replace(tzinfo=None, microsecond=0)

    def test_microseconds_round_trip(self):
        directives = "%H:%M:%S.%f"
        text = format_layout(CHRISTMAS, convert_date_layout(directives))
        assert text == "18:30:07.123456"
        parsed = datetime.strptime(text, directives)
        assert parsed.microsecond == CHRISTMAS.microsecond

    def test_names_round_trip(self):
        directives = "%a %A %b %B %j %I%p"
        text = format_layout(CHRISTMAS, convert_date_layout(directives))
        assert text == "Mon Monday Dec December 359 06PM"

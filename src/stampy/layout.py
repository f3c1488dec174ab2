"""Reference-time layouts and strftime directive conversion.

Absolute timestamps are rendered with reference-time layouts, where each
element of the instant ``Mon Jan 2 15:04:05 MST 2006`` stands for the
matching field of the time being formatted (``2006`` is the year, ``01`` the
month, ``15`` the 24 hour clock hour and so on). strptime style directive
strings such as ``%Y-%m-%d`` are converted to this form first.
"""

import logging
from datetime import datetime

from stampy.errors import IncompleteDirectiveError, UnsupportedDirectiveError

logger = logging.getLogger(__name__)

RFC3339 = "2006-01-02T15:04:05Z07:00"
RFC3339_NANO = "2006-01-02T15:04:05.999999999Z07:00"

DATE_DIRECTIVES = {
    "Y": "2006",
    "y": "06",
    "m": "01",
    "d": "02",
    "H": "15",
    "I": "03",
    "M": "04",
    "S": "05",
    "z": "-0700",
    "Z": "MST",
    "j": "002",
    "b": "Jan",
    "B": "January",
    "a": "Mon",
    "A": "Monday",
    "p": "PM",
}

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

DAY_NAMES = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]


def convert_date_layout(layout: str) -> str:
    """Convert a strptime style directive string to a reference layout.

    ``%f`` becomes a six digit fractional second field and always ends up
    with exactly one ``.`` in front of it, so ``%S.%f`` and ``%S%f`` convert
    to the same layout.

    Args:
        layout: Directive string, e.g. ``"%Y-%m-%d %H:%M:%S"``

    Returns:
        The equivalent reference layout, e.g. ``"2006-01-02 15:04:05"``

    Raises:
        UnsupportedDirectiveError: For directives outside ``DATE_DIRECTIVES``
        IncompleteDirectiveError: If the string ends with ``%``
    """
    if "%" not in layout:
        return layout

    out: list[str] = []
    last = ""
    i = 0
    while i < len(layout):
        ch = layout[i]
        if ch != "%":
            out.append(ch)
            last = ch
            i += 1
            continue
        i += 1
        if i >= len(layout):
            raise IncompleteDirectiveError()
        directive = layout[i]
        i += 1
        if directive == "%":
            out.append("%")
            last = "%"
            continue
        if directive == "f":
            if last != ".":
                out.append(".")
            out.append("000000")
            last = "0"
            continue
        converted = DATE_DIRECTIVES.get(directive)
        if converted is None:
            raise UnsupportedDirectiveError(directive)
        out.append(converted)
        last = converted[-1]

    result = "".join(out)
    logger.debug(f"Converted date directives {layout!r} to layout {result!r}")
    return result


# Element kinds produced by _next_chunk, named after their layout text.
LONG_YEAR = "2006"
YEAR = "06"
LONG_MONTH = "January"
MONTH = "Jan"
NUM_MONTH = "1"
ZERO_MONTH = "01"
LONG_WEEKDAY = "Monday"
WEEKDAY = "Mon"
DAY = "2"
UNDER_DAY = "_2"
ZERO_DAY = "02"
UNDER_YEAR_DAY = "__2"
ZERO_YEAR_DAY = "002"
HOUR = "15"
HOUR12 = "3"
ZERO_HOUR12 = "03"
MINUTE = "4"
ZERO_MINUTE = "04"
SECOND = "5"
ZERO_SECOND = "05"
PM_UPPER = "PM"
PM_LOWER = "pm"
TZ_NAME = "MST"

# (element, has "Z" for UTC, colons, include seconds, include minutes)
_ZONE_ELEMENTS = [
    ("Z070000", True, False, True, True),
    ("Z07:00:00", True, True, True, True),
    ("Z0700", True, False, False, True),
    ("Z07:00", True, True, False, True),
    ("Z07", True, False, False, False),
    ("-070000", False, False, True, True),
    ("-07:00:00", False, True, True, True),
    ("-0700", False, False, False, True),
    ("-07:00", False, True, False, True),
    ("-07", False, False, False, False),
]

_ZERO_ELEMENTS = {
    "1": ZERO_MONTH,
    "2": ZERO_DAY,
    "3": ZERO_HOUR12,
    "4": ZERO_MINUTE,
    "5": ZERO_SECOND,
    "6": YEAR,
}


class ZoneChunk:
    """A numeric UTC offset element such as ``-07:00`` or ``Z0700``."""

    def __init__(self, utc_z: bool, colons: bool, seconds: bool, minutes: bool):
        self.utc_z = utc_z
        self.colons = colons
        self.seconds = seconds
        self.minutes = minutes

    def render(self, instant: datetime) -> str:
        offset = instant.utcoffset()
        total = int(offset.total_seconds()) if offset is not None else 0
        if total == 0 and self.utc_z:
            return "Z"
        sign = "-" if total < 0 else "+"
        total = abs(total)
        hours, rest = divmod(total, 3600)
        minutes, seconds = divmod(rest, 60)
        sep = ":" if self.colons else ""
        out = f"{sign}{hours:02d}"
        if self.minutes:
            out += f"{sep}{minutes:02d}"
        if self.seconds:
            out += f"{sep}{seconds:02d}"
        return out


class FractionChunk:
    """Fractional seconds: ``.000`` keeps trailing zeros, ``.999`` trims them."""

    def __init__(self, separator: str, digits: int, trim: bool):
        self.separator = separator
        self.digits = digits
        self.trim = trim

    def render(self, instant: datetime) -> str:
        nanos = f"{instant.microsecond * 1000:09d}"[: self.digits]
        if self.trim:
            nanos = nanos.rstrip("0")
            if not nanos:
                return ""
        return self.separator + nanos


def _starts_with_lower(value: str) -> bool:
    return bool(value) and "a" <= value[0] <= "z"


def _next_chunk(
    layout: str, i: int
) -> tuple[str | ZoneChunk | FractionChunk | None, int]:
    """Return ``(chunk, length)`` for the element starting at ``layout[i]``.

    ``chunk`` is None when the character at ``i`` starts no element.
    """
    ch = layout[i]
    rest = layout[i:]
    if ch == "J":
        if rest.startswith("January"):
            return LONG_MONTH, 7
        if rest.startswith("Jan") and not _starts_with_lower(layout[i + 3 :]):
            return MONTH, 3
    elif ch == "M":
        if rest.startswith("Monday"):
            return LONG_WEEKDAY, 6
        if rest.startswith("Mon") and not _starts_with_lower(layout[i + 3 :]):
            return WEEKDAY, 3
        if rest.startswith("MST"):
            return TZ_NAME, 3
    elif ch == "0":
        if len(rest) >= 2 and rest[1] in _ZERO_ELEMENTS:
            return _ZERO_ELEMENTS[rest[1]], 2
        if rest.startswith("002"):
            return ZERO_YEAR_DAY, 3
    elif ch == "1":
        if rest.startswith("15"):
            return HOUR, 2
        return NUM_MONTH, 1
    elif ch == "2":
        if rest.startswith("2006"):
            return LONG_YEAR, 4
        return DAY, 1
    elif ch == "_":
        if rest.startswith("_2"):
            # "_2006" is a literal underscore followed by the year
            if rest.startswith("_2006"):
                return None, 1
            return UNDER_DAY, 2
        if rest.startswith("__2"):
            return UNDER_YEAR_DAY, 3
    elif ch == "3":
        return HOUR12, 1
    elif ch == "4":
        return MINUTE, 1
    elif ch == "5":
        return SECOND, 1
    elif ch == "P":
        if rest.startswith("PM"):
            return PM_UPPER, 2
    elif ch == "p":
        if rest.startswith("pm"):
            return PM_LOWER, 2
    elif ch in "-Z":
        for element, utc_z, colons, seconds, minutes in _ZONE_ELEMENTS:
            if utc_z == (ch == "Z") and rest.startswith(element):
                return ZoneChunk(utc_z, colons, seconds, minutes), len(element)
    elif ch in ".,":
        if len(rest) >= 2 and rest[1] in "09":
            digit = rest[1]
            j = 1
            while j < len(rest) and rest[j] == digit:
                j += 1
            if not (j < len(rest) and rest[j].isdigit()):
                return FractionChunk(ch, j - 1, digit == "9"), j
    return None, 1


def _hour12(hour: int) -> int:
    hour %= 12
    return 12 if hour == 0 else hour


def _render_chunk(chunk: str, instant: datetime) -> str:
    if chunk == LONG_YEAR:
        return f"{instant.year:04d}"
    if chunk == YEAR:
        return f"{instant.year % 100:02d}"
    if chunk == LONG_MONTH:
        return MONTH_NAMES[instant.month - 1]
    if chunk == MONTH:
        return MONTH_NAMES[instant.month - 1][:3]
    if chunk == NUM_MONTH:
        return str(instant.month)
    if chunk == ZERO_MONTH:
        return f"{instant.month:02d}"
    if chunk == LONG_WEEKDAY:
        return DAY_NAMES[instant.weekday()]
    if chunk == WEEKDAY:
        return DAY_NAMES[instant.weekday()][:3]
    if chunk == DAY:
        return str(instant.day)
    if chunk == UNDER_DAY:
        return f"{instant.day:>2d}"
    if chunk == ZERO_DAY:
        return f"{instant.day:02d}"
    if chunk == UNDER_YEAR_DAY:
        return f"{instant.timetuple().tm_yday:>3d}"
    if chunk == ZERO_YEAR_DAY:
        return f"{instant.timetuple().tm_yday:03d}"
    if chunk == HOUR:
        return f"{instant.hour:02d}"
    if chunk == HOUR12:
        return str(_hour12(instant.hour))
    if chunk == ZERO_HOUR12:
        return f"{_hour12(instant.hour):02d}"
    if chunk == MINUTE:
        return str(instant.minute)
    if chunk == ZERO_MINUTE:
        return f"{instant.minute:02d}"
    if chunk == SECOND:
        return str(instant.second)
    if chunk == ZERO_SECOND:
        return f"{instant.second:02d}"
    if chunk == PM_UPPER:
        return "PM" if instant.hour >= 12 else "AM"
    if chunk == PM_LOWER:
        return "pm" if instant.hour >= 12 else "am"
    if chunk == TZ_NAME:
        name = instant.tzname()
        if name:
            return name
        return ZoneChunk(False, False, False, True).render(instant)
    raise AssertionError(f"unhandled layout element {chunk!r}")


# ("literal", text), or ("element", kind) where kind is an element constant
# above or a ZoneChunk/FractionChunk
Chunk = tuple[str, str | ZoneChunk | FractionChunk]


class Layout:
    """A reference layout compiled into literal and element chunks."""

    def __init__(self, layout: str) -> None:
        self.layout = layout
        self.chunks: list[Chunk] = []
        literal: list[str] = []
        i = 0
        while i < len(layout):
            chunk, size = _next_chunk(layout, i)
            if chunk is None:
                literal.append(layout[i : i + size])
            else:
                if literal:
                    self.chunks.append(("literal", "".join(literal)))
                    literal = []
                self.chunks.append(("element", chunk))
            i += size
        if literal:
            self.chunks.append(("literal", "".join(literal)))

    def format(self, instant: datetime) -> str:
        """Render ``instant`` according to this layout."""
        parts: list[str] = []
        for kind, value in self.chunks:
            if kind == "literal":
                parts.append(value)
            elif isinstance(value, (ZoneChunk, FractionChunk)):
                parts.append(value.render(instant))
            else:
                parts.append(_render_chunk(value, instant))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Layout({self.layout!r})"


def format_layout(instant: datetime, layout: str) -> str:
    """Format ``instant`` with a reference layout string."""
    return Layout(layout).format(instant)

"""Stamp template compiler and renderer.

A template mixes literal text with brace tokens::

    {elapsed:.1f}s {delta:.1f}s #{line} {}

``{{`` and ``}}`` produce literal braces, ``{}`` marks where the original
line goes and every other ``{name:arg}`` token is evaluated per line. When a
template has no ``{}`` the line is appended after a single space.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from stampy.errors import (
    DuplicatePlaceholderError,
    EmptyTokenError,
    InvalidModifierError,
    UnknownTokenError,
    UnterminatedTokenError,
)
from stampy.layout import RFC3339, RFC3339_NANO, Layout, convert_date_layout

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "{iso}: {}"
DEFAULT_DURATION_SPEC = ".1f"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

# printf style float verbs only: [flags][width][.precision]verb
_FLOAT_SPEC = re.compile(r"([-+ 0#]*)(\d*)(\.\d+)?([fFeEgG])")

_NAMED_LAYOUTS = {
    "iso": RFC3339,
    "iso8601": RFC3339,
    "iso8601nano": RFC3339_NANO,
    "isonano": RFC3339_NANO,
}


@dataclass(frozen=True)
class StampState:
    """Everything a template needs to render one line."""

    now: datetime
    delta: timedelta = timedelta(0)
    elapsed: timedelta = timedelta(0)
    line: int = 0
    line_text: str = ""


Evaluator = Callable[[StampState], str]


@dataclass(frozen=True)
class LiteralSegment:
    value: str

    def render(self, state: StampState) -> str:
        return self.value


@dataclass(frozen=True)
class LineSegment:
    def render(self, state: StampState) -> str:
        return state.line_text


@dataclass(frozen=True)
class TokenSegment:
    name: str
    arg: str
    evaluate: Evaluator = field(compare=False, repr=False)

    def render(self, state: StampState) -> str:
        return self.evaluate(state)


Segment = LiteralSegment | LineSegment | TokenSegment


@dataclass(frozen=True)
class Template:
    """A compiled template. Build one with :func:`parse`."""

    source: str
    segments: tuple[Segment, ...]
    has_line_placeholder: bool

    @staticmethod
    def parse(source: str) -> "Template":
        return parse(source)

    def render(self, state: StampState) -> str:
        """Render the stamp for ``state``.

        Without an explicit ``{}`` the line text is appended, separated by a
        space when the rendered prefix is non-empty.
        """
        out = "".join(segment.render(state) for segment in self.segments)
        if not self.has_line_placeholder and state.line_text:
            if out:
                out += " "
            out += state.line_text
        return out


def parse(source: str) -> Template:
    """Compile a template string.

    Args:
        source: Template text, e.g. ``"{iso}: {}"``

    Returns:
        The compiled Template

    Raises:
        TemplateError: If the template is structurally invalid
    """
    segments: list[Segment] = []
    literal: list[str] = []
    has_line = False

    def flush_literal() -> None:
        if literal:
            segments.append(LiteralSegment("".join(literal)))
            literal.clear()

    pos = 0
    while pos < len(source):
        ch = source[pos]
        if ch == "{":
            if source.startswith("{{", pos):
                literal.append("{")
                pos += 2
                continue
            flush_literal()
            content, pos = _consume_token(source, pos)
            if content == "":
                if has_line:
                    raise DuplicatePlaceholderError()
                has_line = True
                segments.append(LineSegment())
                continue
            segments.append(_build_token_segment(content))
        elif ch == "}":
            # "}}" is an escape; a lone "}" is kept as is
            literal.append("}")
            pos += 2 if source.startswith("}}", pos) else 1
        else:
            literal.append(ch)
            pos += 1
    flush_literal()

    logger.debug(f"Compiled template {source!r} into {len(segments)} segments")
    return Template(
        source=source, segments=tuple(segments), has_line_placeholder=has_line
    )


def _consume_token(source: str, start: int) -> tuple[str, int]:
    """Return the token text opening at ``start`` and the index just past it."""
    depth = 0
    for i in range(start, len(source)):
        if source[i] == "{":
            depth += 1
        elif source[i] == "}":
            depth -= 1
            if depth == 0:
                return source[start + 1 : i], i + 1
    raise UnterminatedTokenError()


def _build_token_segment(raw: str) -> TokenSegment:
    name, _, arg = raw.partition(":")
    name = name.strip()
    arg = arg.strip()

    if not name:
        raise EmptyTokenError()

    if name == "elapsed":
        evaluate = _duration_evaluator(arg, lambda state: state.elapsed)
    elif name == "delta":
        evaluate = _duration_evaluator(arg, lambda state: state.delta)
    elif name == "time":
        evaluate = _time_evaluator(arg)
    elif name == "iso":
        evaluate = _time_evaluator("iso")
    elif name == "unix":
        evaluate = _unix_evaluator(arg)
    elif name == "line":
        evaluate = _line_evaluator
    else:
        raise UnknownTokenError(name)
    return TokenSegment(name=name, arg=arg, evaluate=evaluate)


def to_format_spec(modifier: str, kind: str = "numeric") -> str:
    """Translate a printf style float modifier into a Python format spec.

    Only ``[flags][width][.precision]verb`` is accepted, with flags from
    ``-+ 0#`` and a verb from ``fFeEgG``; ``"-8.3f"`` becomes ``"<8.3f"``.

    Raises:
        InvalidModifierError: For anything outside that subset
    """
    if "{" in modifier or "}" in modifier:
        raise InvalidModifierError(kind, modifier)
    match = _FLOAT_SPEC.fullmatch(modifier)
    if match is None:
        raise InvalidModifierError(kind, modifier)
    flags, width, precision, verb = match.groups()

    spec = ""
    if "-" in flags:
        spec += "<"
    if "+" in flags:
        spec += "+"
    elif " " in flags:
        spec += " "
    if "#" in flags:
        spec += "#"
    if "0" in flags and "-" not in flags:
        spec += "0"
    return spec + width + (precision or "") + verb


def _duration_evaluator(
    modifier: str, getter: Callable[[StampState], timedelta]
) -> Evaluator:
    spec = to_format_spec(modifier or DEFAULT_DURATION_SPEC, "duration")

    def evaluate(state: StampState) -> str:
        return format(getter(state).total_seconds(), spec)

    return evaluate


def _time_evaluator(arg: str) -> Evaluator:
    named = arg.lower()
    if named in ("unix", "unixs"):
        return _unix_evaluator("")
    if not arg:
        layout = Layout(RFC3339)
    elif named in _NAMED_LAYOUTS:
        layout = Layout(_NAMED_LAYOUTS[named])
    else:
        layout = Layout(convert_date_layout(arg))

    def evaluate(state: StampState) -> str:
        return layout.format(state.now)

    return evaluate


def _since_epoch(instant: datetime) -> timedelta:
    if instant.tzinfo is None:
        # naive values are local wall time
        instant = instant.astimezone()
    return instant - _EPOCH


def _unix_evaluator(modifier: str) -> Evaluator:
    if not modifier:

        def evaluate_seconds(state: StampState) -> str:
            return str(_since_epoch(state.now) // _ONE_SECOND)

        return evaluate_seconds

    spec = to_format_spec(modifier, "unix")

    def evaluate(state: StampState) -> str:
        seconds = _since_epoch(state.now) / _ONE_SECOND
        if seconds == 0:
            # never print "-0.0"
            seconds = 0.0
        return format(seconds, spec)

    return evaluate


def _line_evaluator(state: StampState) -> str:
    return str(state.line)

"""Output emitters: plain stamped text or merged JSON lines."""

import json
import logging
import re
from typing import Any, BinaryIO, Protocol

from stampy.buffer import Emission
from stampy.template import StampState, Template

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# Lines are decoded with surrogateescape so undecodable bytes pass through
# text mode unchanged.
ENCODING_ERRORS = "surrogateescape"
LINE_FIELD = "line"

# Escaped input bytes and unpaired \uD800-\uDFFF escapes from decoded JSON
_SURROGATES = re.compile("[\ud800-\udfff]")


class Emitter(Protocol):
    def emit(self, emission: Emission) -> None: ...


def _state_for(emission: Emission, line_text: str) -> StampState:
    return StampState(
        now=emission.record.timestamp,
        delta=emission.delta,
        elapsed=emission.elapsed,
        line=emission.line,
        line_text=line_text,
    )


class TextEmitter:
    """Writes the rendered template, line text included."""

    def __init__(self, template: Template, writer: BinaryIO) -> None:
        self.template = template
        self.writer = writer

    def emit(self, emission: Emission) -> None:
        rendered = self.template.render(_state_for(emission, emission.record.text))
        if emission.record.has_newline:
            rendered += "\n"
        self.writer.write(rendered.encode(ENCODING, ENCODING_ERRORS))


class JSONEmitter:
    """Writes one JSON object per line with the stamp stored under ``json_key``.

    JSON objects get the stamp merged in. Any other input (arrays, scalars,
    or text that is not JSON at all) is wrapped as
    ``{json_key: stamp, "line": value}``. Output is always valid UTF-8:
    undecodable bytes and lone surrogates become U+FFFD.
    """

    def __init__(self, template: Template, writer: BinaryIO, json_key: str) -> None:
        self.template = template
        self.writer = writer
        self.json_key = json_key

    def emit(self, emission: Emission) -> None:
        # The stamp never embeds the line; it is placed by merge_line instead.
        stamp = self.template.render(_state_for(emission, ""))
        result = merge_line(emission.record.text, stamp, self.json_key)
        out = json.dumps(
            result, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        )
        out = _SURROGATES.sub("\ufffd", out)
        if emission.record.has_newline:
            out += "\n"
        self.writer.write(out.encode(ENCODING))


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


def merge_line(line: str, stamp: str, json_key: str) -> Any:
    """Combine ``stamp`` with the JSON value parsed from ``line``.

    Examples:
        >>> merge_line('{"level": "info"}', "0s", "ts")
        {'level': 'info', 'ts': '0s'}
        >>> merge_line("42", "0s", "ts")
        {'ts': '0s', 'line': 42}
        >>> merge_line("{invalid json", "0s", "ts")
        {'ts': '0s', 'line': '{invalid json'}
    """
    try:
        parsed = json.loads(line, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        logger.debug(f"Line is not JSON, wrapping as string: {line[:80]!r}")
        return {json_key: stamp, LINE_FIELD: line}

    if isinstance(parsed, dict):
        parsed[json_key] = stamp
        return parsed
    return {json_key: stamp, LINE_FIELD: parsed}

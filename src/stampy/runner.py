"""Read lines, stamp them and write them out."""

import logging
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Callable

from stampy.buffer import LineBuffer, LineRecord
from stampy.emitters import (
    ENCODING,
    ENCODING_ERRORS,
    Emitter,
    JSONEmitter,
    TextEmitter,
)
from stampy.template import DEFAULT_TEMPLATE, Template, parse

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class Options:
    """Settings for one stamping run.

    Attributes:
        template: Template text; the default template is used when empty
        template_provided: Whether the template was given explicitly
        input: Input file path, or None for stdin
        output: Output file path, or None for stdout
        json_key: Enables JSON mode, storing the stamp under this key
    """

    template: str = ""
    template_provided: bool = False
    input: str | None = None
    output: str | None = None
    json_key: str | None = None


def system_clock() -> datetime:
    """Current local time, timezone aware."""
    return datetime.now().astimezone()


def run(options: Options) -> None:
    """Run with the system clock."""
    run_with_clock(options, system_clock)


def run_with_clock(options: Options, now: Clock) -> None:
    """Compile the template, open the streams and process every line.

    The template is compiled before any file is opened, so a bad template
    never creates or truncates the output file.

    Raises:
        TemplateError: If the template does not compile
        OSError: If a file cannot be opened, read or written
    """
    source = options.template
    if not options.template_provided or not source:
        source = DEFAULT_TEMPLATE

    template = parse(source)

    with open_io(options.input, options.output) as (reader, writer):
        process_lines(reader, writer, template, options, now)


@contextmanager
def open_io(
    input_path: str | None, output_path: str | None
) -> Iterator[tuple[BinaryIO, BinaryIO]]:
    """Yield binary ``(reader, writer)`` streams.

    Missing paths fall back to stdin/stdout. Only files opened here are
    closed on exit.
    """
    with ExitStack() as stack:
        if input_path:
            reader = stack.enter_context(open(input_path, "rb"))
        else:
            reader = sys.stdin.buffer
        if output_path:
            writer = stack.enter_context(open(output_path, "wb"))
        else:
            writer = sys.stdout.buffer
        yield reader, writer


def select_emitter(
    template: Template, writer: BinaryIO, json_key: str | None
) -> Emitter:
    if json_key:
        logger.debug(f"JSON mode, stamp key {json_key!r}")
        return JSONEmitter(template, writer, json_key)
    return TextEmitter(template, writer)


def process_lines(
    reader: BinaryIO,
    writer: BinaryIO,
    template: Template,
    options: Options,
    now: Clock,
) -> None:
    """Stamp every line of ``reader`` onto ``writer``.

    Each line is emitted once the next one has been read, since its delta
    depends on the next timestamp. The final line is flushed at EOF. On any
    read or write error the pending line is dropped and the error propagates.
    """
    buffer = LineBuffer()
    emitter = select_emitter(template, writer, options.json_key)
    count = 0

    for raw in iter(reader.readline, b""):
        text = raw.decode(ENCODING, ENCODING_ERRORS)
        has_newline = text.endswith("\n")
        if has_newline:
            text = text[:-1]
        record = LineRecord(text=text, has_newline=has_newline, timestamp=now())

        emission = buffer.push(record)
        if emission is not None:
            emitter.emit(emission)
            writer.flush()
            count += 1

    emission = buffer.flush()
    if emission is not None:
        emitter.emit(emission)
        writer.flush()
        count += 1

    logger.debug(f"Stamped {count} lines")

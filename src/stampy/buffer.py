"""One-line lookahead buffer that turns timestamped lines into emissions."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class LineRecord:
    """A single input line, captured when it was read.

    Attributes:
        text: Line contents without the trailing newline
        has_newline: Whether the input line ended with a newline
        timestamp: Clock reading taken right after the line was read
    """

    text: str
    has_newline: bool
    timestamp: datetime


@dataclass(frozen=True)
class Emission:
    """A record ready to be rendered, with its timing computed."""

    record: LineRecord
    delta: timedelta
    elapsed: timedelta
    line: int


class LineBuffer:
    """Holds back one line until the next one arrives.

    ``delta`` looks forward to the following line, so a line can only be
    emitted once its successor (or the end of input) is known. The last
    line is emitted by :meth:`flush` with a delta of zero.
    """

    def __init__(self) -> None:
        self._start: datetime | None = None
        self._pending: LineRecord | None = None
        self._line_number = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def push(self, record: LineRecord) -> Emission | None:
        """Add ``record``; return the emission for the previous line, if any."""
        if self._start is None:
            self._start = record.timestamp

        if self._pending is None:
            self._pending = record
            return None

        emission = self._prepare(
            self._pending, record.timestamp - self._pending.timestamp
        )
        self._pending = record
        return emission

    def flush(self) -> Emission | None:
        """Emit the pending line, if any. Safe to call repeatedly."""
        if self._pending is None:
            return None
        emission = self._prepare(self._pending, timedelta(0))
        self._pending = None
        return emission

    def _prepare(self, record: LineRecord, delta: timedelta) -> Emission:
        assert self._start is not None
        self._line_number += 1
        return Emission(
            record=record,
            delta=delta,
            elapsed=record.timestamp - self._start,
            line=self._line_number,
        )

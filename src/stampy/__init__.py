"""stampy - prefix every line of a stream with timestamps and timing."""

__version__ = "1.0.0"

from .buffer import Emission, LineBuffer, LineRecord  # noqa: E402
from .emitters import JSONEmitter, TextEmitter, merge_line  # noqa: E402
from .errors import TemplateError  # noqa: E402
from .layout import Layout, convert_date_layout  # noqa: E402
from .runner import Options, process_lines, run, run_with_clock  # noqa: E402
from .template import DEFAULT_TEMPLATE, StampState, Template, parse  # noqa: E402

__all__ = [
    "DEFAULT_TEMPLATE",
    "Emission",
    "JSONEmitter",
    "Layout",
    "LineBuffer",
    "LineRecord",
    "Options",
    "StampState",
    "Template",
    "TemplateError",
    "TextEmitter",
    "convert_date_layout",
    "merge_line",
    "parse",
    "process_lines",
    "run",
    "run_with_clock",
]

"""Command-line argument definitions for stampy."""

import argparse
from dataclasses import dataclass

from stampy import __version__

EPILOG = """
Template tokens:
  {}                 the original line (appended after a space if omitted)
  {elapsed[:.1f]}    seconds since the first line
  {delta[:.1f]}      seconds until the next line (0 for the last line)
  {time[:LAYOUT]}    wall clock time; LAYOUT is iso, isonano, unix,
                     a reference layout (15:04:05) or strftime (%H:%M:%S)
  {iso}              same as {time:iso}
  {unix[:.3f]}       seconds since the Unix epoch
  {line}             1-based line number
  {{ and }}          literal braces

Examples:
  make 2>&1 | stampy -t '{elapsed:.2f}s {}'
  tail -f app.jsonl | stampy --json ts -t '{time:%H:%M:%S.%f}'
"""


@dataclass
class Args:
    input: str | None
    output: str | None
    template: str | None
    json_key: str | None
    log: bool
    verbose: bool

    def __post_init__(self) -> None:
        assert isinstance(
            self.input, (str, type(None))
        ), f"Expected str, got {type(self.input)}"
        assert isinstance(
            self.output, (str, type(None))
        ), f"Expected str, got {type(self.output)}"
        assert isinstance(
            self.template, (str, type(None))
        ), f"Expected str, got {type(self.template)}"
        assert isinstance(
            self.json_key, (str, type(None))
        ), f"Expected str, got {type(self.json_key)}"
        assert isinstance(self.log, bool), f"Expected bool, got {type(self.log)}"
        assert isinstance(
            self.verbose, bool
        ), f"Expected bool, got {type(self.verbose)}"

    @staticmethod
    def parse_args(argv: list[str] | None = None) -> "Args":
        """Parse command-line arguments and return Args instance."""
        return _parse_args(argv)


def _parse_args(argv: list[str] | None = None) -> Args:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="stampy",
        description="Prefix every line of a stream with timestamps and timing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "input", help="Input file (defaults to stdin)", nargs="?", default=None
    )
    parser.add_argument(
        "output", help="Output file (defaults to stdout)", nargs="?", default=None
    )
    parser.add_argument(
        "-t",
        "--template",
        help="Stamp template (default: '{iso}: {}')",
        type=str,
    )
    parser.add_argument(
        "-j",
        "--json",
        dest="json_key",
        metavar="KEY",
        help="Emit JSON lines with the stamp stored under KEY",
        type=str,
    )
    parser.add_argument(
        "--log",
        help="Also write diagnostics to stampy.log",
        action="store_true",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Enable debug logging on stderr",
        action="store_true",
    )
    parser.add_argument("--version", action="version", version=__version__)
    tmp = parser.parse_args(argv)

    out: Args = Args(
        input=tmp.input,
        output=tmp.output,
        template=tmp.template,
        json_key=tmp.json_key,
        log=tmp.log,
        verbose=tmp.verbose,
    )
    return out

"""
stampy entry point:
  * parse arguments
  * resolve template and JSON key (flag, environment, config file, default)
  * stamp input lines onto the output
"""

import logging
import os
import sys

from stampy.args import Args
from stampy.config import create_or_load_config, resolve_json_key, resolve_template
from stampy.console import error
from stampy.errors import TemplateError
from stampy.runner import Options, run
from stampy.utils import configure_logging

# Logger will be configured in main() based on --log/--verbose
logger = logging.getLogger(__name__)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter does not fail flushing it."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def build_options(args: Args) -> Options:
    config = create_or_load_config()
    return Options(
        template=resolve_template(args.template, config),
        template_provided=True,
        input=args.input,
        output=args.output,
        json_key=resolve_json_key(args.json_key, config),
    )


def main(argv: list[str] | None = None) -> int:
    """Run stampy and return the process exit code."""
    args = Args.parse_args(argv)
    configure_logging(args.log, args.verbose)

    options = build_options(args)
    logger.info(f"Stamping with template {options.template!r}")

    try:
        run(options)
    except TemplateError as e:
        logger.info(f"Template rejected: {e}")
        error(f"error: parse template: {e}")
        return 1
    except BrokenPipeError:
        # Downstream reader went away (e.g. piped into head)
        logger.info("Output pipe closed")
        _silence_stdout()
        return 1
    except OSError as e:
        logger.info(f"I/O failure: {e}")
        error(f"error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Utility functions for stampy."""

import logging
import sys

LOG_FILE = "stampy.log"


def configure_logging(enable_file_logging: bool, verbose: bool = False) -> None:
    """Configure logging based on whether file logging should be enabled.

    Diagnostics go to stderr so they never mix with stamped output. Without
    ``verbose`` only warnings reach stderr while the log file gets INFO.
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers: list[logging.Handler] = [console_handler]
    if enable_file_logging:
        handlers.append(logging.FileHandler(LOG_FILE))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

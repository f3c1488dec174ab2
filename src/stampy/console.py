"""Console output utilities with color support.

Only human-facing messages go through here; stamped output is written to the
raw output stream and never colored.
"""

import sys

from colorama import Fore, Style, init

# Initialize colorama for cross-platform support
init(autoreset=True)


def success(message: str) -> None:
    """Print a success message in green."""
    print(f"{Fore.GREEN}{message}{Style.RESET_ALL}")


def info(message: str) -> None:
    """Print an informational message in cyan."""
    print(f"{Fore.CYAN}{message}{Style.RESET_ALL}")


def warning(message: str, file=None) -> None:
    """Print a warning message in yellow."""
    print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}", file=file)


def error(message: str, file=None) -> None:
    """Print an error message in red."""
    if file is None:
        file = sys.stderr
    print(f"{Fore.RED}{message}{Style.RESET_ALL}", file=file)

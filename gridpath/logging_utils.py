"""Logging utilities for gridpath.

Provides color-coded console output so grid edits, search progress and
failures are easy to tell apart in a terminal.
"""

import os
from enum import Enum

from .config import Config


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Search progress (visited / path steps)
    YELLOW = "\033[93m"    # Rejected edits, cancelled runs
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if GRIDPATH_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("GRIDPATH_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """Per-step output is only printed when Config.VERBOSE (GRIDPATH_VERBOSE) is set."""
    return Config.VERBOSE


def log_step(message: str) -> None:
    """Log a search step (blue). Silent unless verbose output is enabled."""
    if verbose_enabled():
        print(colored(f"  {LOG_TAG_STEP} {message}", Color.BLUE))


def log_warning(message: str) -> None:
    """Log a rejected edit or cancelled run (yellow)."""
    print(colored(f"{LOG_TAG_WARNING} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_STEP = "[•]"       # Search step
LOG_TAG_WARNING = "[~]"    # Rejected / cancelled
LOG_TAG_ERROR = "[!]"      # Error
LOG_TAG_SUCCESS = "[✓]"    # Success
LOG_TAG_INFO = "[i]"       # Information

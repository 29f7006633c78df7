"""ANSI output mode configuration for ansimsg."""

import os
from enum import StrEnum, auto

from rich.markup import escape

from ansimsg.console import print_warning

ANSIMSG_ANSI = "ANSIMSG_ANSI"


class AnsiMode(StrEnum):
    """Whether escape codes are sent to the console."""

    ALWAYS = auto()
    NEVER = auto()
    AUTO = auto()


def detect_ansi_mode(cli_option: AnsiMode = AnsiMode.AUTO) -> AnsiMode:
    """Detect ANSI mode based on priority order.

    Priority:
    1. CLI option if not "auto"
    2. ANSIMSG_ANSI environment variable
    3. NO_COLOR environment variable (if defined and not empty)
    4. FORCE_COLOR environment variable (if defined and not empty)
    5. "auto", the console decides from terminal detection
    """
    if cli_option != AnsiMode.AUTO:
        return cli_option

    if env_mode := os.getenv(ANSIMSG_ANSI):
        try:
            return AnsiMode(env_mode.lower())
        except ValueError:
            print_warning(
                f"Ignoring invalid {ANSIMSG_ANSI} value: {escape(env_mode)}"
            )

    if os.getenv("NO_COLOR"):
        return AnsiMode.NEVER

    if os.getenv("FORCE_COLOR"):
        return AnsiMode.ALWAYS

    return AnsiMode.AUTO

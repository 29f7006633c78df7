"""ANSI escape code table and CSI stripping."""

from __future__ import annotations

from enum import Enum, StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING

from rich.markup import escape

if TYPE_CHECKING:
    from collections.abc import Mapping

ESC = "\x1b"


class Phase(Enum):
    """CSI sequence parsing phases, ECMA-48 section 5.4."""

    INTRODUCER = auto()  # After ESC, expecting "["
    PARAMETERS = auto()  # 0-9 : ; < = > ?
    INTERMEDIATES = auto()  # Space through /
    FINAL = auto()  # @ through ~, the command (m, H, J, K, etc.)
    INVALID = auto()


class Color(StrEnum):
    """Symbolic names of the decorative escape codes."""

    RESET = auto()
    WHITE = auto()
    RED = auto()
    EMERALD_GREEN = auto()
    GOLD = auto()
    BLUE = auto()
    PURPLE = auto()
    GREEN = auto()
    GRAY = auto()
    LIGHT_RED = auto()
    LIGHT_GREEN = auto()
    LIGHT_YELLOW = auto()
    LIGHT_BLUE = auto()
    LIGHT_PURPLE = auto()
    LIGHT_CYAN = auto()


ESCAPE_CODES: Mapping[Color, str] = MappingProxyType(
    {
        Color.RESET: "\x1b[0m",
        # SGR 30 is black on most terminals
        Color.WHITE: "\x1b[30m",
        Color.RED: "\x1b[31m",
        Color.EMERALD_GREEN: "\x1b[32m",
        Color.GOLD: "\x1b[33m",
        Color.BLUE: "\x1b[34m",
        Color.PURPLE: "\x1b[35m",
        Color.GREEN: "\x1b[36m",
        Color.GRAY: "\x1b[90m",
        Color.LIGHT_RED: "\x1b[91m",
        Color.LIGHT_GREEN: "\x1b[92m",
        Color.LIGHT_YELLOW: "\x1b[93m",
        Color.LIGHT_BLUE: "\x1b[94m",
        Color.LIGHT_PURPLE: "\x1b[95m",
        Color.LIGHT_CYAN: "\x1b[96m",
    }
)


class InvalidDecorativeNameError(KeyError):
    """Decorative name not found in the escape code table."""

    def __init__(self, name: object) -> None:
        """Initialize with the rejected name."""
        self.name = name
        super().__init__(f"Unknown decorative name: {name!r}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        names = ", ".join(color.value for color in Color)
        return (
            f"[bold red]Error:[/] Unknown color {escape(repr(self.name))}\n"
            f"[bold]Known colors:[/] {names}"
        )


def lookup_code(name: Color | str) -> str:
    """Return the escape code for a symbolic name.

    Raises:
        InvalidDecorativeNameError: If name is not in the table
    """
    try:
        return ESCAPE_CODES[Color(name)]
    except ValueError as error:
        raise InvalidDecorativeNameError(name) from error


def strip_csi(text: str) -> str:
    """Remove ANSI CSI sequences from text.

    Common: ESC[31m (red), ESC[1;32m (bold green), ESC[0m (reset). Other
    characters, including a lone ESC, are kept in order.

    Removing a sequence may join an unfinished sequence before it with the
    following text, that sequence is removed too. The result contains no CSI
    sequence.
    """
    if ESC not in text:
        return text
    out: list[str] = []
    # Unfinished sequences, innermost last: index of their ESC in out, phase
    pending: list[tuple[int, Phase]] = []
    pos, length = 0, len(text)
    while pos < length:
        if not pending:
            esc = text.find(ESC, pos)
            if esc < 0:
                out.append(text[pos:])
                break
            out.append(text[pos:esc])
            pending.append((len(out), Phase.INTRODUCER))
            out.append(ESC)
            pos = esc + 1
            continue
        char = text[pos]
        pos += 1
        if char == ESC:
            pending.append((len(out), Phase.INTRODUCER))
            out.append(char)
            continue
        start, phase = pending[-1]
        phase = _advance(phase, char)
        if phase is Phase.FINAL:
            del out[start:]
            pending.pop()
        elif phase is Phase.INVALID:
            # Kept characters can never be removed, nor anything before them
            out.append(char)
            pending.clear()
        else:
            pending[-1] = (start, phase)
            out.append(char)
    return "".join(out)


def _advance(phase: Phase, char: str) -> Phase:
    """Return the phase of a CSI sequence after char."""
    if phase is Phase.INTRODUCER:
        return Phase.PARAMETERS if char == "[" else Phase.INVALID
    if phase is Phase.PARAMETERS and "0" <= char <= "?":
        return Phase.PARAMETERS
    if " " <= char <= "/":
        return Phase.INTERMEDIATES
    if "@" <= char <= "~":
        return Phase.FINAL
    return Phase.INVALID

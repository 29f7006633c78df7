"""Incremental construction of messages with ANSI escape codes.

A builder either emits decorative escape codes or suppresses them. The mode is
chosen once at construction: code building a message for a destination
without ANSI support can call the color methods unconditionally.
"""

# ruff: noqa: D102 D105

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Self

from ansimsg.ansi import Color, lookup_code

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_CAPACITY = 16


class AnsiMessageBuilder:
    """Text buffer with fluent append and color methods.

    When ``suppress_decorative`` is true, ``ansi``, ``decorative`` and the
    color shortcuts leave the buffer untouched. ``append`` always writes.
    """

    def __init__(
        self,
        buffer: StringIO | None = None,
        *,
        suppress_decorative: bool = False,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        """Initialize the builder, appending to buffer if given."""
        if buffer is None:
            buffer = StringIO()
        else:
            buffer.seek(0, 2)
        self._buffer = buffer
        self._suppress_decorative = suppress_decorative
        # StringIO grows on demand, the hint is informational
        self.capacity = capacity if capacity > 0 else DEFAULT_CAPACITY

    @classmethod
    def builder(
        cls,
        capacity: int = DEFAULT_CAPACITY,
        *,
        suppress_decorative: bool = False,
    ) -> Self:
        """Create a builder with an empty buffer."""
        return cls(suppress_decorative=suppress_decorative, capacity=capacity)

    @classmethod
    def from_buffer(
        cls, buffer: StringIO, *, suppress_decorative: bool = False
    ) -> Self:
        """Wrap an existing buffer, appending after its current content."""
        return cls(buffer, suppress_decorative=suppress_decorative)

    @property
    def suppress_decorative(self) -> bool:
        """Whether decorative calls are ignored."""
        return self._suppress_decorative

    def append(self, value: object) -> Self:
        """Append the text of value, in both modes."""
        self._buffer.write(str(value))
        return self

    def ansi(self, code: str) -> Self:
        """Append an arbitrary escape code, unless suppressed."""
        if not self._suppress_decorative:
            self._buffer.write(code)
        return self

    def decorative(self, name: Color | str) -> Self:
        """Append the escape code for a symbolic name, unless suppressed.

        Raises:
            InvalidDecorativeNameError: If name is not a known color, even
                when decorative calls are suppressed
        """
        code = lookup_code(name)
        return self.ansi(code)

    def reset(self) -> Self:
        """Reset all attributes."""
        return self.decorative(Color.RESET)

    def white(self) -> Self:
        return self.decorative(Color.WHITE)

    def red(self) -> Self:
        return self.decorative(Color.RED)

    def emerald_green(self) -> Self:
        return self.decorative(Color.EMERALD_GREEN)

    def gold(self) -> Self:
        return self.decorative(Color.GOLD)

    def blue(self) -> Self:
        return self.decorative(Color.BLUE)

    def purple(self) -> Self:
        return self.decorative(Color.PURPLE)

    def green(self) -> Self:
        return self.decorative(Color.GREEN)

    def gray(self) -> Self:
        return self.decorative(Color.GRAY)

    def light_red(self) -> Self:
        return self.decorative(Color.LIGHT_RED)

    def light_green(self) -> Self:
        return self.decorative(Color.LIGHT_GREEN)

    def light_yellow(self) -> Self:
        return self.decorative(Color.LIGHT_YELLOW)

    def light_blue(self) -> Self:
        return self.decorative(Color.LIGHT_BLUE)

    def light_purple(self) -> Self:
        return self.decorative(Color.LIGHT_PURPLE)

    def light_cyan(self) -> Self:
        return self.decorative(Color.LIGHT_CYAN)

    def render(self) -> str:
        """Return the accumulated text, without resetting the buffer."""
        return self._buffer.getvalue()

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return self._buffer.tell()

    def __repr__(self) -> str:
        mode = "suppressing" if self._suppress_decorative else "emitting"
        return f"<{type(self).__name__} {mode} {self.render()!r}>"


def build_ansi_message(
    action: Callable[[AnsiMessageBuilder], object],
    capacity: int = DEFAULT_CAPACITY,
) -> str:
    """Build a message with escape codes and return its text."""
    builder = AnsiMessageBuilder.builder(capacity)
    action(builder)
    return builder.render()


def append_ansi(
    buffer: StringIO, action: Callable[[AnsiMessageBuilder], object]
) -> AnsiMessageBuilder:
    """Append to buffer through an emitting builder."""
    builder = AnsiMessageBuilder.from_buffer(buffer)
    action(builder)
    return builder

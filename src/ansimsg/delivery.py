"""Send messages with escape codes to command senders.

Whether a destination renders escape codes is decided by a capability probe.
Messages built for a destination without ANSI support are built with
decorative calls suppressed, pre-existing text is stripped before sending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from rich.console import Console

from ansimsg.ansi import strip_csi
from ansimsg.ansi_mode import AnsiMode
from ansimsg.builder import DEFAULT_CAPACITY, AnsiMessageBuilder
from ansimsg.console import print_verbose

if TYPE_CHECKING:
    from collections.abc import Callable


class CommandSender(Protocol):
    """Destination of command output."""

    def send_message(self, text: str) -> None:
        """Deliver one message."""


@dataclass
class ConsoleCommandSender:
    """Command sender writing to a terminal console."""

    console: Console = field(default_factory=Console)
    mode: AnsiMode = AnsiMode.AUTO

    def send_message(self, text: str) -> None:
        """Write text verbatim to the console file, with a newline."""
        self.console.file.write(text + "\n")
        self.console.file.flush()

    def supports_ansi(self) -> bool:
        """Check whether the console renders escape codes."""
        if self.mode == AnsiMode.ALWAYS:
            return True
        if self.mode == AnsiMode.NEVER:
            return False
        return (
            self.console.is_terminal
            and self.console.color_system is not None
            and not self.console.no_color
        )


def is_ansi_supported(sender: object) -> bool:
    """Check whether sender displays escape codes correctly.

    Only console senders may support them, other destinations get plain text.
    """
    if isinstance(sender, ConsoleCommandSender):
        return sender.supports_ansi()
    return False


def send_ansi_message(
    sender: CommandSender,
    action: Callable[[AnsiMessageBuilder], object],
    capacity: int = DEFAULT_CAPACITY,
    *,
    supports_ansi: Callable[[CommandSender], bool] = is_ansi_supported,
) -> None:
    """Build a message and send it, suppressing escape codes if needed."""
    suppress = not supports_ansi(sender)
    builder = AnsiMessageBuilder.builder(
        capacity, suppress_decorative=suppress
    )
    action(builder)
    print_verbose(
        f"Sending {'plain' if suppress else 'ANSI'} message"
        f" to {type(sender).__name__}"
    )
    sender.send_message(builder.render())


def send_ansi_text(
    sender: CommandSender,
    message: str,
    *,
    supports_ansi: Callable[[CommandSender], bool] = is_ansi_supported,
) -> None:
    """Send text, stripping escape codes if the sender cannot display them."""
    if supports_ansi(sender):
        print_verbose(f"Sending ANSI text to {type(sender).__name__}")
        sender.send_message(message)
        return
    print_verbose(f"Sending stripped text to {type(sender).__name__}")
    sender.send_message(strip_csi(message))

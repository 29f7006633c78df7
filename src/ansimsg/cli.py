"""Ansimsg command line interface.

Build colored console messages, and strip ANSI CSI sequences from text for
destinations that cannot display them.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

import typer
from rich.console import Console

from ansimsg.ansi import (
    ESC,
    ESCAPE_CODES,
    Color,
    InvalidDecorativeNameError,
    lookup_code,
    strip_csi,
)
from ansimsg.ansi_mode import AnsiMode, detect_ansi_mode
from ansimsg.builder import AnsiMessageBuilder
from ansimsg.console import (
    print_error,
    print_exception,
    print_verbose,
    set_verbose,
)
from ansimsg.delivery import ConsoleCommandSender, send_ansi_message

app = typer.Typer()


# ruff: noqa: FBT001 FBT003 Typer API uses boolean arguments for flags
# ruff: noqa: B008 function-call-in-default-argument


def _console_sender(ansi: AnsiMode) -> ConsoleCommandSender:
    mode = detect_ansi_mode(ansi)
    print_verbose(f"ANSI mode: {mode}")
    return ConsoleCommandSender(Console(), mode=mode)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show verbose output"
    ),
) -> None:
    """Ansimsg: ANSI-aware messages for the command console."""
    if verbose:
        set_verbose()


@app.command()
def strip(
    file: Path | None = typer.Argument(
        None, help="File to read, standard input if omitted"
    ),
) -> None:
    """Copy FILE to standard output without ANSI CSI sequences.

    Other bytes are copied unchanged, including line endings and invalid
    UTF-8.
    """
    if file is None:
        _strip_stream(sys.stdin.buffer)
        return
    try:
        with file.open("rb") as stream:
            _strip_stream(stream)
    except OSError as error:
        print_error("Error reading file:", str(error))
        raise typer.Exit(1) from error


def _strip_stream(stream: BinaryIO) -> None:
    sys.stdout.flush()
    output = sys.stdout.buffer
    # CSI sequences never contain a newline
    for line in stream:
        text = line.decode("utf-8", "surrogateescape")
        output.write(strip_csi(text).encode("utf-8", "surrogateescape"))
    output.flush()


@app.command()
def echo(
    words: list[str] = typer.Argument(default_factory=list),
    color: str | None = typer.Option(
        None, "-c", "--color", help="Color name, see the colors command"
    ),
    ansi: AnsiMode = typer.Option(
        AnsiMode.AUTO, "--ansi", help="Send escape codes: auto, always, never"
    ),
) -> None:
    """Send WORDS to the console, in COLOR if the console supports it."""
    if color is not None:
        try:
            lookup_code(color)
        except InvalidDecorativeNameError as error:
            print_exception(error)
            raise typer.Exit(1) from error

    text = " ".join(words)

    def build(builder: AnsiMessageBuilder) -> None:
        if color is None:
            builder.append(text)
        else:
            builder.decorative(color).append(text).reset()

    send_ansi_message(_console_sender(ansi), build)


@app.command()
def colors(
    ansi: AnsiMode = typer.Option(
        AnsiMode.AUTO, "--ansi", help="Send escape codes: auto, always, never"
    ),
) -> None:
    """List the color names and their escape codes."""
    sender = _console_sender(ansi)
    width = max(len(name) for name in Color)
    for name, code in ESCAPE_CODES.items():
        send_ansi_message(sender, _color_line(name, code, width))


def _color_line(
    name: Color, code: str, width: int
) -> Callable[[AnsiMessageBuilder], None]:
    visible = code.replace(ESC, "ESC")

    def build(builder: AnsiMessageBuilder) -> None:
        builder.decorative(name).append(name.value.ljust(width)).reset()
        builder.append(f"  {visible}")

    return build

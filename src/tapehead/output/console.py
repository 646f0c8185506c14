"""Rich Console factory and theme for tapehead output.

Creates Console instances that render to a StringIO buffer, so every
renderer returns a string and the caller decides where it goes (the prompt
and diagnostics to stderr, stream data to stdout).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TAPEHEAD_THEME = Theme(
    {
        "tape.error": "bold red",
        "tape.title": "bold",
        "tape.path": "cyan",
        "tape.mode": "bold magenta",
        "tape.in": "green",
        "tape.out": "yellow",
        "tape.pos": "bold blue",
        "tape.unknown": "dim",
        "tape.offset": "dim",
        "tape.ascii": "cyan",
    }
)


def create_console(
    *,
    no_color: bool = False,
    color: bool = False,
    width: int | None = None,
) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes entirely.
        color: Emit ANSI styles even though the buffer is not a terminal
            (set when the text is destined for a TTY).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TAPEHEAD_THEME,
        no_color=no_color,
        force_terminal=color or None,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()

"""Rich renderers for the session banner, prompt, hex dumps and errors.

Each renderer writes to a Rich Console (backed by StringIO) and returns the
rendered text via ``get_output(console)``. Colours are only emitted when
the caller says the destination is a terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from tapehead.output.console import create_console, get_output
from tapehead.output.hexdump import hexdump_rows

if TYPE_CHECKING:
    from tapehead.domain.types import FileMode
    from tapehead.services.result import CommandResult, SessionState

USAGE_HINT = 'Enter "help" for usage.'


def render_banner(path: str, size: int, mode: FileMode, *, version: str, color: bool = False) -> str:
    """Session prologue: tool name and the file that was opened."""
    console = create_console(color=color)
    console.print(Text(f"TapeHead v{version}", style="tape.title"))
    console.print()
    console.print('Enter "help" for more information.')
    console.print()
    unit = "byte" if size == 1 else "bytes"
    line = Text("File: ")
    line.append(f'"{path}"', style="tape.path")
    line.append(f" ({size} {unit}) ")
    line.append(f"[{mode}]", style="tape.mode")
    console.print(line, soft_wrap=True)
    return get_output(console)


def render_prompt(state: SessionState, *, color: bool = False) -> str:
    """``[in:5, out:3, pos:10]> ``, showing counters only when set and non-zero."""
    console = create_console(color=color)
    prompt = Text("[")
    if state.last_read:
        prompt.append(f"in:{state.last_read}", style="tape.in")
        prompt.append(", ")
    if state.last_write:
        prompt.append(f"out:{state.last_write}", style="tape.out")
        prompt.append(", ")
    prompt.append("pos:")
    if state.cursor is None:
        prompt.append("*", style="tape.unknown")
    else:
        prompt.append(str(state.cursor), style="tape.pos")
    prompt.append("]> ")
    console.print(prompt, end="")
    return get_output(console)


def render_hexdump(result: CommandResult, *, columns: int = 16, color: bool = False) -> str:
    """Hex dump of a ``readb`` payload; empty string for an empty read."""
    console = create_console(color=color)
    for row in hexdump_rows(result.payload, result.offset, columns=columns):
        line = Text(row.offset, style="tape.offset")
        line.append(row.hex)
        line.append("  ")
        line.append(row.ascii, style="tape.ascii")
        console.print(line, soft_wrap=True)
    return get_output(console)


def render_error(result: CommandResult, *, color: bool = False) -> str:
    """``error: <message>``, with a usage hint when the line did not parse."""
    console = create_console(color=color)
    message = result.error.message if result.error else "Unknown error"
    if result.op == "parse":
        message = f"{message} {USAGE_HINT}"
    line = Text("error:", style="tape.error")
    line.append(f" {message}")
    console.print(line, soft_wrap=True)
    return get_output(console)

"""Route a CommandResult to stdout/stderr in human or JSON mode.

Human mode keeps stdout for the stream's data only: raw bytes for
``read``, the hex dump for ``readb``. Everything aimed at the person at the
prompt (help, errors) goes to stderr. JSON mode writes one serialized
CommandResult per line to stdout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tapehead.output.renderers import render_error, render_hexdump

if TYPE_CHECKING:
    from tapehead.services.result import CommandResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags, extracted from the CLI settings."""

    json_output: bool = False
    hexdump_columns: int = 16
    color: bool = False  # stderr is a terminal
    color_stdout: bool = False


@dataclass(frozen=True)
class Emission:
    """What to write where for one result."""

    stdout: bytes = b""
    stderr: str = ""


def format_result(result: CommandResult, *, settings: OutputSettings | None = None) -> Emission:
    """Format a CommandResult for display.

    Args:
        result: The command result to format.
        settings: Output mode; defaults to human-readable output.
    """
    settings = settings or OutputSettings()

    if settings.json_output:
        return Emission(stdout=(result.model_dump_json() + "\n").encode())

    if not result.ok:
        return Emission(stderr=render_error(result, color=settings.color))

    if result.op == "read":
        # Keep the prompt off the end of the data.
        return Emission(stdout=result.payload, stderr="\n" if result.payload else "")
    if result.op == "readb":
        dump = render_hexdump(
            result, columns=settings.hexdump_columns, color=settings.color_stdout
        )
        return Emission(stdout=dump.encode())
    if result.op == "help" and result.text:
        return Emission(stderr=result.text + "\n")
    return Emission()

"""AppContext — shared state for the root command and the REPL.

Created once by the CLI entry point. Configures logging, derives output
settings, and centralizes where rendered text goes (stdout/stderr).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tapehead.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tapehead.config.settings import TapeheadSettings
    from tapehead.services.result import CommandResult


class AppContext:
    """Shared context handed from the CLI to the REPL driver."""

    def __init__(self, settings: TapeheadSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from tapehead.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        self.color = not settings.json_output and _isatty("stderr")
        self.output = OutputSettings(
            json_output=settings.json_output,
            hexdump_columns=settings.hexdump.columns,
            color=self.color,
            color_stdout=not settings.json_output and _isatty("stdout"),
        )

    @property
    def interactive(self) -> bool:
        """Whether to show the banner and prompt (never in JSON mode)."""
        return not self.settings.json_output

    def emit(self, result: CommandResult) -> None:
        """Format a CommandResult and write it to stdout/stderr.

        Stream data is written to stdout as raw bytes; messages for the
        user go to stderr. Command failures never end the session.
        """
        emission = format_result(result, settings=self.output)
        if emission.stdout:
            stdout = click.get_binary_stream("stdout")
            stdout.write(emission.stdout)
            stdout.flush()
        if emission.stderr:
            self.echo_err(emission.stderr)

    def echo_err(self, text: str) -> None:
        """Write *text* to stderr as-is (no added newline)."""
        click.echo(text, err=True, nl=False, color=self.color or None)


def _isatty(name: str) -> bool:
    stream = click.get_text_stream(name)
    try:
        return stream.isatty()
    except ValueError:  # closed stream
        return False

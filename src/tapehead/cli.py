"""Root command: open a file, device, or pipe and start a session on it."""

from __future__ import annotations

import click
from pydantic import ValidationError

from tapehead import __version__
from tapehead.commands._base import TapeCommand
from tapehead.commands._context import AppContext
from tapehead.config.settings import TapeheadSettings

_EXAMPLES = """\
  tapehead disk.img
  tapehead /dev/sdb
  tapehead --json data.bin < commands.txt
  tapehead -v --log-json data.bin

At the prompt:
  read . 5          5 bytes from the cursor
  readb 40< 16      hex dump of 16 bytes, 40 before the end
  write +10 hello   "hello" 10 bytes ahead
  writeb 0 7f 45 4c 46
  seek -2"""


@click.command(cls=TapeCommand, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="tapehead")
@click.argument("path")
@click.option("--json", "json_output", is_flag=True, help="One JSON result per command.")
@click.option("-q", "--quiet", is_flag=True, help="No banner.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    path: str,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Seek, read, and write a file through a persistent cursor.

    Opens PATH once (read-write if permitted, otherwise write-only or
    read-only) and reads commands from stdin. Enter "help" at the prompt
    for the command list.
    """
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    # Unset flags stay out of the init kwargs so env vars and TOML still apply.
    try:
        settings = TapeheadSettings.from_cli(
            config_path=config_path,
            **{name: value for name, value in flags.items() if value},
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    app = AppContext(settings)
    ctx.obj = app

    from tapehead.commands.repl import run_repl
    from tapehead.infrastructure.stream import open_stream

    try:
        opened = open_stream(path)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        msg = f"{path}: {reason}"
        raise click.ClickException(msg) from exc

    with opened.stream:
        run_repl(app, opened)

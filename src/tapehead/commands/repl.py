"""Read lines, execute them, render the results.

One command at a time: the loop blocks on input, runs the command to
completion, renders its result, and only then prompts again. The session
ends on ``quit``, end of input, or Ctrl-C; command errors never end it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, BinaryIO

import click

from tapehead import __version__
from tapehead.config.logging import session_log_context
from tapehead.output.renderers import render_banner, render_prompt
from tapehead.services.session import SessionService

if TYPE_CHECKING:
    from tapehead.commands._context import AppContext
    from tapehead.infrastructure.stream import OpenedStream

logger = logging.getLogger(__name__)


def run_repl(app: AppContext, opened: OpenedStream) -> None:
    """Drive a session on *opened* until the user quits or input ends."""
    repl = app.settings.repl
    session = SessionService(
        opened.stream,
        mode=opened.mode,
        read_chunk_size=repl.read_chunk_size,
        encoding=repl.encoding,
    )

    if app.interactive and repl.banner and not app.settings.quiet:
        banner = render_banner(
            str(opened.path), opened.size, opened.mode, version=__version__, color=app.color
        )
        app.echo_err(banner + "\n")

    stdin = click.get_binary_stream("stdin")
    with session_log_context(opened):
        _drive(app, session, stdin)
        logger.debug("Session ended at %s", session.state.cursor)


def _drive(app: AppContext, session: SessionService, stdin: BinaryIO) -> None:
    encoding = app.settings.repl.encoding
    try:
        while not session.terminated:
            if app.interactive:
                app.echo_err(render_prompt(session.state, color=app.color))
            raw = stdin.readline()
            if not raw:
                # End of input: move off the prompt line before exiting.
                if app.interactive:
                    app.echo_err("\n")
                break
            # Undecodable bytes survive as surrogates and are written back verbatim.
            line = raw.removesuffix(b"\n").decode(encoding, errors="surrogateescape")
            result = session.execute_line(line)
            if result is not None:
                app.emit(result)
    except KeyboardInterrupt:
        if app.interactive:
            app.echo_err("\n")
        logger.debug("Session interrupted")

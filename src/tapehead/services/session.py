"""SessionService — the stateful command executor.

Owns the session state (cursor and last-I/O counters) and runs parsed
commands against the stream collaborator.

Pipeline per command: CHECK → RESOLVE → SEEK → I/O → COMMIT

INVARIANT: A failed command leaves the session state exactly as it was.
The new state is computed into a local value and only committed once the
stream I/O has returned. On seekable streams every command re-seeks to the
resolved target, so a stream position disturbed by a failed call is never
observed by the next command.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from tapehead import __version__
from tapehead.domain.catalog import render_help
from tapehead.domain.commands import (
    Command,
    Help,
    Quit,
    Read,
    ReadHex,
    Seek,
    Write,
    WriteHex,
    parse_command,
)
from tapehead.domain.errors import (
    InvalidText,
    IoFailure,
    PermissionDenied,
    SessionTerminated,
    TapeheadError,
)
from tapehead.domain.seek import FromEnd, SeekExpr, resolve
from tapehead.domain.types import FileMode
from tapehead.services.result import CommandResult, ServiceError, SessionState

if TYPE_CHECKING:
    from tapehead.infrastructure.stream import Stream

logger = logging.getLogger(__name__)

# Exceptions the stream may raise that mean "the I/O did not happen as asked".
_IO_EXCEPTIONS = (OSError, OverflowError, ValueError, MemoryError)

_OP_NAMES: dict[type, str] = {
    Read: "read",
    ReadHex: "readb",
    Write: "write",
    WriteHex: "writeb",
    Seek: "seek",
    Help: "help",
    Quit: "quit",
}


class SessionService:
    """Executes commands against one stream for the life of a REPL session.

    Usage::

        session = SessionService(opened.stream, mode=opened.mode)
        result = session.execute_line("read 10 5")
        if session.terminated:
            ...
    """

    def __init__(
        self,
        stream: Stream,
        *,
        mode: FileMode = FileMode.RW,
        read_chunk_size: int = 8192,
        encoding: str = "utf-8",
    ) -> None:
        self._stream = stream
        self._mode = mode
        self._read_chunk_size = read_chunk_size
        self._encoding = encoding
        self._state = SessionState(cursor=stream.current_position())
        self._terminated = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> FileMode:
        return self._mode

    @property
    def terminated(self) -> bool:
        return self._terminated

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute_line(self, line: str) -> CommandResult | None:
        """Parse and execute one input line.

        Returns None for a blank line, which is not a command and touches
        nothing.
        """
        try:
            command = parse_command(line)
        except TapeheadError as exc:
            logger.debug("Rejected line %r: %s", line, exc.code)
            return self._failure("parse", exc)
        if command is None:
            return None
        return self.execute(command)

    def execute(self, command: Command) -> CommandResult:
        """Execute a parsed command and commit its effect on success."""
        op = _OP_NAMES[type(command)]
        if self._terminated:
            return self._failure(op, SessionTerminated("Session has ended."))

        try:
            if isinstance(command, Quit):
                self._terminated = True
                return CommandResult(ok=True, op=op, state=self._state)
            if isinstance(command, Help):
                new_state = SessionState(cursor=self._state.cursor)
                self._commit(op, new_state)
                return CommandResult(
                    ok=True, op=op, state=new_state, text=render_help(__version__)
                )
            if isinstance(command, Seek):
                return self._seek(op, command.seek)
            if isinstance(command, (Read, ReadHex)):
                return self._read(op, command.seek, command.count)
            if isinstance(command, Write):
                return self._write(op, command.seek, self._encode(command.text))
            return self._write(op, command.seek, command.data)
        except TapeheadError as exc:
            logger.debug("Command %s failed: %s", op, exc.code)
            return self._failure(op, exc)

    # ------------------------------------------------------------------
    # Command implementations
    # ------------------------------------------------------------------

    def _seek(self, op: str, expr: SeekExpr) -> CommandResult:
        target = self._move_to(expr)
        new_state = SessionState(cursor=target)
        self._commit(op, new_state)
        return CommandResult(ok=True, op=op, state=new_state)

    def _read(self, op: str, expr: SeekExpr, count: int | None) -> CommandResult:
        if not self._mode.readable:
            msg = "Stream was opened write-only."
            raise PermissionDenied(msg)

        target = self._move_to(expr)
        with _io_errors("read"):
            data = self._read_counted(count) if count is not None else self._read_to_end()

        cursor = target + len(data) if target is not None else None
        new_state = SessionState(cursor=cursor, last_read=len(data))
        self._commit(op, new_state)
        return CommandResult(ok=True, op=op, state=new_state, payload=data, offset=target)

    def _write(self, op: str, expr: SeekExpr, data: bytes) -> CommandResult:
        if not self._mode.writable:
            msg = "Stream was opened read-only."
            raise PermissionDenied(msg)

        target = self._move_to(expr)
        with _io_errors("write"):
            written = self._stream.write(data)

        cursor = target + written if target is not None else None
        new_state = SessionState(cursor=cursor, last_write=written)
        self._commit(op, new_state)
        return CommandResult(ok=True, op=op, state=new_state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _move_to(self, expr: SeekExpr) -> int | None:
        """Resolve *expr* and position the stream there.

        Returns the target offset, or None on a non-seekable stream.
        """
        current = self._state.cursor
        length: int | None = None
        if isinstance(expr, FromEnd) and current is not None:
            with _io_errors("seek"):
                length = self._stream.length()

        target = resolve(expr, current, length)
        if target is not None:
            with _io_errors("seek"):
                self._stream.set_position(target)
        return target

    def _encode(self, text: str) -> bytes:
        try:
            return text.encode(self._encoding, errors="surrogateescape")
        except UnicodeEncodeError as exc:
            msg = f"Text cannot be encoded as {self._encoding}: {exc.reason}."
            raise InvalidText(msg) from exc

    def _read_counted(self, count: int) -> bytes:
        """Read up to *count* bytes, stopping at the first short read.

        No single request exceeds the chunk size.
        """
        chunks: list[bytes] = []
        remaining = count
        while remaining:
            request = min(remaining, self._read_chunk_size)
            chunk = self._stream.read(request)
            chunks.append(chunk)
            remaining -= len(chunk)
            if len(chunk) < request:
                break
        return b"".join(chunks)

    def _read_to_end(self) -> bytes:
        """Read until the stream reports EOF, however long that turns out to be."""
        chunks: list[bytes] = []
        while True:
            chunk = self._stream.read(self._read_chunk_size)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)

    def _commit(self, op: str, new_state: SessionState) -> None:
        logger.debug(
            "Executed %s: cursor=%s in=%s out=%s",
            op,
            new_state.cursor,
            new_state.last_read,
            new_state.last_write,
        )
        self._state = new_state

    def _failure(self, op: str, exc: TapeheadError) -> CommandResult:
        return CommandResult(
            ok=False,
            op=op,
            state=self._state,
            error=ServiceError(code=exc.code, message=exc.message),
        )


@contextmanager
def _io_errors(action: str) -> Generator[None]:
    """Re-raise stream exceptions as :class:`IoFailure`."""
    try:
        yield
    except _IO_EXCEPTIONS as exc:
        logger.debug("Stream %s failed", action, exc_info=True)
        msg = f"{action.capitalize()} failed: {_describe(exc)}"
        raise IoFailure(msg) from exc


def _describe(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__

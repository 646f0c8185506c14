"""SessionState, CommandResult and ServiceError — the executor's contract.

INVARIANT: Every executed command returns a CommandResult, success or not.
The REPL and the JSON output mode consume this type; nothing below the
executor ever reaches the presentation layer as an exception.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_serializer


class ServiceError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class SessionState(BaseModel):
    """Cursor and last-I/O counters shown in the prompt.

    Attributes:
        cursor: Byte offset of the stream, or None when it is not seekable.
        last_read: Bytes read by the last command, if it was a read.
        last_write: Bytes written by the last command, if it was a write.
    """

    model_config = {"frozen": True}

    cursor: int | None = None
    last_read: int | None = None
    last_write: int | None = None


class CommandResult(BaseModel):
    """Outcome of one command.

    Attributes:
        ok: Whether the command succeeded.
        op: Command name (e.g. ``"readb"``), or ``"parse"`` when the line
            could not be parsed.
        state: Session state after the command. Unchanged on failure.
        payload: Bytes read by ``read``/``readb``.
        offset: Stream offset *payload* starts at, or None when unknown.
        text: Help catalog for ``help``.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    state: SessionState
    payload: bytes = b""
    offset: int | None = None
    text: str | None = None
    error: ServiceError | None = None

    @field_serializer("payload")
    def _payload_hex(self, payload: bytes) -> str:
        return payload.hex()

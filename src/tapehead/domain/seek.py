"""Seek expressions — parsing, canonical formatting, and resolution.

Five syntaxes, each with its own reference point:

- ``.``      current position
- ``9``      absolute offset
- ``+10``    forward from the current position
- ``-2``     backward from the current position
- ``40<``    back from the end of the stream (``<`` alone is the end)

Resolution is a pure function of ``(expr, current, length)``. A ``None``
current position means the stream is not seekable.

INVARIANT: Moving forward or to an absolute offset never fails, since
"beyond EOF" is meaningful for sparse and extendable files. Moving before
byte 0 always fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tapehead.domain.errors import InvalidSeekSyntax, SeekOutOfRange, StreamNotSeekable

# Largest offset lseek(2) accepts on a 64-bit off_t.
MAX_OFFSET = 2**63 - 1

# [0-9] rather than \d: only ASCII digits are valid offsets.
_RELATIVE_PATTERN = re.compile(r"([+-])([0-9]+)")
_ABSOLUTE_PATTERN = re.compile(r"[0-9]+")
_FROM_END_PATTERN = re.compile(r"([0-9]*)<")


@dataclass(frozen=True)
class Current:
    """``.``: stay where the cursor is."""


@dataclass(frozen=True)
class Absolute:
    offset: int


@dataclass(frozen=True)
class RelativeForward:
    delta: int


@dataclass(frozen=True)
class RelativeBackward:
    delta: int


@dataclass(frozen=True)
class FromEnd:
    distance: int = 0


SeekExpr = Current | Absolute | RelativeForward | RelativeBackward | FromEnd


def _parse_offset(digits: str, token: str) -> int:
    significant = digits.lstrip("0")
    if len(significant) > len(str(MAX_OFFSET)) or int(significant or "0") > MAX_OFFSET:
        msg = f"Seek argument out of bounds: {token!r}"
        raise InvalidSeekSyntax(msg)
    return int(significant or "0")


def parse_seek(token: str) -> SeekExpr:
    """Parse a seek token into a :data:`SeekExpr`.

    Raises:
        InvalidSeekSyntax: The token has none of the five shapes, or its
            number does not fit in a file offset.

    Examples:
        >>> parse_seek("+010")
        RelativeForward(delta=10)
        >>> parse_seek("<")
        FromEnd(distance=0)
    """
    if token == ".":
        return Current()

    match = _RELATIVE_PATTERN.fullmatch(token)
    if match:
        delta = _parse_offset(match.group(2), token)
        if match.group(1) == "+":
            return RelativeForward(delta)
        return RelativeBackward(delta)

    if _ABSOLUTE_PATTERN.fullmatch(token):
        return Absolute(_parse_offset(token, token))

    match = _FROM_END_PATTERN.fullmatch(token)
    if match:
        digits = match.group(1)
        return FromEnd(_parse_offset(digits, token) if digits else 0)

    msg = f"Invalid seek argument: {token!r}" if token else "Empty seek argument."
    raise InvalidSeekSyntax(msg)


def format_seek(expr: SeekExpr) -> str:
    """Render *expr* in canonical form, e.g. ``RelativeForward(10)`` -> ``+10``."""
    if isinstance(expr, Current):
        return "."
    if isinstance(expr, Absolute):
        return str(expr.offset)
    if isinstance(expr, RelativeForward):
        return f"+{expr.delta}"
    if isinstance(expr, RelativeBackward):
        return f"-{expr.delta}"
    return f"{expr.distance}<" if expr.distance else "<"


def resolve(expr: SeekExpr, current: int | None, length: int | None) -> int | None:
    """Turn *expr* into an absolute offset.

    Args:
        expr: The parsed seek expression.
        current: The cursor, or None when the stream is not seekable.
        length: The stream length at this moment. Only consulted for
            :class:`FromEnd`; may be None otherwise.

    Returns:
        The target offset. ``Current`` on a non-seekable stream returns
        None: there is nothing to seek to, but nothing is wrong either.

    Raises:
        StreamNotSeekable: Any expression other than ``.`` on a
            non-seekable stream.
        SeekOutOfRange: The target would lie before byte 0.
    """
    if isinstance(expr, Current):
        return current

    if current is None:
        msg = "Stream not seekable. Use `.` as the seek argument."
        raise StreamNotSeekable(msg)

    if isinstance(expr, Absolute):
        return expr.offset
    if isinstance(expr, RelativeForward):
        return current + expr.delta
    if isinstance(expr, RelativeBackward):
        if expr.delta > current:
            msg = f"Cannot seek {expr.delta} bytes back from position {current}."
            raise SeekOutOfRange(msg)
        return current - expr.delta

    if length is None:
        msg = "Stream length is unknown."
        raise StreamNotSeekable(msg)
    if expr.distance > length:
        msg = f"Cannot seek {expr.distance} bytes back from the end of a {length}-byte stream."
        raise SeekOutOfRange(msg)
    return length - expr.distance

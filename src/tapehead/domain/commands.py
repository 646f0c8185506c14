"""Parse one REPL line into one :data:`Command`.

Tokens are separated by whitespace, except for ``write``: its text is
everything after the whitespace that follows the seek token, kept verbatim
so free text (including internal and trailing spaces) can be written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tapehead.domain.catalog import CommandName, lookup_command
from tapehead.domain.errors import (
    InvalidCount,
    InvalidHexByte,
    MissingArgument,
    UnexpectedArgument,
    UnknownCommand,
)
from tapehead.domain.seek import MAX_OFFSET, SeekExpr, parse_seek

_TOKEN_PATTERN = re.compile(r"\S+")
_HEX_BYTE_PATTERN = re.compile(r"[0-9A-Fa-f]{2}")
_COUNT_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Read:
    seek: SeekExpr
    count: int | None = None  # None reads to end of stream


@dataclass(frozen=True)
class ReadHex:
    seek: SeekExpr
    count: int | None = None


@dataclass(frozen=True)
class Write:
    seek: SeekExpr
    text: str


@dataclass(frozen=True)
class WriteHex:
    seek: SeekExpr
    data: bytes


@dataclass(frozen=True)
class Seek:
    seek: SeekExpr


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Read | ReadHex | Write | WriteHex | Seek | Help | Quit


def parse_command(line: str) -> Command | None:
    """Parse one input line.

    Returns None for a blank line.

    Raises:
        UnknownCommand: The command word matches no command.
        MissingArgument: A required argument is absent.
        UnexpectedArgument: Trailing tokens a command does not take.
        InvalidSeekSyntax: The seek token is malformed.
        InvalidCount: A read count is not a non-negative integer.
        InvalidHexByte: A ``writeb`` token is not two hex digits.
    """
    tokens = list(_TOKEN_PATTERN.finditer(line))
    if not tokens:
        return None

    word = tokens[0].group()
    name = lookup_command(word)
    if name is None:
        msg = f"Unrecognized command: {word!r}."
        raise UnknownCommand(msg)

    args = [token.group() for token in tokens[1:]]

    if name in (CommandName.HELP, CommandName.QUIT):
        _reject_extra(name, args, 0)
        return Help() if name is CommandName.HELP else Quit()

    if not args:
        msg = f"Missing seek argument for {name}."
        raise MissingArgument(msg)
    seek = parse_seek(args[0])

    if name is CommandName.SEEK:
        _reject_extra(name, args, 1)
        return Seek(seek)

    if name in (CommandName.READ, CommandName.READB):
        _reject_extra(name, args, 2)
        count = _parse_count(args[1]) if len(args) > 1 else None
        if name is CommandName.READ:
            return Read(seek, count)
        return ReadHex(seek, count)

    if name is CommandName.WRITE:
        text = line[tokens[1].end() :].lstrip()
        if not text:
            msg = "Missing text argument for write."
            raise MissingArgument(msg)
        return Write(seek, text)

    if len(args) < 2:
        msg = "Missing byte arguments for writeb."
        raise MissingArgument(msg)
    return WriteHex(seek, parse_hex_bytes(args[1:]))


def parse_hex_bytes(tokens: list[str]) -> bytes:
    """Decode two-digit hex tokens (any case) into bytes.

    Examples:
        >>> parse_hex_bytes(["6C", "6f", "6C"])
        b'lol'
    """
    values: list[int] = []
    for token in tokens:
        if not _HEX_BYTE_PATTERN.fullmatch(token):
            msg = f"Invalid byte argument: {token!r}. Expected two hex digits."
            raise InvalidHexByte(msg)
        values.append(int(token, 16))
    return bytes(values)


def _parse_count(token: str) -> int:
    if not _COUNT_PATTERN.fullmatch(token):
        msg = f"Invalid count argument: {token!r}."
        raise InvalidCount(msg)
    digits = token.lstrip("0") or "0"
    if len(digits) > len(str(MAX_OFFSET)) or int(digits) > MAX_OFFSET:
        msg = f"Count argument out of bounds: {token!r}."
        raise InvalidCount(msg)
    return int(digits)


def _reject_extra(name: CommandName, args: list[str], allowed: int) -> None:
    if len(args) > allowed:
        msg = f"Unexpected argument for {name}: {args[allowed]!r}."
        raise UnexpectedArgument(msg)

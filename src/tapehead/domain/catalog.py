"""Command names, aliases and synopses, plus the help text built from them.

The parser resolves command words against this table, and ``help``
renders it, so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CommandName(StrEnum):
    """Full command words accepted at the prompt."""

    READ = "read"
    READB = "readb"
    WRITE = "write"
    WRITEB = "writeb"
    SEEK = "seek"
    HELP = "help"
    QUIT = "quit"


@dataclass(frozen=True)
class CatalogEntry:
    name: CommandName
    alias: str
    synopsis: str
    summary: str


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        CommandName.READ,
        "r",
        "read <seek> [count]",
        "Read count bytes (default: to end of stream) and print them raw.",
    ),
    CatalogEntry(
        CommandName.READB,
        "rb",
        "readb <seek> [count]",
        "Like read, but print a hex dump.",
    ),
    CatalogEntry(
        CommandName.WRITE,
        "w",
        "write <seek> <text...>",
        "Write the rest of the line verbatim.",
    ),
    CatalogEntry(
        CommandName.WRITEB,
        "wb",
        "writeb <seek> <hex-byte>+",
        'Write bytes given as two-digit hex, e.g. "6C 6f 6C".',
    ),
    CatalogEntry(CommandName.SEEK, "s", "seek <seek>", "Move the cursor."),
    CatalogEntry(CommandName.HELP, "h", "help", "Show this help."),
    CatalogEntry(CommandName.QUIT, "q", "quit", "End the session."),
)

SEEK_SYNTAX: tuple[tuple[str, str], ...] = (
    (".", "current position"),
    ("9", "absolute offset 9"),
    ("+10", "10 bytes forward"),
    ("-2", "2 bytes back"),
    ("40<", "40 bytes before the end"),
    ("<", "end of stream"),
)

_ALIASES: dict[str, CommandName] = {entry.alias: entry.name for entry in CATALOG}


def lookup_command(word: str) -> CommandName | None:
    """Resolve a command word, alias, or unambiguous prefix.

    Matching is case-insensitive. When several names share the prefix and
    all of them extend the shortest one (``rea`` -> ``read``/``readb``), the
    shortest wins; any other ambiguity returns None.

    Examples:
        >>> lookup_command("rb")
        <CommandName.READB: 'readb'>
        >>> lookup_command("wri")
        <CommandName.WRITE: 'write'>
        >>> lookup_command("x") is None
        True
    """
    word = word.lower()
    if not word:
        return None
    if word in _ALIASES:
        return _ALIASES[word]

    candidates = sorted((name for name in CommandName if name.startswith(word)), key=len)
    if not candidates:
        return None
    shortest = candidates[0]
    if all(name.startswith(shortest) for name in candidates):
        return shortest
    return None


def render_help(version: str) -> str:
    """Build the plain-text help catalog."""
    width = max(len(entry.synopsis) for entry in CATALOG)
    lines = [f"TapeHead v{version}", "", "Commands:"]
    for entry in CATALOG:
        lines.append(f"  {entry.synopsis:<{width}}  ({entry.alias}) {entry.summary}")
    lines.extend(["", "Seek argument:"])
    for token, meaning in SEEK_SYNTAX:
        lines.append(f"  {token:<4}  {meaning}")
    lines.extend(
        [
            "",
            "Commands may be abbreviated to any unambiguous prefix.",
            "The prompt shows [in:<bytes read>, out:<bytes written>, pos:<cursor>];",
            "pos:* means the stream is not seekable.",
        ]
    )
    return "\n".join(lines)

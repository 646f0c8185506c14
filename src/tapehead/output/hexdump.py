"""Hex dump layout for ``readb``.

One row per *columns* bytes::

      10: 6c6f 6c20 7468 6572 6521 0a00 0102 0304  lol there!......

The offset column is decimal and right-aligned to the width of the last
row's offset (at least 4). Bytes are shown in pairs; a short last row is
padded so the ASCII column stays aligned.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_PRINTABLE = range(32, 127)


@dataclass(frozen=True)
class HexRow:
    offset: str
    hex: str
    ascii: str


def hexdump_rows(data: bytes, start: int | None = 0, *, columns: int = 16) -> Iterator[HexRow]:
    """Lay out *data* as hex dump rows.

    Args:
        data: Bytes to dump. Empty data yields no rows.
        start: Stream offset of ``data[0]``; None (unknown) counts from 0.
        columns: Bytes per row. Must be positive and even.
    """
    if not data:
        return
    if columns <= 0 or columns % 2:
        msg = f"columns must be a positive even number, got {columns}"
        raise ValueError(msg)

    base = start or 0
    last_row_offset = base + columns * ((len(data) - 1) // columns)
    offset_width = max(4, len(str(last_row_offset)))
    hex_width = columns // 2 * 5

    for index in range(0, len(data), columns):
        row = data[index : index + columns]
        groups = [
            " " + "".join(f"{byte:02x}" for byte in row[i : i + 2]) for i in range(0, len(row), 2)
        ]
        yield HexRow(
            offset=f"{base + index:>{offset_width}}:",
            hex="".join(groups).ljust(hex_width),
            ascii="".join(chr(byte) if byte in _PRINTABLE else "." for byte in row),
        )


def format_hexdump(data: bytes, start: int | None = 0, *, columns: int = 16) -> str:
    """Render *data* as plain hex dump text, one line per row."""
    return "\n".join(
        f"{row.offset}{row.hex}  {row.ascii}" for row in hexdump_rows(data, start, columns=columns)
    )

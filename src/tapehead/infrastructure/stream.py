"""Open a path once and expose positional byte I/O on it.

Streams are opened unbuffered (:class:`io.FileIO`) so every read and write
is a single system call against the device, pipe, or file, and the cursor
reported by the kernel is the cursor the user sees.

Opening falls back from read-write to write-only to read-only when the
previous attempt is refused with a permission error, so a session can still
be started on a file the user may only partially access.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from tapehead.domain.types import FileMode

logger = logging.getLogger(__name__)

# (mode, os.open flags, FileIO mode), widest access first.
_OPEN_ATTEMPTS: tuple[tuple[FileMode, int, str], ...] = (
    (FileMode.RW, os.O_RDWR, "r+"),
    (FileMode.WO, os.O_WRONLY, "w"),
    (FileMode.RO, os.O_RDONLY, "r"),
)


class Stream(Protocol):
    """The operations the session executor needs from a byte stream."""

    def current_position(self) -> int | None: ...

    def length(self) -> int: ...

    def is_seekable(self) -> bool: ...

    def set_position(self, offset: int) -> None: ...

    def read(self, count: int) -> bytes: ...

    def write(self, data: bytes) -> int: ...


class FileStream:
    """A :class:`Stream` over an unbuffered file descriptor."""

    def __init__(self, raw: io.FileIO) -> None:
        self._raw = raw
        self._seekable = raw.seekable()

    @property
    def closed(self) -> bool:
        return self._raw.closed

    def current_position(self) -> int | None:
        if not self._seekable:
            return None
        return self._raw.tell()

    def length(self) -> int:
        """Length right now, found by seeking to the end and back."""
        position = self._raw.tell()
        end = self._raw.seek(0, os.SEEK_END)
        self._raw.seek(position)
        return end

    def is_seekable(self) -> bool:
        return self._seekable

    def set_position(self, offset: int) -> None:
        self._raw.seek(offset)

    def read(self, count: int) -> bytes:
        """Read at most *count* bytes with a single system call."""
        data = self._raw.read(count)
        # FileIO returns None when a non-blocking descriptor has no data.
        return data or b""

    def write(self, data: bytes) -> int:
        """Write all of *data*, retrying on short writes."""
        view = memoryview(data)
        total = 0
        while total < len(data):
            written = self._raw.write(view[total:])
            if not written:
                msg = f"Stream accepted no bytes after {total} of {len(data)}"
                raise OSError(msg)
            total += written
        return total

    def flush(self) -> None:
        self._raw.flush()

    def close(self) -> None:
        self._raw.close()

    def __enter__(self) -> FileStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True)
class OpenedStream:
    """A freshly opened stream plus what was learned while opening it."""

    stream: FileStream
    path: Path
    size: int
    mode: FileMode
    seekable: bool


def open_stream(path: str | Path) -> OpenedStream:
    """Open *path* with the widest access the caller is granted.

    Raises:
        OSError: The path cannot be opened at all (missing, a directory,
            or no permission in any mode).
    """
    path = Path(path)
    fd: int | None = None
    mode = FileMode.RW
    file_mode = "r+"
    last_error: PermissionError | None = None
    for mode, flags, file_mode in _OPEN_ATTEMPTS:
        try:
            fd = os.open(path, flags)
        except PermissionError as exc:
            logger.debug("Open as %s refused for %s", mode, path)
            last_error = exc
            continue
        break
    if fd is None:
        assert last_error is not None
        raise last_error

    if os.path.isdir(path):
        os.close(fd)
        raise IsADirectoryError(21, "Is a directory", str(path))

    # Mode is only a label here: FileIO never re-opens or truncates a passed fd.
    stream = FileStream(io.FileIO(fd, file_mode, closefd=True))
    size = os.fstat(fd).st_size
    logger.debug("Opened %s as %s (seekable=%s)", path, mode, stream.is_seekable())
    return OpenedStream(
        stream=stream,
        path=path,
        size=size,
        mode=mode,
        seekable=stream.is_seekable(),
    )

"""Stream access modes.

A stream's mode is decided once, when it is opened, and trusted from then
on: the executor checks it before any read or write instead of inferring
permissions from a failed system call.
"""

from __future__ import annotations

from enum import StrEnum


class FileMode(StrEnum):
    """Access the stream was opened with."""

    RW = "RW"
    RO = "RO"
    WO = "WO"

    @property
    def readable(self) -> bool:
        return self is not FileMode.WO

    @property
    def writable(self) -> bool:
        return self is not FileMode.RO

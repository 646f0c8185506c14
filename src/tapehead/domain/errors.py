"""Error taxonomy for command parsing, position resolution and stream I/O.

Every error carries a stable ``code`` so the service layer can turn it into
a :class:`~tapehead.services.result.ServiceError` without inspecting the
exception type.
"""

from __future__ import annotations


class TapeheadError(Exception):
    """Base class for all errors recovered at the command boundary."""

    code = "ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidSeekSyntax(TapeheadError):
    code = "INVALID_SEEK"


class SeekOutOfRange(TapeheadError):
    """Backward seek past byte 0, or from-end seek past the start."""

    code = "SEEK_OUT_OF_RANGE"


class StreamNotSeekable(TapeheadError):
    code = "NOT_SEEKABLE"


class UnknownCommand(TapeheadError):
    code = "UNKNOWN_COMMAND"


class MissingArgument(TapeheadError):
    code = "MISSING_ARGUMENT"


class UnexpectedArgument(TapeheadError):
    code = "UNEXPECTED_ARGUMENT"


class InvalidCount(TapeheadError):
    code = "INVALID_COUNT"


class InvalidHexByte(TapeheadError):
    code = "INVALID_HEX_BYTE"


class InvalidText(TapeheadError):
    """Write text not representable in the configured encoding."""

    code = "INVALID_TEXT"


class PermissionDenied(TapeheadError):
    """The stream was not opened with the access the command needs."""

    code = "PERMISSION_DENIED"


class IoFailure(TapeheadError):
    code = "IO_FAILURE"


class SessionTerminated(TapeheadError):
    code = "SESSION_TERMINATED"


# Errors raised while turning a line into a Command.
PARSE_ERRORS: tuple[type[TapeheadError], ...] = (
    InvalidSeekSyntax,
    UnknownCommand,
    MissingArgument,
    UnexpectedArgument,
    InvalidCount,
    InvalidHexByte,
)

"""Tests for the banner, prompt, hex dump and error renderers."""

from tapehead.domain.types import FileMode
from tapehead.output.renderers import (
    USAGE_HINT,
    render_banner,
    render_error,
    render_hexdump,
    render_prompt,
)
from tapehead.services.result import CommandResult, ServiceError, SessionState


def _err(op: str, code: str, message: str) -> CommandResult:
    return CommandResult(
        ok=False,
        op=op,
        state=SessionState(cursor=0),
        error=ServiceError(code=code, message=message),
    )


class TestBanner:
    def test_contents(self) -> None:
        output = render_banner("disk.img", 67, FileMode.RW, version="1.2.3")
        assert output.splitlines() == [
            "TapeHead v1.2.3",
            "",
            'Enter "help" for more information.',
            "",
            'File: "disk.img" (67 bytes) [RW]',
        ]

    def test_singular_byte(self) -> None:
        output = render_banner("one", 1, FileMode.RO, version="0")
        assert '"one" (1 byte) [RO]' in output

    def test_brackets_in_path_are_literal(self) -> None:
        output = render_banner("[red]x", 0, FileMode.WO, version="0")
        assert '"[red]x" (0 bytes) [WO]' in output


class TestPrompt:
    def test_position_only(self) -> None:
        assert render_prompt(SessionState(cursor=10)) == "[pos:10]> "

    def test_after_read(self) -> None:
        assert render_prompt(SessionState(cursor=15, last_read=5)) == "[in:5, pos:15]> "

    def test_after_write(self) -> None:
        assert render_prompt(SessionState(cursor=3, last_write=3)) == "[out:3, pos:3]> "

    def test_zero_counters_hidden(self) -> None:
        assert render_prompt(SessionState(cursor=67, last_read=0)) == "[pos:67]> "

    def test_unknown_position(self) -> None:
        assert render_prompt(SessionState(last_read=3)) == "[in:3, pos:*]> "

    def test_both_counters(self) -> None:
        state = SessionState(cursor=9, last_read=1, last_write=2)
        assert render_prompt(state) == "[in:1, out:2, pos:9]> "

    def test_color(self) -> None:
        output = render_prompt(SessionState(cursor=1), color=True)
        assert "\x1b[" in output
        assert "pos:" in output


class TestHexdumpRenderer:
    def test_rows(self) -> None:
        result = CommandResult(
            ok=True, op="readb", state=SessionState(cursor=15), payload=b"brown", offset=10
        )
        assert render_hexdump(result) == "  10: 6272 6f77 6e" + " " * 27 + "  brown\n"

    def test_columns(self) -> None:
        result = CommandResult(ok=True, op="readb", state=SessionState(), payload=b"abcdef")
        assert render_hexdump(result, columns=4).splitlines() == [
            "   0: 6162 6364  abcd",
            "   4: 6566       ef",
        ]

    def test_empty_payload(self) -> None:
        result = CommandResult(ok=True, op="readb", state=SessionState(cursor=67), offset=67)
        assert render_hexdump(result) == ""


class TestErrorRenderer:
    def test_execution_error(self) -> None:
        output = render_error(_err("seek", "SEEK_OUT_OF_RANGE", "Cannot seek before byte 0."))
        assert output == "error: Cannot seek before byte 0.\n"

    def test_parse_error_adds_hint(self) -> None:
        output = render_error(_err("parse", "UNKNOWN_COMMAND", 'Unknown command "x".'))
        assert output == f'error: Unknown command "x". {USAGE_HINT}\n'

    def test_long_message_not_wrapped(self) -> None:
        message = "x" * 300
        assert render_error(_err("read", "IO_FAILURE", message)).count("\n") == 1

    def test_no_error_object(self) -> None:
        result = CommandResult(ok=False, op="read", state=SessionState())
        assert "Unknown error" in render_error(result)

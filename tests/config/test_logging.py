"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from tapehead.config.logging import configure_logging, session_log_context
from tapehead.infrastructure.stream import open_stream


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    tape = logging.getLogger("tapehead")
    tape_level = tape.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    tape.setLevel(tape_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("tapehead").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("tapehead").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("tapehead.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "tapehead.test"
        assert "timestamp" in parsed
        assert captured.out == ""

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("tapehead.services.session").debug("Executed seek: cursor=10")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Executed seek: cursor=10"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "tapehead.services.session"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("tapehead.commands.repl").debug("Session ended")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("asyncio").debug("loop noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestSessionLogContext:
    def test_binds_stream_fields(
        self, sample_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        opened = open_stream(sample_path)
        with opened.stream, session_log_context(opened):
            logging.getLogger("tapehead.services.session").debug("Executed read")

        parsed = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert parsed["event"] == "Executed read"
        assert parsed["path"] == str(sample_path)
        assert parsed["mode"] == "RW"
        assert parsed["seekable"] is True

    def test_unbound_after_block(
        self, sample_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        opened = open_stream(sample_path)
        with opened.stream:
            with session_log_context(opened):
                pass
            logging.getLogger("tapehead.commands.repl").debug("after")

        parsed = json.loads(capfd.readouterr().err.strip().splitlines()[-1])
        assert "path" not in parsed

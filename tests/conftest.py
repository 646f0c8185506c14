"""Shared pytest fixtures and test helpers for tapehead tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from tapehead.infrastructure.stream import OpenedStream, open_stream
from tapehead.services.session import SessionService
from tests.doubles import SAMPLE


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_path(tmp_path: Path) -> Path:
    """A 67-byte file holding :data:`SAMPLE`."""
    path = tmp_path / "sample.bin"
    path.write_bytes(SAMPLE)
    return path


@pytest.fixture
def opened(sample_path: Path) -> Iterator[OpenedStream]:
    """The sample file opened read-write."""
    result = open_stream(sample_path)
    try:
        yield result
    finally:
        result.stream.close()


@pytest.fixture
def session(opened: OpenedStream) -> SessionService:
    """A session on the sample file, cursor at 0."""
    return SessionService(opened.stream, mode=opened.mode)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from a temp directory with no tapehead.toml above it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TAPEHEAD_CONFIG", raising=False)


@pytest.fixture
def _restore_logging() -> Iterator[None]:
    """Undo the logging setup a CLI invocation performs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    tape_level = logging.getLogger("tapehead").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("tapehead").setLevel(tape_level)

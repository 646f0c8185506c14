"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tapehead.toml only contains
overrides. An empty or missing file gives a fully working session.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ReplConfig(BaseModel):
    """[repl] section."""

    model_config = {"frozen": True}

    banner: bool = True
    encoding: str = "utf-8"
    read_chunk_size: int = Field(default=8192, gt=0)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        import codecs

        try:
            codecs.lookup(value)
        except LookupError as exc:
            msg = f"unknown encoding: {value}"
            raise ValueError(msg) from exc
        return value


class HexdumpConfig(BaseModel):
    """[hexdump] section."""

    model_config = {"frozen": True}

    columns: int = Field(default=16, gt=0)

    @field_validator("columns")
    @classmethod
    def _even_columns(cls, value: int) -> int:
        if value % 2:
            msg = "hexdump columns must be even"
            raise ValueError(msg)
        return value

"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``citylink.toml`` only holds
overrides.
"""

from __future__ import annotations

import codecs

from pydantic import BaseModel, Field, field_validator


class MatrixConfig(BaseModel):
    """[matrix] section."""

    model_config = {"frozen": True}

    max_vertices: int = Field(default=10_000, ge=0)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    # Non-empty: the closure file must never take the input file's name.
    prefix: str = Field(default="out-", min_length=1)
    path_separator: str = "=>"
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            msg = f"unknown encoding {value!r}"
            raise ValueError(msg) from None
        return value

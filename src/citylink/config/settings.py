"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CITYLINK_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``citylink.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from citylink.config.discovery import resolve_config
from citylink.config.models import MatrixConfig, OutputConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered ``citylink.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


def _describe_invalid(exc: ValidationError, toml_path: Path | None) -> str:
    """One line per bad value, e.g. ``matrix.max_vertices: Input should be ...``."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    source = f" (config file {toml_path})" if toml_path else ""
    return f"Invalid configuration{source}: {problems}"


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class CityLinkSettings(BaseSettings):
    """Frozen settings for one citylink invocation.

    Attributes:
        config_path: The TOML file that was applied, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CITYLINK_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    matrix: MatrixConfig = Field(default_factory=MatrixConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_from: Path | None = None,
        **cli_flags: Any,
    ) -> CityLinkSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* wins; otherwise ``citylink.toml`` is
        discovered by walking up from *search_from* (default: cwd).
        """
        toml_path = resolve_config(config_path, search_from)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            raise click.ClickException(_describe_invalid(exc, toml_path)) from exc
        finally:
            _tls.toml_path = None

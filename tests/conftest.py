"""Shared pytest fixtures and test helpers for citylink tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from citylink.config.settings import CityLinkSettings
from citylink.domain.matrix import AdjacencyMatrix
from citylink.services.reachability import ReachabilityService
from citylink.services.telemetry import _current_span, disable_telemetry


def matrix_text(rows: list[list[int]]) -> str:
    """Render rows in the input file format."""
    lines = [str(len(rows))]
    lines.extend(" ".join(str(cell) for cell in row) for row in rows)
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep env vars, citylink logging and telemetry from leaking between tests."""
    monkeypatch.delenv("CITYLINK_CONFIG", raising=False)
    logger = logging.getLogger("citylink")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    structlog.contextvars.clear_contextvars()
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_matrix(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a matrix file under tmp_path and returning its path."""

    def _write(rows: list[list[int]], name: str = "cities.txt") -> Path:
        path = tmp_path / name
        path.write_text(matrix_text(rows), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> CityLinkSettings:
    """Default settings, with config discovery rooted at tmp_path."""
    return CityLinkSettings.from_cli(search_from=tmp_path)


@pytest.fixture
def service(settings: CityLinkSettings) -> ReachabilityService:
    return ReachabilityService(settings)


@pytest.fixture
def build_matrix() -> Callable[[list[list[int]]], AdjacencyMatrix]:
    """Factory building an in-memory matrix from nested lists."""

    def _build(rows: list[list[int]]) -> AdjacencyMatrix:
        return AdjacencyMatrix.create(len(rows)).load(cell for row in rows for cell in row)

    return _build

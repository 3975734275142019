"""Tests for the format_result dispatcher and OutputSettings."""

from __future__ import annotations

import json

from citylink.output.formatters import OutputSettings, format_result
from citylink.services.result import ServiceResult

_ROUTE = ServiceResult(ok=True, op="route", data={"exists": True, "path": [0, 1], "length": 1})


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False
        assert s.path_separator == "=>"


class TestFormatResult:
    def test_default_is_human(self) -> None:
        assert format_result(_ROUTE) == "Yes Path Exists!\n0=>1"

    def test_json_single_line(self) -> None:
        output = format_result(_ROUTE, settings=OutputSettings(json_output=True))
        assert "\n" not in output
        data = json.loads(output)
        assert data["op"] == "route"
        assert data["data"]["path"] == [0, 1]

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_ROUTE, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["ok"] is True

    def test_quiet(self) -> None:
        assert format_result(_ROUTE, settings=OutputSettings(quiet=True)) == "0=>1"

    def test_separator_forwarded(self) -> None:
        settings = OutputSettings(quiet=True, path_separator=",")
        assert format_result(_ROUTE, settings=settings) == "0,1"

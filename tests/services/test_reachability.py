"""Tests for ReachabilityService — the query facade."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from citylink.config.settings import CityLinkSettings
from citylink.services.reachability import ReachabilityService
from citylink.services.telemetry import enable_telemetry

CHAIN = [[0, 1, 0], [0, 0, 1], [0, 0, 0]]


class TestInspect:
    def test_rows_round_trip(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        rows = [[0, 1, 1], [1, 0, 0], [0, 0, 1]]
        result = service.inspect(write_matrix(rows))
        assert result.ok
        assert result.op == "inspect"
        assert result.data["size"] == 3
        assert result.data["rows"] == rows

    def test_missing_file(self, service: ReachabilityService, tmp_path: Path) -> None:
        result = service.inspect(tmp_path / "missing.txt")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FILE_ACCESS"

    def test_malformed(self, service: ReachabilityService, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("2\n0 1 0\n")
        result = service.inspect(path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "MALFORMED_INPUT"

    def test_ceiling_from_settings(
        self, tmp_path: Path, write_matrix: Callable[..., Path]
    ) -> None:
        (tmp_path / "citylink.toml").write_text("[matrix]\nmax_vertices = 2\n")
        svc = ReachabilityService(CityLinkSettings.from_cli(search_from=tmp_path))
        result = svc.inspect(write_matrix(CHAIN))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ALLOCATION"


class TestRoute:
    def test_path_exists(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.route(write_matrix(CHAIN), 0, 2)
        assert result.ok
        assert result.data["exists"] is True
        assert result.data["path"] == [0, 1, 2]
        assert result.data["length"] == 2

    def test_no_path_is_still_ok(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.route(write_matrix(CHAIN), 2, 0)
        assert result.ok
        assert result.data["exists"] is False
        assert result.data["path"] == []
        assert result.data["length"] == 0

    def test_same_vertex(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.route(write_matrix(CHAIN), 1, 1)
        assert result.data["path"] == [1]
        assert result.data["length"] == 0

    def test_invalid_vertex(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.route(write_matrix(CHAIN), 0, 3)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_VERTEX"
        assert result.error.detail["label"] == "destination"


class TestClosure:
    def test_edges_in_discovery_order(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.closure(write_matrix(CHAIN))
        assert result.ok
        assert result.data["edges"] == [[0, 1], [1, 2], [0, 2]]
        assert result.data["count"] == 3
        assert result.data["passes"] == 2

    def test_empty(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        result = service.closure(write_matrix([[0, 0], [0, 0]]))
        assert result.ok
        assert result.data["edges"] == []
        assert result.data["count"] == 0


class TestWriteClosure:
    def test_writes_derived_file(
        self, service: ReachabilityService, write_matrix: Callable[..., Path], tmp_path: Path
    ) -> None:
        result = service.write_closure(write_matrix(CHAIN))
        assert result.ok
        output = tmp_path / "out-cities.txt"
        assert result.data["output"] == str(output)
        assert result.data["count"] == 3
        assert output.read_text() == "R* table\n0 -> 1\n1 -> 2\n0 -> 2\n"

    def test_prefix_from_settings(
        self, tmp_path: Path, write_matrix: Callable[..., Path]
    ) -> None:
        (tmp_path / "citylink.toml").write_text('[output]\nprefix = "rstar-"\n')
        svc = ReachabilityService(CityLinkSettings.from_cli(search_from=tmp_path))
        result = svc.write_closure(write_matrix(CHAIN))
        assert result.ok
        assert (tmp_path / "rstar-cities.txt").is_file()

    def test_bad_input_writes_nothing(self, service: ReachabilityService, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("oops")
        result = service.write_closure(path)
        assert not result.ok
        assert not (tmp_path / "out-bad.txt").exists()


class TestTelemetry:
    def test_meta_absent_by_default(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        assert service.closure(write_matrix(CHAIN)).meta is None

    def test_span_tree_when_enabled(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        enable_telemetry()
        result = service.closure(write_matrix(CHAIN))
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "closure"
        names = [child["name"] for child in tree["children"]]
        assert names == ["load_matrix", "fixpoint"]
        fixpoint = tree["children"][1]
        assert fixpoint["counters"] == {"passes": 2, "direct": 2, "derived": 1}
        assert tree["children"][0]["counters"] == {"vertices": 3, "edges": 2}

    def test_route_spans(
        self, service: ReachabilityService, write_matrix: Callable[..., Path]
    ) -> None:
        enable_telemetry()
        result = service.route(write_matrix(CHAIN), 0, 2)
        assert result.meta is not None
        names = [child["name"] for child in result.meta["telemetry"]["children"]]
        assert names == ["load_matrix", "search"]

"""Tests for parsing the textual matrix format."""

from __future__ import annotations

import pytest

from citylink.domain.errors import AllocationError, MalformedInputError
from citylink.domain.reader import parse_matrix, read_matrix, tokenize


class TestTokenize:
    def test_whitespace_and_newlines_ignored(self) -> None:
        assert list(tokenize("2\n0  1\n\n1\t0\n")) == ["2", "0", "1", "1", "0"]

    def test_non_ascii_whitespace_is_not_a_separator(self) -> None:
        assert list(tokenize("1\u00a00\n")) == ["1\u00a00"]


class TestParseMatrix:
    def test_basic(self) -> None:
        m = parse_matrix("3\n0 1 0\n0 0 1\n0 0 0\n")
        assert m.rows() == [[0, 1, 0], [0, 0, 1], [0, 0, 0]]

    def test_layout_insensitive(self) -> None:
        m = parse_matrix("2 0 1 1 0")
        assert m.rows() == [[0, 1], [1, 0]]

    def test_trailing_tokens_ignored(self) -> None:
        m = parse_matrix("1\n1\n7 8 9\n")
        assert m.rows() == [[1]]

    def test_zero_cities(self) -> None:
        assert parse_matrix("0\n").n == 0

    def test_empty_input(self) -> None:
        with pytest.raises(MalformedInputError, match="number of cities"):
            parse_matrix("")

    def test_non_integer_count(self) -> None:
        with pytest.raises(MalformedInputError, match="number of cities"):
            parse_matrix("three\n0 0 0")

    def test_negative_count(self) -> None:
        with pytest.raises(MalformedInputError, match="negative"):
            parse_matrix("-2\n")

    def test_truncated_matrix(self) -> None:
        with pytest.raises(MalformedInputError, match="adjacency matrix"):
            parse_matrix("2\n0 1\n1\n")

    def test_non_integer_cell(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            parse_matrix("2\n0 x\n1 0\n")
        assert "cell [0][1]" in exc_info.value.message
        assert "not an integer" in exc_info.value.message
        assert exc_info.value.detail == {"token": "x", "row": 0, "column": 1}

    def test_bad_cell_located_by_row_and_column(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            parse_matrix("3\n0 0 0\n0 0 0\n0 ? 0\n")
        assert exc_info.value.detail["row"] == 2
        assert exc_info.value.detail["column"] == 1

    @pytest.mark.parametrize("cell", ["\u0661", "1_0", "0x1", "1.0", "\uff11"])
    def test_only_ascii_decimal_cells(self, cell: str) -> None:
        with pytest.raises(MalformedInputError, match="not an integer"):
            parse_matrix(f"2\n0 {cell}\n0 0\n")

    @pytest.mark.parametrize("count", ["1_0", "\u0663", "3.0"])
    def test_only_ascii_decimal_count(self, count: str) -> None:
        with pytest.raises(MalformedInputError, match="number of cities"):
            parse_matrix(f"{count}\n" + "0 " * 9)

    def test_signed_values(self) -> None:
        assert parse_matrix("+1\n-0\n").rows() == [[0]]

    def test_ceiling_applies(self) -> None:
        with pytest.raises(AllocationError):
            parse_matrix("5\n", max_vertices=4)


class TestReadMatrix:
    def test_accepts_any_token_iterable(self) -> None:
        m = read_matrix(iter(["2", "1", "0", "0", "1"]))
        assert list(m.edges()) == [(0, 0), (1, 1)]


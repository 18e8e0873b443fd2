"""Tests for adjacency matrix parsing."""
import math

import pytest

from pmnet.adjacency import coerce_cell, parse_adjacency
from pmnet.errors import PmNetError
from pmnet.models import ErrorCode


def test_valid_grid():
    parsed = parse_adjacency([["0", "1"], [" 1 ", "0"]])

    assert parsed.valid
    assert parsed.matrix == [[0, 1], [1, 0]]
    assert parsed.to_report().matrix == [[0, 1], [1, 0]]


def test_invalid_cell_reported_with_position():
    rows = [["0", "1", "0"], ["0", "0", "1"], ["x", "0", "0"]]
    parsed = parse_adjacency(rows)

    assert len(parsed.issues) == 1
    issue = parsed.issues[0]
    assert issue.code == ErrorCode.AM_INVALID_CELL_VALUE
    assert issue.meta == {"row": 2, "col": 0, "value": "x"}
    assert [len(r) for r in parsed.matrix] == [3, 3, 3]
    assert math.isnan(parsed.matrix[2][0])


def test_ragged_rows_are_kept():
    parsed = parse_adjacency([["0", "1", "1"], ["0"], ["1", "0"]])

    assert parsed.issues == []
    assert parsed.matrix == [[0, 1, 1], [0], [1, 0]]


def test_every_bad_cell_collected():
    parsed = parse_adjacency([["2", ""], ["1.0", "yes"]])

    assert [(i.meta["row"], i.meta["col"]) for i in parsed.issues] == [
        (0, 0), (0, 1), (1, 0), (1, 1)
    ]
    assert parsed.matrix[0][0] == 2
    assert parsed.matrix[1][0] == 1


@pytest.mark.parametrize(
    "token, expected",
    [("0", 0), ("1", 1), ("2", 2), ("0.5", 0.5), ("1e1", 10)],
)
def test_coerce_cell(token, expected):
    assert coerce_cell(token) == expected


def test_coerce_cell_non_numeric():
    assert math.isnan(coerce_cell("x"))
    assert math.isnan(coerce_cell(""))


def test_empty():
    with pytest.raises(PmNetError) as excinfo:
        parse_adjacency([]).raise_for_status()
    assert excinfo.value.code == ErrorCode.AM_EMPTY


def test_invalid_report_code():
    with pytest.raises(PmNetError) as excinfo:
        parse_adjacency([["0", "x"]]).to_report()
    assert excinfo.value.code == ErrorCode.AM_INVALID_CELL_VALUE
    assert excinfo.value.status_code == 422
    assert len(excinfo.value.details) == 1

"""Precedence (adjacency) matrix parsing and validation"""
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

import pandas as pd

from pmnet.errors import PmNetError, push
from pmnet.logging import get_logger
from pmnet.models import AdjacencyReport, ErrorCode, ValidationIssue

logger = get_logger(__name__)

VALID_CELLS = {"0": 0, "1": 1}

Number = Union[int, float]


def coerce_cell(token: str) -> Number:
    """Best-effort number for a trimmed cell; NaN when nothing numeric is there"""
    if token in VALID_CELLS:
        return VALID_CELLS[token]
    value = pd.to_numeric(token, errors="coerce")
    if pd.isna(value):
        return float("nan")
    value = float(value)
    return int(value) if value.is_integer() else value


@dataclass
class AdjacencyParse:
    """Outcome of one pass over the matrix rows"""
    matrix: List[List[Number]] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return bool(self.matrix) and not self.issues

    def raise_for_status(self, filename: str = "adjacency-matrix.csv") -> None:
        if not self.matrix:
            raise PmNetError(ErrorCode.AM_EMPTY, f"{filename} is empty")
        if self.issues:
            raise PmNetError(
                ErrorCode.AM_INVALID_CELL_VALUE,
                "Adjacency matrix has invalid cells",
                details=self.issues,
            )

    def to_report(self, filename: str = "adjacency-matrix.csv") -> AdjacencyReport:
        self.raise_for_status(filename)
        return AdjacencyReport(matrix=self.matrix)


def parse_adjacency(rows: Iterable[Sequence[object]]) -> AdjacencyParse:
    """Parse a header-less grid of 0/1 tokens.

    Every row is data and keeps its own length. A malformed cell is reported
    with its position and still lands in the matrix as a coerced number.
    """
    result = AdjacencyParse()

    for row_index, row in enumerate(rows):
        values = ["" if v is None else str(v).strip() for v in row]
        row_nums = []
        for col_index, value in enumerate(values):
            if value not in VALID_CELLS:
                push(
                    result.issues,
                    ErrorCode.AM_INVALID_CELL_VALUE,
                    f'Invalid value "{value}" at [row {row_index}, col {col_index}]',
                    {"row": row_index, "col": col_index, "value": value},
                )
            row_nums.append(coerce_cell(value))
        result.matrix.append(row_nums)

    logger.debug(
        "adjacency_parsed",
        rows=len(result.matrix),
        issues=len(result.issues),
    )
    return result

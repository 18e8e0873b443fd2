"""Precedence graph construction from activities and the adjacency matrix"""
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from pmnet.activities import ActivityParse
from pmnet.adjacency import AdjacencyParse
from pmnet.dates import DAY_MS, to_epoch_ms
from pmnet.errors import PmNetError, push
from pmnet.logging import get_logger
from pmnet.models import Activity, CombinedGraph, ErrorCode, Link, ValidationIssue

logger = get_logger(__name__)


def ensure_sources(activity_path: str, adjacency_path: str) -> None:
    """Fail with one aggregate report naming every absent source file"""
    missing: List[ValidationIssue] = []
    if not os.path.isfile(activity_path):
        push(missing, ErrorCode.AP_FILE_NOT_FOUND,
             f"{os.path.basename(activity_path)} not found")
    if not os.path.isfile(adjacency_path):
        push(missing, ErrorCode.AM_FILE_NOT_FOUND,
             f"{os.path.basename(adjacency_path)} not found")
    if missing:
        raise PmNetError(
            ErrorCode.PM_FILES_MISSING,
            "Required CSV file(s) missing",
            status_code=404,
            details=missing,
        )


def numeric_node_id(node_id: str) -> Optional[float]:
    value = pd.to_numeric(node_id, errors="coerce")
    if pd.isna(value):
        return None
    return float(value)


def index_activities(
    activities: Sequence[Activity],
) -> Tuple[Dict[float, Activity], List[ValidationIssue]]:
    """Map numeric node ids to activities.

    Row/column ``i`` of the matrix refers to node id ``i + 1``. Identifiers that
    are not numbers can never be addressed by the matrix; they are left out of
    the table and noted as warnings. A later duplicate replaces an earlier one.
    """
    table: Dict[float, Activity] = {}
    warnings: List[ValidationIssue] = []

    for activity in activities:
        key = numeric_node_id(activity.node_id)
        if key is None:
            push(warnings, ErrorCode.PM_NON_NUMERIC_NODE_ID,
                 f"Node ID {activity.node_id!r} is not numeric and cannot be linked",
                 {"nodeId": activity.node_id})
            continue
        table[key] = activity

    expected = {float(i) for i in range(1, len(table) + 1)}
    if table and set(table) != expected:
        push(warnings, ErrorCode.PM_NODE_IDS_NOT_CONTIGUOUS,
             f"Node IDs are not the contiguous range 1..{len(table)}",
             {"nodeIds": [_display_id(k) for k in sorted(table)]})
    return table, warnings


def _display_id(key: float):
    return int(key) if key.is_integer() else key


def span_times(activity: Activity) -> List[int]:
    times = [to_epoch_ms(activity.start_date), to_epoch_ms(activity.end_date)]
    return [t for t in times if t is not None]


def gap_days(from_activity: Activity, to_activity: Activity) -> Optional[int]:
    """Days from the predecessor's earliest date to the successor's latest date.

    Negative means the successor ends before the predecessor starts (a backward
    or overlapping dependency). None when either side has no usable date.
    """
    from_times = span_times(from_activity)
    to_times = span_times(to_activity)
    if not from_times or not to_times:
        return None
    earliest_from = min(from_times)
    latest_to = max(to_times)
    # halves round toward +inf
    return int(np.floor((latest_to - earliest_from) / DAY_MS + 0.5))


@dataclass
class GraphBuild:
    """Links plus everything noted while resolving them"""
    links: List[Link] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    skipped: int = 0

    def raise_for_status(self) -> None:
        if self.issues:
            raise PmNetError(
                ErrorCode.PM_VALIDATION_ERROR,
                "Validation issues found while building links",
                details=self.issues,
            )

    def to_graph(self) -> CombinedGraph:
        self.raise_for_status()
        return CombinedGraph(links=self.links, warnings=self.warnings)


def build_graph(
    activity_parse: ActivityParse,
    adjacency_parse: AdjacencyParse,
    activity_file: str = "activity-properties.csv",
    adjacency_file: str = "adjacency-matrix.csv",
) -> GraphBuild:
    """Resolve every 1-cell of the matrix to a link between two activities.

    Cells whose endpoints are not defined by the activity file, or whose
    endpoints carry no usable date, are skipped without a report.
    Validation issues from both parses are carried on the result; callers get
    either the links or the issues via ``to_graph``.
    """
    if not activity_parse.activities:
        raise PmNetError(ErrorCode.PM_NO_ACTIVITIES,
                         f"No activities parsed from {activity_file}")
    if not adjacency_parse.matrix:
        raise PmNetError(ErrorCode.PM_NO_ADJ_ROWS,
                         f"No rows parsed from {adjacency_file}")

    build = GraphBuild(issues=[*activity_parse.issues, *adjacency_parse.issues])
    by_id, build.warnings = index_activities(activity_parse.activities)

    for r, row_vals in enumerate(adjacency_parse.matrix):
        for c, value in enumerate(row_vals or []):
            if value != 1:
                continue
            from_activity = by_id.get(float(r + 1))
            to_activity = by_id.get(float(c + 1))
            if from_activity is None or to_activity is None:
                build.skipped += 1
                logger.debug("cell_skipped", row=r, col=c, reason="unresolved_endpoint")
                continue

            gap = gap_days(from_activity, to_activity)
            if gap is None:
                build.skipped += 1
                logger.debug("cell_skipped", row=r, col=c, reason="undated_endpoint")
                continue

            build.links.append(Link(from_=from_activity, to=to_activity, gap_days=gap))

    logger.info(
        "graph_built",
        links=len(build.links),
        issues=len(build.issues),
        skipped=build.skipped,
        warnings=len(build.warnings),
    )
    return build

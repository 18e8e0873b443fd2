"""Activity dataset parsing and validation"""
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from pmnet.dates import normalize_date
from pmnet.errors import PmNetError, push
from pmnet.logging import get_logger
from pmnet.models import Activity, ActivityReport, ErrorCode, ValidationIssue

logger = get_logger(__name__)

# Historical spellings seen in exported activity sheets, after header normalization
NODE_ID_ALIASES: Tuple[str, ...] = ("nodeid", "node_id", "id", "activity_id")
START_DATE_ALIASES: Tuple[str, ...] = ("startdate", "start_date", "start")
END_DATE_ALIASES: Tuple[str, ...] = ("enddate", "end_date", "end")

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def normalize_header(label: Any) -> str:
    """'Start Date ' -> 'start_date', 'Node-ID' -> 'node_id'"""
    text = "" if label is None else str(label)
    return _NON_ALNUM_RUN.sub("_", text.lower().strip())


def first_present(row: Mapping[str, Any], aliases: Iterable[str]) -> Optional[str]:
    """Trimmed value of the first non-blank alias; None if every alias is blank"""
    for key in aliases:
        value = row.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


@dataclass
class ActivityParse:
    """Outcome of one pass over the activity rows"""
    activities: List[Activity] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)

    @property
    def valid(self) -> bool:
        return bool(self.activities) and not self.issues

    def raise_for_status(self, filename: str = "activity-properties.csv") -> None:
        if not self.activities:
            raise PmNetError(ErrorCode.AP_EMPTY, f"{filename} is empty")
        if self.issues:
            raise PmNetError(
                ErrorCode.AP_VALIDATION_ERROR,
                "Activity properties validation failed",
                details=self.issues,
            )

    def to_report(self, filename: str = "activity-properties.csv") -> ActivityReport:
        self.raise_for_status(filename)
        return ActivityReport(data=self.activities)


def parse_activities(
    rows: Iterable[Mapping[str, Any]],
    seen: Optional[Set[str]] = None,
) -> ActivityParse:
    """Parse activity rows whose keys are already normalized headers.

    Every row produces an Activity, even when its identifier is missing or
    duplicated or its dates are invalid; the defects are collected as issues
    instead. ``seen`` carries identifiers from an earlier pass and is returned,
    updated, on the result.
    """
    result = ActivityParse(seen=set(seen) if seen else set())

    for row in rows:
        node_id = first_present(row, NODE_ID_ALIASES) or ""
        raw_start = first_present(row, START_DATE_ALIASES)
        raw_end = first_present(row, END_DATE_ALIASES)

        start_iso = normalize_date(raw_start)
        end_iso = normalize_date(raw_end)

        if not node_id:
            push(result.issues, ErrorCode.AP_NODE_ID_MISSING, "Node ID is empty")
        if node_id in result.seen:
            push(result.issues, ErrorCode.AP_DUPLICATE_NODE_ID,
                 f"Duplicate Node ID: {node_id}", {"nodeId": node_id})
        result.seen.add(node_id)

        if start_iso is None:
            push(result.issues, ErrorCode.AP_INVALID_START_DATE,
                 f"Invalid startDate for node {node_id}: {raw_start}",
                 {"nodeId": node_id, "value": raw_start})
        if end_iso is None:
            push(result.issues, ErrorCode.AP_INVALID_END_DATE,
                 f"Invalid endDate for node {node_id}: {raw_end}",
                 {"nodeId": node_id, "value": raw_end})

        result.activities.append(
            Activity(node_id=node_id, start_date=start_iso, end_date=end_iso)
        )

    logger.debug(
        "activities_parsed",
        rows=len(result.activities),
        issues=len(result.issues),
    )
    return result

"""Tests for activity row parsing."""
import pytest

from pmnet.activities import normalize_header, parse_activities
from pmnet.errors import PmNetError
from pmnet.models import ErrorCode


def codes(issues):
    return [issue.code for issue in issues]


class TestNormalizeHeader:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("nodeId", "nodeid"),
            ("Node ID", "node_id"),
            ("  Start   Date ", "start_date"),
            ("end-date", "end_date"),
            ("Activity #ID", "activity_id"),
            (None, ""),
        ],
    )
    def test_labels(self, label, expected):
        assert normalize_header(label) == expected


class TestParseActivities:
    def test_valid_rows_keep_order(self):
        rows = [
            {"node_id": "2", "start_date": "2020-01-20", "end_date": "25/1/2020"},
            {"node_id": "1", "start_date": "1/1/2020", "end_date": "2020-1-10"},
        ]
        parsed = parse_activities(rows)

        assert parsed.issues == []
        assert parsed.valid
        assert [a.node_id for a in parsed.activities] == ["2", "1"]
        assert parsed.activities[0].end_date == "2020-01-25"
        assert parsed.activities[1].start_date == "2020-01-01"

    def test_aliases_first_non_empty_wins(self):
        rows = [{"nodeid": "", "id": " 7 ", "start": "2020-01-01", "end_date": "",
                 "enddate": "2020-01-05"}]
        parsed = parse_activities(rows)

        activity = parsed.activities[0]
        assert activity.node_id == "7"
        assert activity.start_date == "2020-01-01"
        assert activity.end_date == "2020-01-05"
        assert parsed.issues == []

    def test_duplicate_reported_once_and_both_kept(self):
        rows = [
            {"node_id": "5", "start_date": "2020-01-01", "end_date": "2020-01-02"},
            {"node_id": "5", "start_date": "2020-01-03", "end_date": "2020-01-04"},
        ]
        parsed = parse_activities(rows)

        assert codes(parsed.issues) == [ErrorCode.AP_DUPLICATE_NODE_ID]
        assert parsed.issues[0].meta == {"nodeId": "5"}
        assert len(parsed.activities) == 2

    def test_invalid_dates_are_reported_and_still_emitted(self):
        rows = [{"node_id": "3", "start_date": "2013-02-29", "end_date": "soon"}]
        parsed = parse_activities(rows)

        assert codes(parsed.issues) == [
            ErrorCode.AP_INVALID_START_DATE,
            ErrorCode.AP_INVALID_END_DATE,
        ]
        assert parsed.issues[0].meta == {"nodeId": "3", "value": "2013-02-29"}
        assert parsed.issues[1].meta == {"nodeId": "3", "value": "soon"}
        activity = parsed.activities[0]
        assert activity.start_date is None
        assert activity.end_date is None

    def test_missing_id_and_dates_collect_every_issue(self):
        rows = [{"node_id": "  ", "start_date": "", "end_date": ""}]
        parsed = parse_activities(rows)

        assert codes(parsed.issues) == [
            ErrorCode.AP_NODE_ID_MISSING,
            ErrorCode.AP_INVALID_START_DATE,
            ErrorCode.AP_INVALID_END_DATE,
        ]
        assert parsed.issues[1].meta == {"nodeId": "", "value": None}
        assert parsed.activities[0].node_id == ""

    def test_seen_is_passed_in_and_returned(self):
        first = parse_activities([{"node_id": "1", "start_date": "2020-01-01",
                                   "end_date": "2020-01-02"}])
        second = parse_activities(
            [{"node_id": "1", "start_date": "2020-01-01", "end_date": "2020-01-02"}],
            seen=first.seen,
        )

        assert first.seen == {"1"}
        assert codes(second.issues) == [ErrorCode.AP_DUPLICATE_NODE_ID]
        # the caller's set is not mutated
        assert first.seen == {"1"}

    def test_fresh_state_per_call(self):
        rows = [{"node_id": "1", "start_date": "2020-01-01", "end_date": "2020-01-02"}]
        assert parse_activities(rows).issues == []
        assert parse_activities(rows).issues == []


class TestRaiseForStatus:
    def test_empty(self):
        with pytest.raises(PmNetError) as excinfo:
            parse_activities([]).raise_for_status()
        assert excinfo.value.code == ErrorCode.AP_EMPTY
        assert excinfo.value.status_code == 422

    def test_validation_carries_all_issues(self):
        rows = [
            {"node_id": "", "start_date": "x", "end_date": "2020-01-01"},
            {"node_id": "2", "start_date": "2020-01-01", "end_date": "y"},
        ]
        with pytest.raises(PmNetError) as excinfo:
            parse_activities(rows).to_report()
        error = excinfo.value
        assert error.code == ErrorCode.AP_VALIDATION_ERROR
        assert len(error.details) == 3

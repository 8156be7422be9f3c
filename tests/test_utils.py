from datetime import date, timedelta, timezone

import pytest

from gitlab_timelogs.errors import FetchError
from gitlab_timelogs.models import Issue, Timelog
from gitlab_timelogs.utils import extract_timelog_data, parse_iso_datetime, to_local_date
from tests.conftest import PLUS_TWO, issue_node, project_data, timelog_node


def test_parse_iso_datetime_accepts_zulu_and_offsets():
    assert parse_iso_datetime("2026-10-17T08:00:00Z").utcoffset() == timedelta(0)
    assert parse_iso_datetime("2026-10-17T08:00:00+02:00").utcoffset() == timedelta(hours=2)


@pytest.mark.parametrize("value", [None, "", "yesterday", "2026-13-40T00:00:00Z", "2026-10-17T08:00:00"])
def test_parse_iso_datetime_rejects_malformed_or_naive(value):
    assert parse_iso_datetime(value) is None


def test_to_local_date_uses_local_calendar_day_not_utc():
    # Midnight in UTC+2 is still the previous day in UTC
    spent_at = "2026-10-16T22:00:00Z"
    assert to_local_date(spent_at, timezone.utc) == date(2026, 10, 16)
    assert to_local_date(spent_at, PLUS_TWO) == date(2026, 10, 17)


def test_to_local_date_malformed_returns_none():
    assert to_local_date("not a date", PLUS_TWO) is None


def test_extract_timelog_data_builds_tree():
    data = project_data(
        issue_node("7", "Fix crash", timelog_node(1800, "2026-10-17T08:00:00Z", "alice")),
        issue_node("8", "Docs"),
    )

    tree = extract_timelog_data("group/project", data)

    assert tree.project_path == "group/project"
    assert tree.issues == (
        Issue(iid="7", title="Fix crash", timelogs=(Timelog(1800, "2026-10-17T08:00:00Z", "alice"),)),
        Issue(iid="8", title="Docs", timelogs=()),
    )
    assert tree.issues[0].timelogs[0].hours == 0.5


def test_extract_timelog_data_null_project():
    with pytest.raises(FetchError, match="not found"):
        extract_timelog_data("group/missing", {"project": None})


def test_extract_timelog_data_missing_key():
    broken = issue_node("1", "T")
    del broken["timelogs"]
    with pytest.raises(FetchError, match="timelogs"):
        extract_timelog_data("group/project", project_data(broken))


@pytest.mark.parametrize("seconds", ["3600", 1.5, None, True])
def test_extract_timelog_data_rejects_bad_time_spent(seconds):
    data = project_data(issue_node("1", "T", timelog_node(seconds, "2026-10-17T08:00:00Z", "alice")))
    with pytest.raises(FetchError, match="timeSpent"):
        extract_timelog_data("group/project", data)


def test_extract_timelog_data_keeps_negative_time_corrections():
    data = project_data(issue_node("1", "T", timelog_node(-1800, "2026-10-17T08:00:00Z", "alice")))

    timelog = extract_timelog_data("group/project", data).issues[0].timelogs[0]

    assert timelog.time_spent == -1800
    assert timelog.hours == -0.5

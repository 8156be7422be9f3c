"""Aggregation of timelogs into per-user time reports."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterator, Optional, Tuple

from .models import Issue, Timelog, TimelogData
from .utils import to_local_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelogEntry:
    """A timelog selected by a report, with its local date resolved."""

    hours: float
    day: date
    username: str
    issue_iid: str
    issue_title: str
    tracking: bool = False


@dataclass(frozen=True)
class UserReport:
    """Time logged by one user on a single day."""

    username: str
    day: date
    entries: Tuple[TimelogEntry, ...] = ()

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.entries)


@dataclass(frozen=True)
class TeamReport:
    """Time logged by every user since a cutoff date, split into dev and tracking time."""

    since: date
    tracking_issue: Optional[str] = None
    entries: Tuple[TimelogEntry, ...] = ()
    dev_hours: Dict[str, float] = field(default_factory=dict)
    tracking_hours: Dict[str, float] = field(default_factory=dict)

    @property
    def total_dev_hours(self) -> float:
        return sum(self.dev_hours.values())

    @property
    def total_tracking_hours(self) -> float:
        return sum(self.tracking_hours.values())


def cutoff_date(days: int, today: Optional[date] = None, tz: Optional[tzinfo] = None) -> date:
    """
    Compute the earliest calendar date of a trailing window.

    Args:
        days: Number of previous days, 0 for today only
        today: Reference date, the current date in ``tz`` when None
        tz: Timezone used to determine today, the system local timezone when None

    Returns:
        ``today - days``
    """
    if today is None:
        today = datetime.now(tz).date() if tz is not None else date.today()
    return today - timedelta(days=days)


def is_tracking_issue(title: str, tracking_issue: Optional[str]) -> bool:
    """Return True if the issue title contains the tracking substring."""
    if not tracking_issue:
        return False
    return tracking_issue in title


def _dated_timelogs(
    data: TimelogData,
    tz: Optional[tzinfo]
) -> Iterator[Tuple[Issue, Timelog, date]]:
    """Yield each timelog with its issue and local date, skipping malformed timestamps."""
    for issue in data.issues:
        for timelog in issue.timelogs:
            day = to_local_date(timelog.spent_at, tz)
            if day is None:
                logger.warning(
                    "Skipping timelog with invalid spentAt %r by %s on #%s",
                    timelog.spent_at, timelog.username, issue.iid
                )
                continue
            yield issue, timelog, day


def user_day_report(
    data: TimelogData,
    username: str,
    days: int = 0,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None
) -> UserReport:
    """
    Collect the time one user logged on the cutoff day.

    Only timelogs whose local date is exactly the cutoff date are included,
    unlike ``team_report`` which covers every day since the cutoff.

    Args:
        data: Fetched issue/timelog tree
        username: User to report on
        days: Number of days before today, 0 for today
        today: Reference date, the current date when None
        tz: Timezone for date normalization, the system local timezone when None

    Returns:
        UserReport for the cutoff day
    """
    day = cutoff_date(days, today, tz)
    entries = [
        TimelogEntry(
            hours=timelog.hours,
            day=spent_on,
            username=timelog.username,
            issue_iid=issue.iid,
            issue_title=issue.title,
        )
        for issue, timelog, spent_on in _dated_timelogs(data, tz)
        if spent_on == day and timelog.username == username
    ]
    return UserReport(username=username, day=day, entries=tuple(entries))


def team_report(
    data: TimelogData,
    days: int = 0,
    tracking_issue: Optional[str] = None,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None
) -> TeamReport:
    """
    Sum the time every user logged since the cutoff date.

    Timelogs on issues whose title contains ``tracking_issue`` are counted as
    tracking time, all others as dev time.

    Args:
        data: Fetched issue/timelog tree
        days: Number of previous days to include, 0 for today only
        tracking_issue: Title substring identifying tracking issues
        today: Reference date, the current date when None
        tz: Timezone for date normalization, the system local timezone when None

    Returns:
        TeamReport with per-user dev and tracking hours
    """
    since = cutoff_date(days, today, tz)
    dev_hours: Dict[str, float] = defaultdict(float)
    tracking_hours: Dict[str, float] = defaultdict(float)
    entries = []

    for issue, timelog, spent_on in _dated_timelogs(data, tz):
        if spent_on < since:
            continue

        tracking = is_tracking_issue(issue.title, tracking_issue)
        bucket = tracking_hours if tracking else dev_hours
        bucket[timelog.username] += timelog.hours

        entries.append(TimelogEntry(
            hours=timelog.hours,
            day=spent_on,
            username=timelog.username,
            issue_iid=issue.iid,
            issue_title=issue.title,
            tracking=tracking,
        ))

    return TeamReport(
        since=since,
        tracking_issue=tracking_issue,
        entries=tuple(entries),
        dev_hours=dict(dev_hours),
        tracking_hours=dict(tracking_hours),
    )


def log_user_report(report: UserReport) -> None:
    """Write a single-user report to the report log."""
    for entry in report.entries:
        logger.info(
            "%.1fh at %s - #%s: %s",
            entry.hours, entry.day.isoformat(), entry.issue_iid, entry.issue_title
        )
    logger.info(
        "Total spent time on %s for %s : %.1fh",
        report.day.isoformat(), report.username, report.total_hours
    )


def _log_totals(title: str, since: date, hours_per_user: Dict[str, float], total: float) -> None:
    logger.info("-- %s --", title)
    for username in sorted(hours_per_user):
        logger.info("since %s for %s : %.1fh", since.isoformat(), username, hours_per_user[username])
    logger.info("Total : %.1fh", total)


def log_team_report(report: TeamReport) -> None:
    """Write an all-users report to the report log."""
    for entry in report.entries:
        logger.info(
            "%.1fh at %s by %s - #%s: %s",
            entry.hours, entry.day.isoformat(), entry.username, entry.issue_iid, entry.issue_title
        )

    _log_totals("Total dev time spent", report.since, report.dev_hours, report.total_dev_hours)
    _log_totals("Total tracking time spent", report.since, report.tracking_hours, report.total_tracking_hours)

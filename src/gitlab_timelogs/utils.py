"""Utility functions for timestamp handling and response extraction."""

from datetime import date, datetime, tzinfo
from typing import Any, Dict, Optional

from .errors import FetchError
from .models import Issue, Timelog, TimelogData


def parse_iso_datetime(dt_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, returning None when it cannot be parsed."""
    if not dt_string or not isinstance(dt_string, str):
        return None
    try:
        parsed = datetime.fromisoformat(dt_string.replace('Z', '+00:00'))
    except ValueError:
        return None
    # A naive timestamp carries no instant, only a wall clock time
    if parsed.tzinfo is None:
        return None
    return parsed


def to_local_date(dt_string: Optional[str], tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Convert an ISO-8601 instant to the calendar date in ``tz``.

    GitLab stores a date-only timelog as midnight local time, so the UTC date
    can be one day off. The instant is converted before the date is taken.

    Args:
        dt_string: ISO-8601 timestamp with offset
        tz: Target timezone, the system local timezone when None

    Returns:
        The local calendar date, or None if the timestamp is malformed
    """
    parsed = parse_iso_datetime(dt_string)
    if parsed is None:
        return None
    return parsed.astimezone(tz).date()


def _require(node: Any, key: str, where: str) -> Any:
    if not isinstance(node, dict) or key not in node:
        raise FetchError(f"Unexpected response shape: missing '{key}' in {where}")
    return node[key]


def extract_timelog(node: Dict[str, Any]) -> Timelog:
    """Extract one timelog node from the GraphQL response."""
    time_spent = _require(node, 'timeSpent', 'timelog')
    spent_at = _require(node, 'spentAt', 'timelog')
    user = _require(node, 'user', 'timelog') or {}
    username = _require(user, 'username', 'timelog user')

    # Negative values are time removed with /spend -30m
    if isinstance(time_spent, bool) or not isinstance(time_spent, int):
        raise FetchError(f"Unexpected timeSpent value: {time_spent!r}")

    return Timelog(
        time_spent=time_spent,
        spent_at=spent_at or '',
        username=username or '',
    )


def extract_issue(node: Dict[str, Any]) -> Issue:
    """Extract one issue node, with its timelogs, from the GraphQL response."""
    iid = _require(node, 'iid', 'issue')
    title = _require(node, 'title', 'issue')
    timelogs = _require(node, 'timelogs', 'issue') or {}
    timelog_nodes = _require(timelogs, 'nodes', 'issue timelogs') or []

    return Issue(
        iid=str(iid),
        title=title or '',
        timelogs=tuple(extract_timelog(t) for t in timelog_nodes if t),
    )


def extract_timelog_data(project_path: str, data: Dict[str, Any]) -> TimelogData:
    """
    Build the typed issue/timelog tree from a GraphQL response.

    Args:
        project_path: Full path of the queried project
        data: The ``data`` member of the GraphQL response

    Returns:
        TimelogData tree

    Raises:
        FetchError: If the project is missing or a node does not have the expected shape
    """
    project = data.get('project') if isinstance(data, dict) else None
    if not project:
        raise FetchError(f"Project not found or not accessible: {project_path}")

    issues = _require(project, 'issues', 'project') or {}
    issue_nodes = _require(issues, 'nodes', 'project issues') or []

    return TimelogData(
        project_path=project_path,
        issues=tuple(extract_issue(n) for n in issue_nodes if n),
    )

from datetime import date, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
import requests

from gitlab_timelogs.utils import extract_timelog_data

# Fixed offset so local dates do not depend on the machine running the tests
PLUS_TWO = timezone(timedelta(hours=2))
TODAY = date(2026, 10, 17)

_NO_JSON = object()


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = _NO_JSON,
        text: str = "",
    ):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self):
        if self._json_data is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data

    def raise_for_status(self):
        if 400 <= self.status_code:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)


class FakeSession:
    """Stands in for requests.Session, replaying canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


def timelog_node(seconds: int, spent_at: str, username: str) -> Dict[str, Any]:
    return {"timeSpent": seconds, "spentAt": spent_at, "user": {"username": username}}


def issue_node(iid: str, title: str, *timelogs: Dict[str, Any]) -> Dict[str, Any]:
    return {"iid": iid, "title": title, "timelogs": {"nodes": list(timelogs)}}


def project_data(*issues: Dict[str, Any], project: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if project is None:
        project = {"issues": {"nodes": list(issues)}}
    return {"project": project}


@pytest.fixture
def sample_data():
    """Two users, dev and tracking issues, spread over three local days (UTC+2)."""
    return extract_timelog_data("group/project", project_data(
        issue_node(
            "1", "Implement login",
            # 2026-10-17 local
            timelog_node(3600, "2026-10-17T08:00:00Z", "alice"),
            timelog_node(1800, "2026-10-17T12:30:00+02:00", "alice"),
            # 2026-10-16 local
            timelog_node(7200, "2026-10-16T09:00:00Z", "alice"),
            timelog_node(5400, "2026-10-17T10:00:00Z", "bob"),
        ),
        issue_node(
            "2", "Sprint Planning / TRACK-1",
            timelog_node(900, "2026-10-17T07:00:00Z", "alice"),
            timelog_node(3600, "2026-10-16T07:00:00Z", "bob"),
            # 2026-10-14 local, outside a two day window
            timelog_node(3600, "2026-10-14T07:00:00Z", "bob"),
        ),
    ))

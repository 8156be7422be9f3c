"""Typed tree of a project's issues and their timelogs."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Timelog:
    time_spent: int  # seconds, negative for removed time
    spent_at: str  # ISO-8601 instant with offset, as delivered by GitLab
    username: str

    @property
    def hours(self) -> float:
        return self.time_spent / 3600


@dataclass(frozen=True)
class Issue:
    iid: str
    title: str
    timelogs: Tuple[Timelog, ...] = ()


@dataclass(frozen=True)
class TimelogData:
    project_path: str
    issues: Tuple[Issue, ...] = ()

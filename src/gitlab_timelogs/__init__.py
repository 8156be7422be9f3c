"""GitLab issue timelog reporter using GraphQL API."""

from .client import GitLabClient
from .fetcher import TimelogFetcher

__version__ = "1.0.0"
__all__ = ["GitLabClient", "TimelogFetcher"]

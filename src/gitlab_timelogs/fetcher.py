"""Fetcher for the timelogs of a GitLab project."""

import logging

from .client import GitLabClient
from .models import TimelogData
from .queries import PROJECT_TIMELOGS_QUERY
from .utils import extract_timelog_data

logger = logging.getLogger(__name__)


class TimelogFetcher:
    """Fetch a project's issues and timelogs using the GraphQL API."""

    def __init__(self, client: GitLabClient):
        """
        Initialize the fetcher.

        Args:
            client: Authenticated GitLab client
        """
        self.client = client

    def fetch(self, project_path: str) -> TimelogData:
        """
        Fetch every issue of a project with its timelogs.

        No date filtering happens server side, the whole tree is returned.

        Args:
            project_path: Project full path, e.g. "group/project"

        Returns:
            TimelogData tree

        Raises:
            FetchError: On network, HTTP, GraphQL or deserialization failures
        """
        logger.info("Fetching timelogs for %s from %s", project_path, self.client.graphql_url)
        data = self.client.execute(PROJECT_TIMELOGS_QUERY, {"fullPath": project_path})
        timelog_data = extract_timelog_data(project_path, data)

        timelog_count = sum(len(issue.timelogs) for issue in timelog_data.issues)
        logger.debug("Fetched %d issues, %d timelogs", len(timelog_data.issues), timelog_count)
        return timelog_data

"""GitLab API client with token authentication."""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)


class GitLabClient:
    """Client for the GitLab GraphQL and REST APIs of a single host."""

    DEFAULT_HOST = "https://gitlab.com"
    DEFAULT_TIMEOUT = 120

    def __init__(self, token: str, host: str = DEFAULT_HOST, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the GitLab client.

        Args:
            token: GitLab Personal Access Token
            host: Base URL of the GitLab instance
            timeout: Per-request timeout in seconds
        """
        if not token:
            raise ValueError("GitLab token is required")

        self.token = token
        self.host = host.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })

    @property
    def graphql_url(self) -> str:
        return f"{self.host}/api/graphql"

    @property
    def api_url(self) -> str:
        return f"{self.host}/api/v4"

    def __enter__(self) -> "GitLabClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            GraphQL response data

        Raises:
            FetchError: On network errors, HTTP errors, invalid JSON or GraphQL errors
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("POST %s variables=%s", self.graphql_url, variables)
        result = self._request("POST", self.graphql_url, json=payload)

        if not isinstance(result, dict):
            raise FetchError("GraphQL response is not a JSON object")

        # Check for GraphQL errors
        if result.get('errors'):
            error_messages = [
                e.get('message', str(e)) if isinstance(e, dict) else str(e)
                for e in result['errors']
            ]
            raise FetchError(f"GraphQL errors: {'; '.join(error_messages)}")

        return result.get('data') or {}

    def current_username(self) -> str:
        """
        Resolve the username of the token owner.

        Returns:
            Username of the authenticated user
        """
        url = f"{self.api_url}/user"
        logger.debug("GET %s", url)
        user = self._request("GET", url)

        username = user.get('username') if isinstance(user, dict) else None
        if not username:
            raise FetchError("Current user response has no username")
        return username

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(f"{method} {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"{method} {url} returned invalid JSON: {e}") from e

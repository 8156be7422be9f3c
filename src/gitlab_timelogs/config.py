"""Run configuration, read once from the environment at startup."""

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .client import GitLabClient
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one report run."""

    token: str
    project_path: str
    host: str = GitLabClient.DEFAULT_HOST
    days: int = 0
    all_users: bool = False
    tracking_issue: Optional[str] = None
    username: Optional[str] = None
    timezone: Optional[str] = None
    timeout: int = GitLabClient.DEFAULT_TIMEOUT

    @property
    def tz(self) -> Optional[tzinfo]:
        """Timezone for local dates, None for the system local timezone."""
        return ZoneInfo(self.timezone) if self.timezone else None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ReportConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ: Variables to read, ``os.environ`` when None
            **overrides: Values taking precedence over the environment
                (typically from the command line); None values are ignored

        Returns:
            Validated ReportConfig

        Raises:
            ConfigurationError: If a required setting is missing or a value is invalid
        """
        env = os.environ if environ is None else environ
        overrides = {k: v for k, v in overrides.items() if v is not None}

        def setting(key: str, var: str) -> str:
            if key in overrides:
                return str(overrides[key]).strip()
            return env.get(var, "").strip()

        token = setting("token", "GITLAB_TOKEN")
        if not token:
            raise ConfigurationError("GITLAB_TOKEN environment variable is not set")

        project_path = setting("project_path", "GITLAB_PROJECT_PATH")
        if not project_path:
            raise ConfigurationError("GITLAB_PROJECT_PATH environment variable is not set")

        host = setting("host", "GITLAB_HOST").rstrip("/")
        if not host:
            host = GitLabClient.DEFAULT_HOST
            logger.info("GITLAB_HOST is not set, using default %s", host)

        days_value = setting("days", "DAYS_NUM")
        if not days_value:
            days_value = "0"
            logger.info("DAYS_NUM is not set, using default %s", days_value)
        days = _parse_int(
            days_value,
            minimum=0,
            message="DAYS_NUM must be a non-negative integer, it represents the number of previous days to fetch timelogs for",
        )

        timeout_value = setting("timeout", "GITLAB_TIMEOUT")
        timeout = GitLabClient.DEFAULT_TIMEOUT
        if timeout_value:
            timeout = _parse_int(
                timeout_value,
                minimum=1,
                message="GITLAB_TIMEOUT must be a positive integer number of seconds",
            )

        if "all_users" in overrides:
            all_users = bool(overrides["all_users"])
        else:
            all_users = _parse_flag(env.get("ALL_USERS", ""))

        timezone = setting("timezone", "REPORT_TIMEZONE") or None
        if timezone:
            try:
                ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ConfigurationError(f"REPORT_TIMEZONE is not a known timezone: {timezone}") from e

        return cls(
            token=token,
            project_path=project_path,
            host=host,
            days=days,
            all_users=all_users,
            tracking_issue=setting("tracking_issue", "GITLAB_REPORTING_ISSUE") or None,
            username=setting("username", "GITLAB_USERNAME") or None,
            timezone=timezone,
            timeout=timeout,
        )


def _parse_flag(value: str) -> bool:
    value = value.strip().lower()
    return bool(value) and value not in FALSE_VALUES


def _parse_int(value: str, minimum: int, message: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise ConfigurationError(message) from e
    if number < minimum:
        raise ConfigurationError(message)
    return number

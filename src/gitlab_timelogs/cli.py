"""CLI entry point for reporting time spent on GitLab issues."""

import argparse
import logging
import sys
from typing import List, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .client import GitLabClient
from .config import ReportConfig
from .errors import ConfigurationError, FetchError
from .fetcher import TimelogFetcher
from .logging_config import setup_logging
from .report import TeamReport, UserReport, log_team_report, log_user_report, team_report, user_day_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlab-timelogs",
        description="Report time spent on the issues of a GitLab project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Time you logged today (user resolved from the token)
  gitlab-timelogs --project mygroup/myproject

  # Time you logged exactly 3 days ago
  gitlab-timelogs --project mygroup/myproject --days 3

  # Everyone's time over the last week, splitting off the tracking issue
  gitlab-timelogs --project mygroup/myproject --days 7 --all-users \\
      --tracking-issue "TRACK-1"

Every option can also be set in the environment or a .env file:
  GITLAB_TOKEN, GITLAB_PROJECT_PATH, GITLAB_HOST, DAYS_NUM, ALL_USERS,
  GITLAB_REPORTING_ISSUE, GITLAB_USERNAME, REPORT_TIMEZONE, GITLAB_TIMEOUT
        """
    )

    project_group = parser.add_argument_group("Project")
    project_group.add_argument(
        "--project",
        dest="project_path",
        type=str,
        help="Project full path, e.g. 'group/project' (or set GITLAB_PROJECT_PATH)"
    )
    project_group.add_argument(
        "--host",
        type=str,
        help=f"GitLab base URL (or set GITLAB_HOST, default: {GitLabClient.DEFAULT_HOST})"
    )

    report_group = parser.add_argument_group("Report")
    report_group.add_argument(
        "--days",
        type=str,
        help="Number of previous days, 0 for today (or set DAYS_NUM, default: 0)"
    )
    report_group.add_argument(
        "--all-users",
        action="store_true",
        default=None,
        help="Report every user since the cutoff day instead of only one user on that day (or set ALL_USERS)"
    )
    report_group.add_argument(
        "--tracking-issue",
        type=str,
        help="Title substring of tracking issues, counted apart from dev time (or set GITLAB_REPORTING_ISSUE)"
    )
    report_group.add_argument(
        "--user",
        dest="username",
        type=str,
        help="Username to report on in single user mode (or set GITLAB_USERNAME, default: token owner)"
    )
    report_group.add_argument(
        "--timezone",
        type=str,
        help="IANA timezone for calendar dates (or set REPORT_TIMEZONE, default: system local time)"
    )

    auth_group = parser.add_argument_group("Connection")
    auth_group.add_argument(
        "--token",
        type=str,
        help="GitLab Personal Access Token (or set GITLAB_TOKEN env var)"
    )
    auth_group.add_argument(
        "--timeout",
        type=str,
        help=f"Request timeout in seconds (or set GITLAB_TIMEOUT, default: {GitLabClient.DEFAULT_TIMEOUT})"
    )
    auth_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )
    return parser


def run(config: ReportConfig) -> Union[UserReport, TeamReport]:
    """
    Fetch the project's timelogs and log the configured report.

    Args:
        config: Run configuration

    Returns:
        The report that was logged
    """
    with GitLabClient(config.token, config.host, config.timeout) as client:
        username = config.username
        if not config.all_users and not username:
            username = client.current_username()
            logger.debug("Resolved current user: %s", username)

        timelog_data = TimelogFetcher(client).fetch(config.project_path)

    if config.all_users:
        report = team_report(timelog_data, config.days, config.tracking_issue, tz=config.tz)
        log_team_report(report)
        return report

    report = user_day_report(timelog_data, username, config.days, tz=config.tz)
    log_user_report(report)
    return report


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    # .env is looked up from the working directory; missing is fine
    if not load_dotenv(find_dotenv(usecwd=True)):
        logger.debug("No .env file loaded")

    try:
        config = ReportConfig.from_env(
            token=args.token,
            project_path=args.project_path,
            host=args.host,
            days=args.days,
            all_users=args.all_users,
            tracking_issue=args.tracking_issue,
            username=args.username,
            timezone=args.timezone,
            timeout=args.timeout,
        )
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        sys.exit(2)

    try:
        run(config)
    except FetchError as e:
        logger.error("Error: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()

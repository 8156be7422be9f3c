"""Exceptions raised by the timelog reporter."""


class TimelogReportError(Exception):
    """Base class for all errors raised by gitlab_timelogs."""


class ConfigurationError(TimelogReportError):
    """A required setting is missing or a setting has an invalid value."""


class FetchError(TimelogReportError):
    """The GitLab API could not be reached or returned an unusable response."""

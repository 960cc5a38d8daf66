"""
COVID-19 Report Error Types

Every failure the command line reports to the user derives from
CovidReportError, which carries the process exit code alongside the message.
"""

from .config.constants import NO_RESULT_NOTE


class CovidReportError(Exception):
    """Base class for errors that end the run with a message on stderr."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self) -> str:
        return self.message


class QueryError(CovidReportError):
    """The positional query could not be turned into a Query."""


class CacheDirectoryError(CovidReportError):
    """Neither $XDG_CACHE_HOME nor $HOME/.cache is usable."""


class NoResultError(CovidReportError):
    """Filtering left nothing to report."""

    def __init__(self, query_text: str):
        super().__init__(f"No result found for query '{query_text}'.\n{NO_RESULT_NOTE}")
        self.query_text = query_text

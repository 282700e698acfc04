"""Exception hierarchy for cloc invocations.

Every failure surfaces as a ClocError so callers only need one except clause.
Configuration errors are also ValueErrors: they are raised while building a
command, before any process is spawned.
"""


class ClocError(Exception):
    """Base class for all cloc errors."""


class ClocConfigurationError(ClocError, ValueError):
    """Invalid option value or unreadable target."""


class ClocExecutableNotFoundError(ClocError):
    """No cloc executable could be located."""


class ClocExecutionError(ClocError):
    """cloc could not be started or exited with a non-zero code."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ClocTimeoutError(ClocExecutionError):
    """cloc ran longer than the configured timeout and was killed."""

    def __init__(self, timeout: int, stderr: str = ""):
        super().__init__(f"cloc timed out after {timeout}s", returncode=None, stderr=stderr)
        self.timeout = timeout


class ClocOutputError(ClocError):
    """cloc produced output that is not a JSON object."""

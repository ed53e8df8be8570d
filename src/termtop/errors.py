"""Error types raised by termtop components."""


class MonitorError(Exception):
    """Base class for errors reported to the user instead of ending the session."""


class FetchError(MonitorError):
    """The process source could not produce a process list."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"Error fetching processes: {cause}")


class ValidationError(MonitorError):
    """Malformed user input."""


class TerminationError(MonitorError):
    """The terminator failed to kill a process.

    Attributes:
        pid: The identifier that was passed to the terminator
        cause: The underlying failure
    """

    def __init__(self, pid: str, cause: BaseException | str) -> None:
        self.pid = pid
        self.cause = cause
        super().__init__(f"Failed to kill process {pid}: {cause}")

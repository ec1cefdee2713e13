"""Exceptions raised while producing an episode summary."""


class EpisodeSummaryError(Exception):
    """Base class for episode summary failures."""


class BrowserUnavailableError(EpisodeSummaryError):
    """No browser session could be obtained (launcher missing or launch failed)."""


class NavigationError(EpisodeSummaryError):
    """A page could not be loaded with a usable HTTP status."""

    def __init__(self, message: str, status: int | None = None, attempts: int = 1):
        super().__init__(message)
        self.status = status
        self.attempts = attempts

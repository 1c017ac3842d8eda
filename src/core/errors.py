"""Error taxonomy for scenario and image generation."""

from __future__ import annotations


class StudioError(Exception):
    """Base class for failures surfaced by the studio."""

    pass


class ConfigurationError(StudioError):
    """Raised when a required server credential is missing."""

    pass


class UpstreamError(StudioError):
    """Raised when a provider call fails or returns a non-success status."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RunStatusError(UpstreamError):
    """Raised when an assistant run ends in a state other than completed."""

    def __init__(self, status: str, message: str | None = None):
        super().__init__(message or f"Assistant run finished with status {status}")
        self.status = status


class RunFailedError(RunStatusError):
    pass


class RunCancelledError(RunStatusError):
    pass


class RunExpiredError(RunStatusError):
    pass


class RunIncompleteError(RunStatusError):
    pass


class RunRequiresActionError(RunStatusError):
    """Raised when the assistant stops to wait for tool outputs."""

    pass


class RunTimeoutError(RunStatusError):
    """Raised when the run is still active after the poll budget is spent."""

    pass


class ResponseShapeError(StudioError):
    """Raised when a provider response does not match the expected contract."""

    pass

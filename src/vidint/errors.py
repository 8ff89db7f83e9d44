"""Custom exceptions for vidint."""

from typing import Any


class VidIntError(Exception):
    """Base exception for vidint."""

    pass


class InvalidRequestError(VidIntError):
    """Analysis request is malformed."""

    pass


class LocalFileError(VidIntError):
    """Local video file could not be read."""

    pass


class SubmissionError(VidIntError):
    """Reaching the video intelligence service failed."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class OperationError(VidIntError):
    """The service reported a failed operation."""

    def __init__(self, message: str, code: int | None = None, details: Any = None):
        super().__init__(message)
        self.code = code
        self.details = details


class OperationTimeoutError(VidIntError):
    """Operation did not finish within the configured wait."""

    pass

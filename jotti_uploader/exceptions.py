"""
Exceptions raised by the Jotti uploader components.
"""
from typing import Optional


class JottiError(Exception):
    """Base class for all uploader errors."""


class ChecksumError(JottiError):
    """A file could not be read while computing its digest."""


class SearchError(JottiError):
    """The hash search request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UploadError(JottiError):
    """The file submission failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(JottiError):
    """The service refused further requests for now."""

"""
Module containing data models for the Jotti uploader.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .exceptions import RateLimitedError

DEFAULT_UPLOAD_URL = "https://virusscan.jotti.org/en-US/submit-file"
DEFAULT_SEARCH_URL_TEMPLATE = "https://virusscan.jotti.org/en-US/search/hash/{digest}"
MAX_UPLOAD_SIZE = 250 * 1024 * 1024  # Jotti rejects anything larger


@dataclass
class SearchPageMarkers:
    """Literal strings the search page contains for the non-found outcomes."""
    not_found: str = "Hash not found"
    rate_limited: str = "Too many requests"


@dataclass
class ScannerConfig:
    """Endpoints and limits shared by every component of a run."""
    upload_url: str = DEFAULT_UPLOAD_URL
    search_url_template: str = DEFAULT_SEARCH_URL_TEMPLATE
    upload_field: str = "sample-file[]"
    timeout: float = 30.0
    max_upload_size: int = MAX_UPLOAD_SIZE
    inter_file_delay: float = 1.0
    progress_interval: float = 0.15
    hash_chunk_size: int = 1024 * 1024
    markers: SearchPageMarkers = field(default_factory=SearchPageMarkers)

    def __post_init__(self):
        """Validate the configuration."""
        if not self.upload_url:
            raise ValueError("upload_url cannot be empty")
        if "{digest}" not in self.search_url_template:
            raise ValueError("search_url_template must contain a {digest} placeholder")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be positive")
        if self.inter_file_delay < 0:
            raise ValueError("inter_file_delay cannot be negative")
        if self.progress_interval < 0:
            raise ValueError("progress_interval cannot be negative")
        if self.hash_chunk_size <= 0:
            raise ValueError("hash_chunk_size must be positive")

    def search_url(self, digest: str) -> str:
        return self.search_url_template.format(digest=digest)


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"
    RATE_LIMITED = "rate_limited"


@dataclass
class LookupResult:
    """Represents the outcome of a single hash search."""
    status: LookupStatus
    url: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


@dataclass
class UploadResult:
    """Represents an accepted file submission."""
    file_path: Path
    file_name: str
    body_size: int
    status_code: int


class FileOutcome(str, Enum):
    SKIPPED = "skipped"
    ERROR = "error"
    ALREADY_SCANNED = "already_scanned"
    UPLOADED = "uploaded"
    RATE_LIMITED = "rate_limited"


@dataclass
class FileResult:
    """Represents the terminal outcome for one file."""
    file_path: Path
    outcome: FileOutcome
    checksum: Optional[str] = None
    result_url: Optional[str] = None
    error: Optional[str] = None


@dataclass
class SubmissionSummary:
    """Represents a summary of a whole run."""
    results: List[FileResult] = field(default_factory=list)

    def _count(self, outcome: FileOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def uploaded(self) -> int:
        return self._count(FileOutcome.UPLOADED)

    @property
    def already_scanned(self) -> int:
        return self._count(FileOutcome.ALREADY_SCANNED)

    @property
    def skipped(self) -> int:
        return self._count(FileOutcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FileOutcome.ERROR)

    @property
    def rate_limited(self) -> bool:
        return any(r.outcome is FileOutcome.RATE_LIMITED for r in self.results)

    def raise_for_rate_limit(self) -> None:
        """Raise RateLimitedError if the run was stopped by the service."""
        if self.rate_limited:
            raise RateLimitedError("Rate limited by Jotti. Please try again in a few minutes.")

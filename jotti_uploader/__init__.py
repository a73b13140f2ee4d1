__version__ = "1.0.0"

from .checksum import calculate_sha1
from .coordinator import SubmissionCoordinator
from .exceptions import ChecksumError, JottiError, RateLimitedError, SearchError, UploadError
from .models import (
    FileOutcome,
    FileResult,
    LookupResult,
    LookupStatus,
    ScannerConfig,
    SearchPageMarkers,
    SubmissionSummary,
    UploadResult,
)
from .progress import ProgressReader
from .search import HashSearchClient, classify_search_page
from .uploader import JottiUploader

__all__ = [
    "calculate_sha1",
    "SubmissionCoordinator",
    "ChecksumError",
    "JottiError",
    "RateLimitedError",
    "SearchError",
    "UploadError",
    "FileOutcome",
    "FileResult",
    "LookupResult",
    "LookupStatus",
    "ScannerConfig",
    "SearchPageMarkers",
    "SubmissionSummary",
    "UploadResult",
    "ProgressReader",
    "HashSearchClient",
    "classify_search_page",
    "JottiUploader",
]

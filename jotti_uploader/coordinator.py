"""
Module for coordinating the per-file hash, search and upload sequence.
"""
import logging
import stat
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO, Union

import httpx

from .checksum import calculate_sha1
from .exceptions import ChecksumError, UploadError
from .models import (
    FileOutcome,
    FileResult,
    LookupStatus,
    ScannerConfig,
    SubmissionSummary,
)
from .search import HashSearchClient
from .uploader import JottiUploader, display_name

logger = logging.getLogger(__name__)


class SubmissionCoordinator:
    """Submits files to Jotti one at a time."""
    
    def __init__(self, config: Optional[ScannerConfig] = None,
                 client: Optional[httpx.Client] = None,
                 progress_stream: Optional[TextIO] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """Initialize the coordinator.
        
        Args:
            config: Endpoints and limits, defaults to the public Jotti service
            client: HTTP client to share between search and upload; one is
                created (and closed by ``close``) if None
            progress_stream: Where upload progress is drawn, stderr if None
            sleep: Function used for the pause between files
        """
        self.config = config or ScannerConfig()
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=self.config.timeout, follow_redirects=True)
        self.search = HashSearchClient(self.client, self.config)
        self.uploader = JottiUploader(self.client, self.config, progress_stream=progress_stream)
        self._sleep = sleep

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _check_file(self, file_path: Path) -> Optional[str]:
        """Return a reason to skip the file, or None if it can be processed."""
        try:
            st = file_path.stat()
        except OSError as e:
            return f"Error stat {file_path}: {e}"

        if stat.S_ISDIR(st.st_mode):
            return f"Skipping directory: {file_path}"
        if not stat.S_ISREG(st.st_mode):
            return f"Skipping {file_path}: not a regular file"
        if st.st_size > self.config.max_upload_size:
            return (f"Skipping {file_path}: file size {st.st_size} exceeds "
                    f"{self.config.max_upload_size} byte limit")
        return None

    def process_file(self, file_path: Union[str, Path]) -> FileResult:
        """Take one file through stat, checksum, search and upload.
        
        Args:
            file_path: File named on the command line
            
        Returns:
            FileResult with the terminal outcome
        """
        file_path = Path(file_path)

        if reason := self._check_file(file_path):
            logger.warning(reason)
            return FileResult(file_path=file_path, outcome=FileOutcome.SKIPPED, error=reason)

        try:
            checksum = calculate_sha1(file_path, self.config.hash_chunk_size)
        except ChecksumError as e:
            logger.error(str(e))
            return FileResult(file_path=file_path, outcome=FileOutcome.ERROR, error=str(e))
        print(f"SHA1 Checksum: {checksum}", flush=True)

        lookup = self.search.lookup(checksum)
        if lookup.status is LookupStatus.RATE_LIMITED:
            logger.warning(f"Search for {checksum} was rate limited, stopping")
            return FileResult(file_path=file_path, outcome=FileOutcome.RATE_LIMITED,
                              checksum=checksum)
        if lookup.status is LookupStatus.ERROR:
            logger.error(f"Error checking Jotti's malware scan: {lookup.error}")
            return FileResult(file_path=file_path, outcome=FileOutcome.ERROR,
                              checksum=checksum, error=lookup.error)
        if lookup.found:
            print(f"File {display_name(file_path)} found on Jotti:\n{lookup.url}", flush=True)
            return FileResult(file_path=file_path, outcome=FileOutcome.ALREADY_SCANNED,
                              checksum=checksum, result_url=lookup.url)

        print(f"Uploading {display_name(file_path)}:", flush=True)
        try:
            upload = self.uploader.upload_file(file_path)
        except UploadError as e:
            logger.error(f"Error: {e}")
            return FileResult(file_path=file_path, outcome=FileOutcome.ERROR,
                              checksum=checksum, result_url=lookup.url, error=str(e))

        logger.debug(f"Uploaded {upload.file_name} as {upload.body_size} byte form, HTTP {upload.status_code}")
        print(f"OK\n{lookup.url}", flush=True)
        return FileResult(file_path=file_path, outcome=FileOutcome.UPLOADED,
                          checksum=checksum, result_url=lookup.url)

    def run(self, files: Iterable[Union[str, Path]]) -> SubmissionSummary:
        """Process files in order, pausing between them.
        
        Stops early, without touching the remaining files, when the service
        reports a rate limit.
        
        Args:
            files: Paths in command-line order
            
        Returns:
            SubmissionSummary of every processed file
        """
        summary = SubmissionSummary()
        for index, file_path in enumerate(files):
            if index:
                self._sleep(self.config.inter_file_delay)

            result = self.process_file(file_path)
            summary.results.append(result)
            if result.outcome is FileOutcome.RATE_LIMITED:
                break

        self.log_summary(summary)
        return summary

    def log_summary(self, summary: SubmissionSummary) -> None:
        logger.info(
            f"Processed {summary.total_files} files: {summary.uploaded} uploaded, "
            f"{summary.already_scanned} already scanned, {summary.skipped} skipped, "
            f"{summary.failed} failed"
        )

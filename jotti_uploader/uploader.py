"""
Module for submitting files to Jotti as multipart form uploads.
"""
import io
import logging
import os
from pathlib import Path
from typing import Optional, TextIO, Tuple, Union

import httpx

from .exceptions import UploadError
from .models import ScannerConfig, UploadResult
from .progress import ProgressReader

logger = logging.getLogger(__name__)


def display_name(path: Union[str, Path]) -> str:
    """Return the path as valid UTF-8 text, replacing undecodable bytes."""
    return os.fsencode(path).decode("utf-8", "replace")


class JottiUploader:
    """Handles single-attempt file submissions with progress output."""
    
    def __init__(self, client: httpx.Client, config: Optional[ScannerConfig] = None,
                 progress_stream: Optional[TextIO] = None):
        """Initialize the uploader.
        
        Args:
            client: HTTP client used for the POST
            config: Endpoints and limits
            progress_stream: Where the progress bar is drawn, stderr if None
        """
        self.client = client
        self.config = config or ScannerConfig()
        self.progress_stream = progress_stream

    def _encode_form(self, file_path: Path) -> Tuple[bytes, str]:
        """Build the multipart body in memory.
        
        Args:
            file_path: File to embed
            
        Returns:
            Encoded body and its Content-Type header value
        """
        with open(file_path, "rb") as f:
            request = httpx.Request(
                "POST",
                self.config.upload_url,
                files={self.config.upload_field: (display_name(file_path.name), f)}
            )
            body = request.read()
        return body, request.headers["Content-Type"]

    def upload_file(self, file_path: Path) -> UploadResult:
        """Upload a single file, without retries.
        
        Args:
            file_path: Path to the file to submit
            
        Returns:
            UploadResult for the accepted submission
            
        Raises:
            UploadError: If the file cannot be read, the request fails or the
                service answers with a non-success status
        """
        file_path = Path(file_path)
        try:
            body, content_type = self._encode_form(file_path)
        except (OSError, UnicodeError) as e:
            raise UploadError(f"cannot prepare upload of {display_name(file_path)}: {e}") from e

        reader = ProgressReader(
            io.BytesIO(body),
            total=len(body),
            stream=self.progress_stream,
            interval=self.config.progress_interval
        )
        headers = {
            "Content-Type": content_type,
            "Content-Length": str(len(body)),
        }

        try:
            response = self.client.post(
                self.config.upload_url,
                content=reader,
                headers=headers,
                timeout=self.config.timeout
            )
        except httpx.HTTPError as e:
            raise UploadError(f"upload of {file_path} failed: {e}") from e
        finally:
            reader.finish()

        logger.debug(f"POST {self.config.upload_url} ({len(body)} bytes) -> {response.status_code}")
        if not response.is_success:
            raise UploadError(
                f"received non-success response status: {response.status_code}",
                status_code=response.status_code
            )

        return UploadResult(
            file_path=file_path,
            file_name=display_name(file_path.name),
            body_size=len(body),
            status_code=response.status_code
        )

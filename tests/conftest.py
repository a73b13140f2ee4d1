"""
Test fixtures for the Jotti uploader.
"""
import io
from unittest.mock import MagicMock

import httpx
import pytest

from jotti_uploader.coordinator import SubmissionCoordinator
from jotti_uploader.models import ScannerConfig

SEARCH_TEMPLATE = "https://jotti.test/en-US/search/hash/{digest}"
UPLOAD_URL = "https://jotti.test/en-US/submit-file"


class FakeJotti:
    """Stands in for the Jotti web service behind an httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.known_digests = set()
        self.rate_limited = False
        self.search_status = 200
        self.upload_statuses = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            status = self.upload_statuses.pop(0) if self.upload_statuses else 200
            return httpx.Response(status, text="<html>queued</html>")

        if self.rate_limited:
            return httpx.Response(200, text="<h1>Too many requests</h1>")
        if self.search_status != 200:
            return httpx.Response(self.search_status, text="error")

        digest = request.url.path.rsplit("/", 1)[-1]
        if digest in self.known_digests:
            return httpx.Response(200, text="<html>Scan report for file</html>")
        return httpx.Response(200, text="<html><p>Hash not found</p></html>")

    @property
    def searches(self):
        return [r for r in self.requests if r.method == "GET"]

    @property
    def uploads(self):
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def tmp_upload_dir(tmp_path):
    """Create a temporary directory for test files."""
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    return upload_dir


@pytest.fixture
def scanner_config():
    """Configuration pointing at the fake service."""
    return ScannerConfig(
        upload_url=UPLOAD_URL,
        search_url_template=SEARCH_TEMPLATE,
        timeout=5.0
    )


@pytest.fixture
def fake_jotti():
    return FakeJotti()


@pytest.fixture
def http_client(fake_jotti):
    """HTTP client whose requests all reach the fake service."""
    with httpx.Client(transport=httpx.MockTransport(fake_jotti)) as client:
        yield client


@pytest.fixture
def progress_stream():
    return io.StringIO()


@pytest.fixture
def fake_sleep():
    return MagicMock()


@pytest.fixture
def coordinator(scanner_config, http_client, progress_stream, fake_sleep):
    """Create a coordinator wired to the fake service with no real delays."""
    return SubmissionCoordinator(
        config=scanner_config,
        client=http_client,
        progress_stream=progress_stream,
        sleep=fake_sleep
    )

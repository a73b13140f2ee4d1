"""
Module for checking whether Jotti already holds a scan result for a digest.
"""
import logging
from typing import Optional

import httpx

from .exceptions import SearchError
from .models import LookupResult, LookupStatus, ScannerConfig, SearchPageMarkers

logger = logging.getLogger(__name__)


def classify_search_page(body: str, markers: SearchPageMarkers) -> LookupStatus:
    """Map the HTML of a successful search response to a lookup status.
    
    Args:
        body: Response text
        markers: Strings identifying the rate-limit and not-found pages
        
    Returns:
        RATE_LIMITED, NOT_FOUND or FOUND
    """
    if markers.rate_limited in body:
        return LookupStatus.RATE_LIMITED
    if markers.not_found in body:
        return LookupStatus.NOT_FOUND
    return LookupStatus.FOUND


class HashSearchClient:
    """Queries the Jotti hash search page."""

    def __init__(self, client: httpx.Client, config: Optional[ScannerConfig] = None):
        self.client = client
        self.config = config or ScannerConfig()

    def _fetch(self, url: str) -> str:
        try:
            response = self.client.get(url, timeout=self.config.timeout)
        except httpx.HTTPError as e:
            raise SearchError(f"request to {url} failed: {e}") from e

        logger.debug(f"GET {url} -> {response.status_code}")
        if not response.is_success:
            raise SearchError(
                f"unexpected response status: {response.status_code}",
                status_code=response.status_code
            )
        return response.text

    def lookup(self, checksum: str) -> LookupResult:
        """Look up a digest once, without retrying.
        
        Args:
            checksum: Hex digest of the file
            
        Returns:
            LookupResult; ``url`` is set for FOUND and NOT_FOUND
        """
        url = self.config.search_url(checksum)
        try:
            body = self._fetch(url)
        except SearchError as e:
            return LookupResult(
                status=LookupStatus.ERROR,
                status_code=e.status_code,
                error=str(e)
            )

        status = classify_search_page(body, self.config.markers)
        if status is LookupStatus.RATE_LIMITED:
            return LookupResult(status=status)
        return LookupResult(status=status, url=url)

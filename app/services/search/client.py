"""
Unsplash photo search client
"""
import logging
from typing import List, Optional

import requests

from app import config
from .models import SearchResult

logger = logging.getLogger(__name__)


class RemoteSearchFailure(Exception):
    """The search request failed or returned an unusable response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class UnsplashClient:
    """
    Minimal client for Unsplash's photo search endpoint

    Authenticates with a static access key ("Client-ID" scheme).
    """

    def __init__(
        self,
        api_url: str = config.UNSPLASH_API_URL,
        access_key: str = config.UNSPLASH_ACCESS_KEY,
        per_page: int = config.SEARCH_PAGE_SIZE,
        timeout: float = config.SEARCH_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client

        Args:
            api_url: API base URL
            access_key: Unsplash access key
            per_page: Results per search
            timeout: Request timeout in seconds
            session: requests session (default: a new one)
        """
        self.api_url = api_url.rstrip("/")
        self.access_key = access_key
        self.per_page = per_page
        self.timeout = timeout
        self.session = session or requests.Session()

    def search_photos(self, query: str) -> List[SearchResult]:
        """
        Search photos matching a free-text query

        Args:
            query: Search text

        Returns:
            Up to per_page results (empty for a blank query)

        Raises:
            RemoteSearchFailure: On missing credentials, transport errors,
                error statuses or malformed responses
        """
        query = query.strip()
        if not query:
            return []

        if not self.access_key:
            raise RemoteSearchFailure("Unsplash access key is not configured (set UNSPLASH_ACCESS_KEY)")

        logger.info(f"Searching photos: {query!r}")
        try:
            response = self.session.get(
                f"{self.api_url}/search/photos",
                params={"query": query, "per_page": self.per_page},
                headers={"Authorization": f"Client-ID {self.access_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Search request failed: {e}")
            raise RemoteSearchFailure(f"Search request failed: {e}") from e

        if not response.ok:
            logger.warning(f"Search returned HTTP {response.status_code}")
            raise RemoteSearchFailure(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            results = [SearchResult.from_dict(item) for item in payload["results"]]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteSearchFailure(f"Malformed search response: {e}") from e

        return results[:self.per_page]

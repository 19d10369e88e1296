"""Ferrovias all-stations status feed client."""

import copy
import logging
import time
from typing import Dict, Optional, Tuple

import requests

from .models import DataSource
from .sample_data import SAMPLE_SNAPSHOT

logger = logging.getLogger(__name__)

# Status of every station on the line in one JSON object
API_URL = "https://ferrovias.fdiaznem.com.ar/stations/all/status"

LIVE_SOURCE_MESSAGE = "Data Source: Live API"
FALLBACK_SOURCE_MESSAGE = "Data Source: Mock Data (API Failed)"


class FeedError(Exception):
    """The live status feed could not be fetched or decoded."""


class FerroviasClient:
    """Fetches station status snapshots, falling back to sample data."""

    def __init__(
        self,
        api_url: str = API_URL,
        timeout: float = 10,
        cache_ttl: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_url: All-stations status endpoint.
            timeout: Request timeout in seconds.
            cache_ttl: Seconds a fetched snapshot is reused for.
            session: Optional requests session to reuse.
        """
        self.api_url = api_url
        self.timeout = timeout
        self._cache_ttl = cache_ttl
        self._cache: Optional[Tuple[Dict, float]] = None  # (snapshot, timestamp)
        self._session = session or requests.Session()

    def get_snapshot(self) -> Tuple[Dict, DataSource]:
        """
        Get the current status snapshot.

        Returns:
            (snapshot, data_source). When the live feed fails the bundled
            sample snapshot is returned and data_source.is_live is False.
        """
        try:
            snapshot = self.fetch_snapshot()
        except FeedError as e:
            logger.warning(f"Live API failed ({e}). Falling back to sample data.")
            return (
                copy.deepcopy(SAMPLE_SNAPSHOT),
                DataSource(is_live=False, message=FALLBACK_SOURCE_MESSAGE, error=str(e)),
            )

        return snapshot, DataSource(is_live=True, message=LIVE_SOURCE_MESSAGE)

    def fetch_snapshot(self) -> Dict:
        """
        Fetch and cache the live status snapshot.

        Returns:
            {station_name: {"DESTINATION-TRAINID": status, ...}, ...}

        Raises:
            FeedError: If the request fails or the payload is not a JSON object.
        """
        now = time.time()
        if self._cache is not None:
            data, timestamp = self._cache
            if now - timestamp < self._cache_ttl:
                logger.debug(f"Using cached data for {self.api_url}")
                return data

        logger.debug(f"Fetching {self.api_url}")
        try:
            response = self._session.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {self.api_url}: {e}")
            raise FeedError(f"API request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.api_url}: {e}")
            raise FeedError(f"Invalid JSON in API response: {e}") from e

        if not isinstance(data, dict):
            raise FeedError(f"Unexpected payload type {type(data).__name__}, expected an object")

        self._cache = (data, now)
        return data

    def clear_cache(self) -> None:
        """Manually clear the cache."""
        self._cache = None

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

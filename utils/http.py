"""Source fetching for the patent dashboard.

Provides:
- SourceFetcher: reads a data source from a local path or an http(s) URL
- SourceUnavailable: raised for any I/O, HTTP or decoding failure

Every source is fetched exactly once per load; there is no retry.
"""

import logging
from pathlib import Path
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from utils.patterns import URL_SCHEME

logger = logging.getLogger(__name__)


class SourceUnavailable(Exception):
    """A data source could not be read or decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


def is_url(source: str) -> bool:
    """Return True when *source* should be fetched over HTTP."""
    return bool(URL_SCHEME.match(source))


def decode_text(data: bytes, source: str) -> str:
    """Decode UTF-8 bytes, dropping a leading byte-order mark."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SourceUnavailable(source, f"not valid UTF-8 ({exc.reason})") from exc


class SourceFetcher:
    """Reads text sources from disk or over HTTP with a pooled session."""

    def __init__(self, timeout: Optional[float] = 30.0,
                 pool_connections: int = 2, pool_maxsize: int = 2):
        """Initialize the fetcher.

        Args:
            timeout: Seconds to wait for an HTTP response (None = wait forever)
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
        """
        self.timeout = timeout
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session (no retries are mounted).

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    def fetch(self, source: str) -> str:
        """Return the text content of *source*.

        Args:
            source: Local file path or http(s) URL

        Returns:
            Decoded file contents

        Raises:
            SourceUnavailable: the source is missing, unreachable, returned a
                non-2xx status, or is not UTF-8.
        """
        if is_url(source):
            return self._fetch_url(source)
        return self._read_file(source)

    def _fetch_url(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceUnavailable(url, str(exc)) from exc
        logger.debug("fetched %s (%d bytes)", url, len(response.content))
        return decode_text(response.content, url)

    def _read_file(self, path: str) -> str:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise SourceUnavailable(path, exc.strerror or str(exc)) from exc
        logger.debug("read %s (%d bytes)", path, len(data))
        return decode_text(data, path)

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

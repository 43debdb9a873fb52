"""HTTP retrieval of the remote playlist document."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ..errors import FetchTimeoutError, HttpStatusError, NetworkError, ParseError

USER_AGENT = "playlist-sync/0.1"


@dataclass
class FetchResult:
    """Body of a successful fetch."""

    body: str
    status_code: int = 200


class Fetcher:
    """Performs a single GET per call; retrying is up to the caller."""

    def __init__(
        self,
        logger: logging.Logger,
        connect_timeout: float = 5,
        read_timeout: float = 5,
        session: Optional[requests.Session] = None
    ):
        """Initialize fetcher.

        Args:
            logger: Logger instance
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds
            session: HTTP session to use (a new one if omitted)
        """
        self.logger = logger
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def fetch(self, url: str) -> FetchResult:
        """Download the document at url.

        Args:
            url: Playlist URL

        Returns:
            FetchResult with the UTF-8 decoded body

        Raises:
            FetchTimeoutError: If connecting or reading timed out
            NetworkError: On any other transport failure
            HttpStatusError: If the status code is not 2xx
            ParseError: If the body is not valid UTF-8
        """
        self.logger.debug(f"GET {url}")
        try:
            response = self.session.get(
                url, timeout=(self.connect_timeout, self.read_timeout)
            )
        except requests.Timeout as e:
            raise FetchTimeoutError(f"Timed out fetching {url}: {e}", url) from e
        except requests.RequestException as e:
            raise NetworkError(f"Cannot fetch {url}: {e}", url) from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, url)

        try:
            body = response.content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(f"Playlist at {url} is not valid UTF-8: {e}") from e

        return FetchResult(body=body, status_code=response.status_code)

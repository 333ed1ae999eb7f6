"""HTTP transport for TheTVDB API calls."""

import logging
from logging import Logger
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from . import config


class TVDBHttpClient:
    """Performs plain GET requests and reports failures as a missing body.

    Retries are left to TVDBRetryHandler, so urllib3's own retry layer is
    switched off on the mounted adapters.
    """

    def __init__(self,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None,
                 logger: Optional[Logger] = None):
        """Initializes the session and connection pool.

        Args:
            timeout: Request timeout in seconds (default from config)
            session: Optional pre-built session
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout if timeout is not None else config.API_REQUEST_TIMEOUT_SECONDS

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=10, pool_maxsize=10,
                                  max_retries=Retry(total=0, raise_on_status=False))
            session.mount('https://', adapter)
            session.mount('http://', adapter)
        self.session = session

    def get(self, url: str) -> Optional[bytes]:
        """Fetches a URL.

        The body is returned undecoded so the XML parser can honour the
        encoding the document declares.

        Returns:
            The raw response body, or None if the request failed or the server
            did not answer with 200 OK.
        """
        self.logger.debug(f"Making API request: GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as req_err:
            self.logger.debug(f"GET {url} failed: {req_err}")
            return None

        if response.status_code != 200:
            self.logger.debug(f"GET {url} returned HTTP {response.status_code}")
            return None
        return response.content

    def close(self) -> None:
        self.session.close()

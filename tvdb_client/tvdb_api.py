"""TheTVDB API client."""

import logging
import time
from logging import Logger
from typing import Any, Callable, List, Optional
from urllib.parse import quote

from . import config
from .exceptions import TVDBUsageError
from .http_client import TVDBHttpClient
from .languages import get_language
from .mirrors import TVDBMirrors
from .models import RequestContext, Series
from .retry_handler import TVDBRetryHandler
from .xml_parser import parse_records


class TVDBAPI:
    """Client for searching TheTVDB and building Series records."""

    SEARCH_PATH = '/api/GetSeries.php?seriesname={term}'

    def __init__(self,
                 api_key: Optional[str] = None,
                 language: Optional[str] = None,
                 max_retries: Optional[int] = None,
                 logger: Optional[Logger] = None,
                 http_client: Optional[TVDBHttpClient] = None,
                 sleep: Optional[Callable[[float], Any]] = None,
                 api_key_file: Optional[str] = None):
        """Resolves the configuration for the client.

        Args:
            api_key: API key; read from ~/.tvdb when omitted
            language: English name of the language results are requested in (default English)
            max_retries: Retries per failing request (default 10)
            logger: Optional logger instance
            http_client: Optional transport, replaceable in tests
            sleep: Optional wait function used between retries
            api_key_file: Optional key file overriding ~/.tvdb

        Raises:
            TVDBConfigurationError: if no API key can be found or the language is unknown
        """
        self.logger = logger or logging.getLogger(__name__)

        self.api_key: str = config.resolve_api_key(api_key, api_key_file)
        self.language: str = language or config.DEFAULT_LANGUAGE
        self.language_code: str = get_language(self.language).abbreviation
        self.base_url: str = config.TVDB_API_BASE_URL.rstrip('/')

        self.http_client = http_client or TVDBHttpClient(logger=self.logger)
        self.retry_handler = TVDBRetryHandler(max_retries=max_retries, sleep=sleep or time.sleep, logger=self.logger)

        self.mirrors: Optional[TVDBMirrors] = None
        self.series: Optional[List[Series]] = None

        self.logger.info(
            f"TVDBAPI initialized: base_url={self.base_url}, language={self.language}, "
            f"retries={self.max_retries}"
        )

    @property
    def max_retries(self) -> int:
        return self.retry_handler.max_retries

    def close(self) -> None:
        """Releases the HTTP session."""
        self.http_client.close()

    def __enter__(self) -> 'TVDBAPI':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _load_mirrors(self) -> TVDBMirrors:
        """Fetches the mirror list on first use."""
        if self.mirrors is None:
            mirrors = TVDBMirrors(self.http_client.get, base_url=self.base_url, logger=self.logger)
            mirrors.fetch_mirror_list(self.api_key)
            self.mirrors = mirrors
        return self.mirrors

    def _context(self) -> RequestContext:
        return RequestContext(
            api_key=self.api_key,
            language=self.language_code,
            mirrors=self._load_mirrors(),
            retry_handler=self.retry_handler,
            http_client=self.http_client,
            logger=self.logger,
        )

    def search_url(self, term: str) -> str:
        return self.base_url + self.SEARCH_PATH.format(term=quote(term, safe=''))

    def search(self, term: str) -> List[Series]:
        """Searches TheTVDB for series matching a name.

        Args:
            term: The series name to search for.

        Returns:
            Shallow Series records in the order the service returned them.

        Raises:
            TVDBUsageError: if the term is empty
            TVDBRetriesExhaustedError: if the search request kept failing
            TVDBParseError: if the response is not valid XML
        """
        if not term:
            raise TVDBUsageError('search term is required')

        context = self._context()
        url = self.search_url(term)
        self.logger.info(f"Searching series for {term!r}.")

        xml = self.retry_handler.fetch(url, self.http_client.get)
        self.series = [
            Series(attributes, context=context)
            for attributes in parse_records(xml, 'Series', logger=self.logger)
        ]

        self.logger.info(f"Found {len(self.series)} series for {term!r}.")
        return self.series

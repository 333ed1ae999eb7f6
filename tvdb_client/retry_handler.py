"""Retry handling for TheTVDB API calls."""

import time
from datetime import datetime, UTC
from typing import Optional, Callable, Any, TypedDict
from logging import Logger, getLogger

from . import config
from .exceptions import TVDBConfigurationError, TVDBRetriesExhaustedError


class FailureState(TypedDict):
    """State of the most recent run of failures."""
    consecutive_failures: int
    last_failure_time: Optional[datetime]
    last_failed_url: Optional[str]


class TVDBRetryHandler:
    """Bounded retry loop with a fixed delay between attempts.

    A request is tried once and then retried up to max_retries times, so a
    URL is requested at most max_retries + 1 times before giving up.
    """

    def __init__(self,
                 max_retries: Optional[int] = None,
                 delay_seconds: Optional[float] = None,
                 sleep: Callable[[float], Any] = time.sleep,
                 logger: Optional[Logger] = None):
        """Initialize the retry handler.

        Args:
            max_retries: Retries allowed after the first attempt (default from config)
            delay_seconds: Wait between attempts (default from config)
            sleep: Function used to wait, replaceable in tests
            logger: Optional logger instance
        """
        if max_retries is None:
            max_retries = config.MAX_API_RETRIES
        if max_retries < 0:
            raise TVDBConfigurationError(f"max_retries must be >= 0, got {max_retries}")

        self.max_retries = max_retries
        self.delay_seconds = config.API_RETRY_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.sleep = sleep
        self.logger = logger or getLogger(__name__)
        self.state: FailureState = {
            'consecutive_failures': 0,
            'last_failure_time': None,
            'last_failed_url': None,
        }

    def handle_failure(self, url: str) -> None:
        """Record a failed attempt."""
        self.state['consecutive_failures'] += 1
        self.state['last_failure_time'] = datetime.now(UTC)
        self.state['last_failed_url'] = url

    def handle_success(self) -> None:
        self.state['consecutive_failures'] = 0

    def fetch(self, url: str, http_get: Callable[[str], Optional[bytes]]) -> bytes:
        """Get a URL, retrying while the body comes back empty.

        Args:
            url: URL to request
            http_get: Function returning the raw body, or None on failure

        Returns:
            The response body

        Raises:
            TVDBRetriesExhaustedError: if every attempt failed
        """
        body = http_get(url)
        retries = 0
        while not body and retries < self.max_retries:
            self.handle_failure(url)
            self.logger.warning(
                f"failed to get URL {url} - retrying in {self.delay_seconds:.1f}s "
                f"(retry {retries + 1}/{self.max_retries})"
            )
            self.sleep(self.delay_seconds)
            body = http_get(url)
            retries += 1

        if not body:
            self.handle_failure(url)
            self.logger.error(f"All {retries + 1} attempts failed for {url}")
            raise TVDBRetriesExhaustedError(url, retries)

        self.handle_success()
        return body

    def get_status(self) -> dict[str, Any]:
        """Get retry status.

        Returns:
            Dictionary with retry status information
        """
        last_failure_time = self.state['last_failure_time']

        return {
            'consecutive_failures': self.state['consecutive_failures'],
            'last_failure_time': (
                last_failure_time.isoformat() if isinstance(last_failure_time, datetime) else None
            ),
            'last_failed_url': self.state['last_failed_url'],
            'max_retries': self.max_retries,
            'delay_seconds': self.delay_seconds,
        }

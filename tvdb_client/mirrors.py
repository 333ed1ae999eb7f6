"""Mirror directory for TheTVDB API."""

import logging
from logging import Logger
from typing import Callable, NamedTuple, Optional

from . import config
from .exceptions import TVDBMirrorError
from .xml_parser import parse_records

XML_MIRROR = 1
BANNER_MIRROR = 2
ZIP_MIRROR = 4


class Mirror(NamedTuple):
    """A base URL serving some of the service's content."""
    path: str
    typemask: int


class TVDBMirrors:
    """Ordered list of mirrors, fetched from the service once.

    The mirror list request is not retried; a failure aborts straight away.
    """

    def __init__(self,
                 http_get: Callable[[str], Optional[bytes]],
                 base_url: Optional[str] = None,
                 logger: Optional[Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.http_get = http_get
        self.base_url = (base_url or config.TVDB_API_BASE_URL).rstrip('/')
        self.mirrors: list[Mirror] = []

    def fetch_mirror_list(self, api_key: str) -> list[Mirror]:
        """Downloads and stores the mirror list.

        Raises:
            TVDBMirrorError: if the request fails or lists no mirrors.
        """
        url = f"{self.base_url}/api/{api_key}/mirrors.xml"
        self.logger.info(f"Fetching mirror list from {url}.")

        xml = self.http_get(url)
        if not xml:
            raise TVDBMirrorError(f"failed to get mirror list from {url}")

        mirrors = []
        for record in parse_records(xml, 'Mirror', logger=self.logger):
            path = record.get('mirrorpath')
            if not path:
                self.logger.warning(f"Ignoring mirror without a path: {record}")
                continue
            try:
                typemask = int(record.get('typemask', 0))
            except ValueError:
                self.logger.warning(f"Ignoring mirror {path} with invalid typemask {record['typemask']!r}")
                continue
            mirrors.append(Mirror(path.rstrip('/'), typemask))

        if not mirrors:
            raise TVDBMirrorError(f"mirror list from {url} is empty")

        self.logger.info(f"Obtained {len(mirrors)} mirrors.")
        self.mirrors = mirrors
        return mirrors

    @property
    def urls(self) -> list[str]:
        return [mirror.path for mirror in self.mirrors]

    def get_mirror(self, typemask: int) -> str:
        """Returns the first mirror path serving the given content type."""
        for mirror in self.mirrors:
            if mirror.typemask & typemask:
                return mirror.path
        raise TVDBMirrorError(f"No mirror available for typemask {typemask}")

    @property
    def xml_mirror(self) -> str:
        return self.get_mirror(XML_MIRROR)

    @property
    def banner_mirror(self) -> str:
        return self.get_mirror(BANNER_MIRROR)

    @property
    def zip_mirror(self) -> str:
        return self.get_mirror(ZIP_MIRROR)

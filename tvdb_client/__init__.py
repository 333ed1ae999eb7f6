"""Client for TheTVDB API."""

from .exceptions import (
    TVDBConfigurationError,
    TVDBError,
    TVDBMirrorError,
    TVDBParseError,
    TVDBRetriesExhaustedError,
    TVDBUsageError,
)
from .http_client import TVDBHttpClient
from .languages import LANGUAGES, Language
from .mirrors import TVDBMirrors
from .models import Actor, Banner, Episode, RecordState, RequestContext, Series
from .retry_handler import TVDBRetryHandler
from .tvdb_api import TVDBAPI

__all__ = [
    'TVDBAPI',
    'TVDBHttpClient',
    'TVDBMirrors',
    'TVDBRetryHandler',
    'Series',
    'Episode',
    'Actor',
    'Banner',
    'RecordState',
    'RequestContext',
    'Language',
    'LANGUAGES',
    'TVDBError',
    'TVDBConfigurationError',
    'TVDBUsageError',
    'TVDBRetriesExhaustedError',
    'TVDBParseError',
    'TVDBMirrorError',
]

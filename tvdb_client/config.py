"""Configuration for TheTVDB API client."""

import os
from typing import Optional

from .exceptions import TVDBConfigurationError

TVDB_API_BASE_URL = os.getenv('TVDB_API_BASE_URL', 'http://www.thetvdb.com')
MAX_API_RETRIES = int(os.getenv('MAX_API_RETRIES', 10))
API_RETRY_DELAY_SECONDS = float(os.getenv('API_RETRY_DELAY_SECONDS', 1.0))
API_REQUEST_TIMEOUT_SECONDS = float(os.getenv('API_REQUEST_TIMEOUT_SECONDS', 30))

DEFAULT_LANGUAGE = 'English'
API_KEY_FILE_NAME = '.tvdb'


def default_api_key_file() -> str:
    """Path of the per-user API key file (~/.tvdb)."""
    return os.path.join(os.path.expanduser('~'), API_KEY_FILE_NAME)


def get_api_key_from_file(path: str) -> Optional[str]:
    """Reads the first line of the key file.

    Returns:
        The stripped key, or None if the file is missing, unreadable or blank.
    """
    try:
        with open(path, encoding='utf-8') as key_file:
            line = key_file.readline()
    except OSError:
        return None
    return line.strip() or None


def resolve_api_key(api_key: Optional[str] = None, path: Optional[str] = None) -> str:
    """Returns the explicit key, falling back to the key file."""
    if api_key:
        return api_key

    key = get_api_key_from_file(path or default_api_key_file())
    if not key:
        raise TVDBConfigurationError("Can't find API key")
    return key

"""Exceptions raised by the TheTVDB API client."""


class TVDBError(Exception):
    """Base class for all client errors."""


class TVDBConfigurationError(TVDBError):
    """Missing API key, unknown language or invalid retry count."""


class TVDBUsageError(TVDBError, ValueError):
    """The caller passed an invalid argument, e.g. an empty search term."""


class TVDBRetriesExhaustedError(TVDBError):
    """A URL kept failing after every allowed retry."""

    def __init__(self, url: str, retries: int):
        self.url = url
        self.retries = retries
        super().__init__(f"failed to get URL {url} after {retries} retries. Aborting.")


class TVDBParseError(TVDBError):
    """The service returned a body that is not well-formed XML."""


class TVDBMirrorError(TVDBError):
    """The mirror list could not be fetched or holds no suitable mirror."""

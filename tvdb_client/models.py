"""Records built from TheTVDB responses."""

from dataclasses import dataclass, field, replace
from enum import Enum
from logging import Logger, getLogger
from types import MappingProxyType
from typing import Any, Mapping, Optional

from lxml import etree

from .exceptions import TVDBUsageError
from .http_client import TVDBHttpClient
from .mirrors import TVDBMirrors
from .retry_handler import TVDBRetryHandler
from .xml_parser import element_attributes, parse_document


class RecordState(Enum):
    SHALLOW = 'shallow'
    FULL = 'full'


@dataclass(frozen=True)
class RequestContext:
    """What a record needs to make its own follow-up requests."""
    api_key: str
    language: str
    mirrors: TVDBMirrors
    retry_handler: TVDBRetryHandler
    http_client: TVDBHttpClient
    logger: Logger = field(default_factory=lambda: getLogger(__name__), compare=False)

    @property
    def max_retries(self) -> int:
        return self.retry_handler.max_retries

    def fetch(self, url: str) -> bytes:
        return self.retry_handler.fetch(url, self.http_client.get)

    def fetch_document(self, url: str) -> etree._Element:
        return parse_document(self.fetch(url), logger=self.logger)


@dataclass(frozen=True)
class _Record:
    """Attribute mapping readable as `record.Name`, `record['Name']` or `record.get('Name')`."""
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    def __getattr__(self, name: str) -> Any:
        attributes = self.__dict__.get('attributes')
        if attributes is not None and name in attributes:
            return attributes[name]
        raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")

    def __getitem__(self, name: str) -> str:
        return self.attributes[name]

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)


def _artwork_url(mirror: Optional[str], path: Optional[str]) -> Optional[str]:
    if not mirror or not path:
        return None
    return f"{mirror}/banners/{path}"


def _to_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


@dataclass(frozen=True)
class Episode(_Record):
    """An episode of a series.

    Episodes attached by Series.fetch() hold the fields listed in the
    series record; fetch() asks the episode endpoint for the full record.
    """
    context: Optional[RequestContext] = None
    state: RecordState = RecordState.SHALLOW

    @property
    def is_full(self) -> bool:
        return self.state is RecordState.FULL

    @property
    def season_number(self) -> Optional[int]:
        return _to_int(self.get('SeasonNumber'))

    @property
    def episode_number(self) -> Optional[int]:
        return _to_int(self.get('EpisodeNumber'))

    @property
    def image_url(self) -> Optional[str]:
        if self.context is None or not self.get('filename'):
            return None
        return _artwork_url(self.context.mirrors.banner_mirror, self.get('filename'))

    def fetch(self) -> 'Episode':
        """Fetches the full episode record.

        Returns:
            A new Episode in the FULL state.
        """
        if self.context is None:
            raise TVDBUsageError("episode was not created by a client and cannot fetch details")
        episode_id = self.get('id')
        if not episode_id:
            raise TVDBUsageError("episode has no id to fetch details for")

        context = self.context
        context.logger.info(f"Fetching full record for episode {episode_id}.")
        url = f"{context.mirrors.xml_mirror}/api/{context.api_key}/episodes/{episode_id}/{context.language}.xml"
        detail = context.fetch_document(url)

        attributes = dict(self.attributes)
        episode_element = next(detail.iter('Episode'), None)
        if episode_element is not None:
            attributes.update(element_attributes(episode_element))
        return replace(self, attributes=attributes, state=RecordState.FULL)


# Actors and banners have no detail endpoint; they only come from a series fetch.
@dataclass(frozen=True)
class Actor(_Record):
    mirror: Optional[str] = None

    @property
    def image_url(self) -> Optional[str]:
        return _artwork_url(self.mirror, self.get('Image'))


@dataclass(frozen=True)
class Banner(_Record):
    mirror: Optional[str] = None

    @property
    def url(self) -> Optional[str]:
        return _artwork_url(self.mirror, self.get('BannerPath'))

    @property
    def thumbnail_url(self) -> Optional[str]:
        return _artwork_url(self.mirror, self.get('ThumbnailPath'))


def _sort_key(actor: Actor) -> int:
    order = _to_int(actor.get('SortOrder'))
    return order if order is not None else 99


@dataclass(frozen=True)
class Series(_Record):
    """A TV series.

    Search results are SHALLOW and only hold the search fields. fetch()
    returns a FULL copy with the detail fields merged in and the episodes,
    actors and banners attached; the shallow value is never modified.
    """
    context: Optional[RequestContext] = None
    state: RecordState = RecordState.SHALLOW
    episodes: tuple[Episode, ...] = ()
    actors: tuple[Actor, ...] = ()
    banners: tuple[Banner, ...] = ()

    @property
    def is_full(self) -> bool:
        return self.state is RecordState.FULL

    def _series_url(self, resource: str) -> str:
        series_id = self.get('id') or self.get('seriesid')
        if not series_id:
            raise TVDBUsageError("series has no id to fetch details for")
        return f"{self.context.mirrors.xml_mirror}/api/{self.context.api_key}/series/{series_id}/{resource}"

    def fetch(self) -> 'Series':
        """Fetches the full series record, its episodes, actors and banners.

        Returns:
            A new Series in the FULL state.
        """
        if self.context is None:
            raise TVDBUsageError("series was not created by a client and cannot fetch details")

        context = self.context
        logger = context.logger
        banner_mirror = context.mirrors.banner_mirror
        logger.info(f"Fetching full record for series {self.get('SeriesName')!r}.")

        detail = context.fetch_document(self._series_url(f"all/{context.language}.xml"))
        attributes = dict(self.attributes)
        series_element = next(detail.iter('Series'), None)
        if series_element is not None:
            attributes.update(element_attributes(series_element))
        episodes = tuple(
            Episode(element_attributes(element), context=context)
            for element in detail.iter('Episode')
        )

        actors_doc = context.fetch_document(self._series_url('actors.xml'))
        actors = tuple(sorted(
            (Actor(element_attributes(element), mirror=banner_mirror) for element in actors_doc.iter('Actor')),
            key=_sort_key,
        ))

        banners_doc = context.fetch_document(self._series_url('banners.xml'))
        banners = tuple(
            Banner(element_attributes(element), mirror=banner_mirror)
            for element in banners_doc.iter('Banner')
        )

        logger.info(
            f"Fetched {len(episodes)} episodes, {len(actors)} actors and {len(banners)} banners "
            f"for series {attributes.get('SeriesName')!r}."
        )
        return replace(self, attributes=attributes, state=RecordState.FULL,
                       episodes=episodes, actors=actors, banners=banners)

    def get_episode(self, season: int, number: int) -> Optional[Episode]:
        for episode in self.episodes:
            if episode.season_number == season and episode.episode_number == number:
                return episode
        return None

    def _series_artwork(self, name: str) -> Optional[str]:
        if self.context is None or not self.get(name):
            return None
        return _artwork_url(self.context.mirrors.banner_mirror, self.get(name))

    @property
    def banner_url(self) -> Optional[str]:
        return self._series_artwork('banner')

    @property
    def poster_url(self) -> Optional[str]:
        return self._series_artwork('poster')

    @property
    def fanart_url(self) -> Optional[str]:
        return self._series_artwork('fanart')

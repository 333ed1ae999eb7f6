"""Languages supported by TheTVDB.

Hard-coded from http://www.thetvdb.com/api/<key>/languages.xml, which changes
rarely and would otherwise cost an extra request per client.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from .exceptions import TVDBConfigurationError


class Language(NamedTuple):
    """A language the service can return data in."""
    name: str
    abbreviation: str
    id: int


LANGUAGES: Mapping[str, Language] = MappingProxyType({
    language.name: language for language in (
        Language('English', 'en', 7),
        Language('Swedish', 'sv', 8),
        Language('Norwegian', 'no', 9),
        Language('Danish', 'da', 10),
        Language('Finnish', 'fi', 11),
        Language('Dutch', 'nl', 13),
        Language('German', 'de', 14),
        Language('Italian', 'it', 15),
        Language('Spanish', 'es', 16),
        Language('French', 'fr', 17),
        Language('Polish', 'pl', 18),
        Language('Hungarian', 'hu', 19),
        Language('Greek', 'el', 20),
        Language('Turkish', 'tr', 21),
        Language('Russian', 'ru', 22),
        Language('Hebrew', 'he', 24),
        Language('Japanese', 'ja', 25),
        Language('Portuguese', 'pt', 26),
        Language('Chinese', 'zh', 27),
        Language('Czech', 'cs', 28),
        Language('Slovenian', 'sl', 30),
        Language('Croatian', 'hr', 31),
        Language('Korean', 'ko', 32),
    )
})


def get_language(name: str) -> Language:
    """Looks up a language by its English name.

    Raises:
        TVDBConfigurationError: if the name is not in the table.
    """
    try:
        return LANGUAGES[name]
    except KeyError:
        raise TVDBConfigurationError(
            f"Unknown language '{name}'. Use one of {sorted(LANGUAGES)}."
        ) from None


def find_by_abbreviation(abbreviation: str) -> Optional[Language]:
    for language in LANGUAGES.values():
        if language.abbreviation == abbreviation:
            return language
    return None

"""Turns TheTVDB XML payloads into attribute mappings."""

from logging import Logger, getLogger
from typing import Optional, Union

from lxml import etree

from .exceptions import TVDBParseError

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_document(body: Union[bytes, str], logger: Optional[Logger] = None) -> etree._Element:
    """Parses a response body into an element tree root.

    Raw bytes are decoded by lxml according to the XML declaration. Text is
    encoded as UTF-8 first, so it must not declare any other encoding.

    Raises:
        TVDBParseError: if the body is not well-formed XML.
    """
    try:
        if isinstance(body, str):
            body = body.encode('utf-8')
        return etree.fromstring(body, parser=_PARSER)
    except etree.XMLSyntaxError as xml_err:
        (logger or getLogger(__name__)).error(f"Failed to parse XML: {xml_err}. Body: {body[:200]!r}...")
        raise TVDBParseError(f"Invalid XML response from API: {xml_err}") from xml_err


def element_attributes(element: etree._Element) -> dict[str, str]:
    """Child tag -> stripped text, with empty children left out."""
    attributes = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue
        text = (child.text or '').strip()
        if text:
            attributes[child.tag] = text
    return attributes


def parse_records(body: Union[bytes, str], tag: str, logger: Optional[Logger] = None) -> list[dict[str, str]]:
    """Returns one attribute mapping per `tag` element, in document order.

    A single match still yields a one-element list.
    """
    root = parse_document(body, logger=logger)
    return [element_attributes(element) for element in root.iter(tag)]

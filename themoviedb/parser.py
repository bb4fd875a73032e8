"""
Mapping of TheMovieDb.org XML responses onto records.

Movie documents come in two image layouts. Movie.search, Movie.browse,
Movie.imdbLookup and Movie.getInfo return flat image elements::

    <images>
        <image type="poster" size="original" url="http://.../Fight_Club.jpg" id="60366"/>
    </images>

while Movie.getImages groups the size variants under their artwork::

    <images>
        <poster id="17066">
            <image url="http://.../Fight_Club.jpg" size="original"/>
            <image url="http://.../Fight_Club_thumb.jpg" size="thumb"/>
        </poster>
    </images>

Both layouts produce one Artwork per image. Collections are gathered from the
subtree of the matched movie or person element only.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional, Union

from .errors import ResponseParseError
from .schema import (
    UNKNOWN,
    Artwork,
    CastEntry,
    Category,
    Country,
    Filmography,
    MovieRecord,
    PersonRecord,
)

logger = logging.getLogger(__name__)

Document = Union[ET.Element, ET.ElementTree]

# Child element tag -> MovieRecord field
MOVIE_FIELDS = {
    "name": "title",
    "popularity": "popularity",
    "type": "type",
    "id": "id",
    "imdb_id": "imdb_id",
    "url": "url",
    "overview": "overview",
    "rating": "rating",
    "released": "release_date",
    "runtime": "runtime",
    "budget": "budget",
    "revenue": "revenue",
    "homepage": "homepage",
    "trailer": "trailer",
}

PERSON_TEXT_FIELDS = ("name", "id", "biography", "birthday", "birthplace", "url", "last_modified_at")
PERSON_INT_FIELDS = ("known_movies", "version")

NESTED_ARTWORK_TAGS = ("poster", "backdrop")


def parse_document(content: Union[bytes, str]) -> ET.Element:
    """
    Parse a response body into its root element.

    Raises:
        ResponseParseError: If the body is empty or not well-formed XML
    """
    if not content or not content.strip():
        raise ResponseParseError("Empty response body")
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        raise ResponseParseError(f"Malformed XML response: {e}") from e


def _root(document: Document) -> ET.Element:
    if isinstance(document, ET.ElementTree):
        return document.getroot()
    return document


def _first(document: Document, tag: str) -> Optional[ET.Element]:
    return next(_root(document).iter(tag), None)


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None or not child.text.strip():
        return UNKNOWN
    return child.text.strip()


def _attr(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None or not value.strip():
        return UNKNOWN
    return value


def _int(element: ET.Element, tag: str) -> int:
    raw = _text(element, tag)
    if raw == UNKNOWN:
        return 0
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Non-numeric {tag} value {raw!r}, using 0")
        return 0


def _children(element: ET.Element, container: str) -> Iterator[ET.Element]:
    for parent in element.iter(container):
        yield from parent


def _parse_images(element: ET.Element) -> List[Artwork]:
    artwork = []
    for child in _children(element, "images"):
        tag = child.tag.lower()
        if tag == "image":
            artwork.append(
                Artwork(
                    type=_attr(child, "type"),
                    size=_attr(child, "size"),
                    url=_attr(child, "url"),
                    id=_attr(child, "id"),
                )
            )
        elif tag in NESTED_ARTWORK_TAGS:
            artwork_id = _attr(child, "id")
            for image in child:
                artwork.append(
                    Artwork(
                        type=child.tag,
                        size=_attr(image, "size"),
                        url=_attr(image, "url"),
                        id=artwork_id,
                    )
                )
        else:
            logger.warning(f"Unknown image element <{child.tag}>, skipping")
    return artwork


def _country(element: ET.Element) -> Country:
    # Sub-elements first, falling back to attributes of the same name
    values = {}
    for name in ("code", "url", "name"):
        value = _text(element, name)
        values[name] = value if value != UNKNOWN else _attr(element, name)
    return Country(**values)


def parse_movie_element(element: ET.Element) -> MovieRecord:
    """Map a single ``movie`` element onto a MovieRecord."""
    fields = {field: _text(element, tag) for tag, field in MOVIE_FIELDS.items()}

    fields["categories"] = [
        Category(type=_attr(child, "type"), url=_attr(child, "url"), name=_attr(child, "name"))
        for child in _children(element, "categories")
    ]
    fields["countries"] = [_country(child) for child in _children(element, "countries")]
    fields["cast"] = [
        CastEntry(
            url=_attr(child, "url"),
            name=_attr(child, "name"),
            job=_attr(child, "job"),
            character=_attr(child, "character"),
            id=_attr(child, "id"),
        )
        for child in _children(element, "cast")
    ]
    fields["artwork"] = _parse_images(element)

    return MovieRecord(**fields)


def parse_movie(document: Document) -> MovieRecord:
    """
    Map the first ``movie`` element of a document onto a MovieRecord.

    Returns a default MovieRecord when the document contains no movie.
    """
    element = _first(document, "movie")
    if element is None:
        logger.debug("Movie not found")
        return MovieRecord()
    return parse_movie_element(element)


def parse_movies(document: Document) -> List[MovieRecord]:
    """Map every ``movie`` element of a search or browse document."""
    return [parse_movie_element(element) for element in _root(document).iter("movie")]


def has_movie(document: Document) -> bool:
    return _first(document, "movie") is not None


def parse_person(document: Document) -> PersonRecord:
    """
    Map the first ``person`` element of a document onto a PersonRecord.

    Every ``image`` below the person becomes artwork and every ``movie``
    below it becomes a filmography entry.
    """
    element = _first(document, "person")
    if element is None:
        logger.debug("Person not found")
        return PersonRecord()

    fields = {name: _text(element, name) for name in PERSON_TEXT_FIELDS}
    fields.update({name: _int(element, name) for name in PERSON_INT_FIELDS})

    fields["artwork"] = [
        Artwork(
            type=_attr(image, "type"),
            url=_attr(image, "url"),
            size=_attr(image, "size"),
            id=_attr(image, "id"),
        )
        for image in element.iter("image")
    ]
    fields["filmography"] = [
        Filmography(
            character=_attr(film, "character"),
            department=_attr(film, "department"),
            id=_attr(film, "id"),
            job=_attr(film, "job"),
            name=_attr(film, "name"),
            url=_attr(film, "url"),
        )
        for film in element.iter("movie")
    ]

    return PersonRecord(**fields)


def _person_version(element: ET.Element) -> PersonRecord:
    return PersonRecord(
        id=_text(element, "id"),
        name=_text(element, "name"),
        version=_int(element, "version"),
        last_modified_at=_text(element, "last_modified_at"),
    )


def parse_person_version(document: Document) -> PersonRecord:
    """Map the first ``person`` of a Person.getVersion document."""
    element = _first(document, "person")
    if element is None:
        logger.debug("Person not found")
        return PersonRecord()
    return _person_version(element)


def parse_person_versions(document: Document) -> List[PersonRecord]:
    """Map every ``person`` of a Person.getVersion document queried with several ids."""
    return [_person_version(element) for element in _root(document).iter("person")]


def has_person(document: Document) -> bool:
    return _first(document, "person") is not None

"""
TheMovieDb.org v2.1 XML API client.

Every lookup comes in two forms:

- ``*_result`` methods return a LookupResult whose status distinguishes a
  found record, a genuinely absent one, a rejected argument and a failed
  request.
- The plain methods return the record (or list of records) directly and
  fall back to a default record or an empty list on any failure, so they
  never raise for network or parsing problems.
"""

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Callable, Generic, Iterable, List, Mapping, Optional, TypeVar

import requests
from pydantic import BaseModel, ConfigDict

from .config import ClientConfig, load_config
from .errors import ResponseParseError, TransportError
from .logging_utils import redact
from .parser import (
    has_movie,
    has_person,
    parse_document,
    parse_movie,
    parse_movies,
    parse_person,
    parse_person_version,
    parse_person_versions,
)
from .schema import MovieRecord, PersonRecord
from .urls import (
    Operation,
    build_browse_query,
    build_url,
    encode_search_term,
    is_valid_argument,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LookupStatus(str, Enum):
    """Outcome of a single lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    TRANSPORT_ERROR = "transport_error"


class LookupResult(BaseModel, Generic[T]):
    """Explicit outcome of a lookup, with the mapped value when found."""

    model_config = ConfigDict(frozen=True)

    status: LookupStatus
    value: Optional[T] = None
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    def value_or(self, default: T) -> T:
        return self.value if self.found and self.value is not None else default


class TheMovieDbClient:
    """Client for the Movie.* and Person.* methods of the TMDb XML API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        config_path: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: TMDb API key (falls back to the config file or TMDB_API_KEY)
            config: Ready-made configuration; takes precedence over api_key and config_path
            config_path: Optional YAML configuration file
            session: Optional requests session, mainly for tests
        """
        self.config = config or load_config(config_path, api_key=api_key)

        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/xml")
        if self.config.proxy:
            self.session.proxies.update(self.config.proxy.as_requests_proxies())

        logger.debug(f"TMDb client initialized for {self.config.base_url} ({self.config.default_language})")

    def __enter__(self) -> "TheMovieDbClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    @property
    def default_language(self) -> str:
        return self.config.default_language

    def _redact(self, text: str) -> str:
        return redact(text, self.config.api_key)

    def build_url(self, operation: Operation, argument: str, language: Optional[str] = None) -> str:
        return build_url(
            operation,
            argument,
            language or self.default_language,
            self.config.api_key,
            self.config.base_url,
        )

    def fetch_document(self, url: str) -> ET.Element:
        """
        Fetch ``url`` and parse the body as XML.

        Raises:
            TransportError: On network failure or a non-2xx status
            ResponseParseError: If the body is not well-formed XML
        """
        safe_url = self._redact(url)
        logger.debug(f"Requesting {safe_url}")

        try:
            response = self.session.get(url, timeout=self.config.timeouts)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(f"HTTP error {status_code} for {safe_url}", url=safe_url, status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed for {safe_url}: {self._redact(str(e))}", url=safe_url) from e

        try:
            return parse_document(response.content)
        except ResponseParseError as e:
            raise ResponseParseError(str(e), url=safe_url, status_code=response.status_code) from e

    def _lookup(
        self,
        operation: Operation,
        argument: str,
        language: Optional[str],
        mapper: Callable[[ET.Element], T],
        present: Callable[[ET.Element], bool],
    ) -> LookupResult[T]:
        url = self.build_url(operation, argument, language)
        safe_url = self._redact(url)

        try:
            document = self.fetch_document(url)
        except TransportError as e:
            logger.error(f"TheMovieDb error during {operation.value}: {e}")
            return LookupResult(status=LookupStatus.TRANSPORT_ERROR, url=safe_url, error=str(e))

        if not present(document):
            return LookupResult(status=LookupStatus.NOT_FOUND, value=mapper(document), url=safe_url)
        return LookupResult(status=LookupStatus.FOUND, value=mapper(document), url=safe_url)

    # Movie.* methods

    def search_movies_result(self, title: str, language: Optional[str] = None) -> LookupResult[List[MovieRecord]]:
        """Movie.search: find movies by title."""
        if not is_valid_argument(title):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=[])
        return self._lookup(Operation.MOVIE_SEARCH, encode_search_term(title), language, parse_movies, has_movie)

    def search_movies(self, title: str, language: Optional[str] = None) -> List[MovieRecord]:
        return self.search_movies_result(title, language).value_or([])

    def browse_movies_result(
        self,
        order_by: str,
        order: str,
        parameters: Optional[Mapping[str, str]] = None,
        language: Optional[str] = None,
    ) -> LookupResult[List[MovieRecord]]:
        """
        Movie.browse: list movies matching filters, sorted.

        Args:
            order_by: ``rating``, ``release`` or ``title``
            order: ``asc`` or ``desc``
            parameters: Optional browse filters such as ``page`` or ``genres``
            language: Language code, defaults to the configured language
        """
        if not is_valid_argument(order_by):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=[])
        query = build_browse_query(order_by, order, parameters)
        return self._lookup(Operation.MOVIE_BROWSE, query, language, parse_movies, has_movie)

    def browse_movies(
        self,
        order_by: str,
        order: str,
        parameters: Optional[Mapping[str, str]] = None,
        language: Optional[str] = None,
    ) -> List[MovieRecord]:
        return self.browse_movies_result(order_by, order, parameters, language).value_or([])

    def imdb_lookup_result(self, imdb_id: str, language: Optional[str] = None) -> LookupResult[MovieRecord]:
        """Movie.imdbLookup: find a movie by its IMDb id (including the ``tt`` prefix)."""
        if not is_valid_argument(imdb_id):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=MovieRecord())
        return self._lookup(Operation.MOVIE_IMDB_LOOKUP, imdb_id.strip(), language, parse_movie, has_movie)

    def imdb_lookup(self, imdb_id: str, language: Optional[str] = None) -> MovieRecord:
        return self.imdb_lookup_result(imdb_id, language).value_or(MovieRecord())

    def get_movie_info_result(self, tmdb_id: str, language: Optional[str] = None) -> LookupResult[MovieRecord]:
        """
        Movie.getInfo: full details of a movie.

        If nothing usable comes back for a language other than the default
        one, the lookup is repeated once in the default language.
        """
        if not is_valid_argument(tmdb_id):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=MovieRecord())

        language = language or self.default_language
        result = self._lookup(Operation.MOVIE_GET_INFO, tmdb_id.strip(), language, parse_movie, has_movie)
        if result.found or language.lower() == self.default_language.lower():
            return result

        logger.info(f"No {language} details for movie {tmdb_id}, trying {self.default_language}")
        return self._lookup(Operation.MOVIE_GET_INFO, tmdb_id.strip(), self.default_language, parse_movie, has_movie)

    def get_movie_info(self, tmdb_id: str, language: Optional[str] = None) -> MovieRecord:
        return self.get_movie_info_result(tmdb_id, language).value_or(MovieRecord())

    def get_movie_images_result(self, movie_id: str, language: Optional[str] = None) -> LookupResult[MovieRecord]:
        """Movie.getImages: all artwork of a movie, by TMDb or IMDb id."""
        if not is_valid_argument(movie_id):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=MovieRecord())
        return self._lookup(Operation.MOVIE_GET_IMAGES, movie_id.strip(), language, parse_movie, has_movie)

    def get_movie_images(self, movie_id: str, language: Optional[str] = None) -> MovieRecord:
        return self.get_movie_images_result(movie_id, language).value_or(MovieRecord())

    # Person.* methods

    def search_person_result(self, name: str, language: Optional[str] = None) -> LookupResult[PersonRecord]:
        """Person.search: find an actor, actress or production member by name."""
        if not is_valid_argument(name):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=PersonRecord())
        return self._lookup(Operation.PERSON_SEARCH, encode_search_term(name), language, parse_person, has_person)

    def search_person(self, name: str, language: Optional[str] = None) -> PersonRecord:
        return self.search_person_result(name, language).value_or(PersonRecord())

    def get_person_info_result(self, person_id: str, language: Optional[str] = None) -> LookupResult[PersonRecord]:
        """Person.getInfo: filmography, images and biography of a person."""
        if not is_valid_argument(person_id):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=PersonRecord())
        return self._lookup(Operation.PERSON_GET_INFO, person_id.strip(), language, parse_person, has_person)

    def get_person_info(self, person_id: str, language: Optional[str] = None) -> PersonRecord:
        return self.get_person_info_result(person_id, language).value_or(PersonRecord())

    def get_person_version_result(self, person_id: str, language: Optional[str] = None) -> LookupResult[PersonRecord]:
        """Person.getVersion: version number and last modification time of a person."""
        if not is_valid_argument(person_id):
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=PersonRecord())
        return self._lookup(
            Operation.PERSON_GET_VERSION, person_id.strip(), language, parse_person_version, has_person
        )

    def get_person_version(self, person_id: str, language: Optional[str] = None) -> PersonRecord:
        return self.get_person_version_result(person_id, language).value_or(PersonRecord())

    def get_person_versions_result(
        self, person_ids: Iterable[str], language: Optional[str] = None
    ) -> LookupResult[List[PersonRecord]]:
        """Person.getVersion for several people in one request (ids are sent comma-separated)."""
        ids = [person_id.strip() for person_id in person_ids or [] if is_valid_argument(person_id)]
        if not ids:
            return LookupResult(status=LookupStatus.INVALID_ARGUMENT, value=[])
        return self._lookup(
            Operation.PERSON_GET_VERSION, ",".join(ids), language, parse_person_versions, has_person
        )

    def get_person_versions(self, person_ids: Iterable[str], language: Optional[str] = None) -> List[PersonRecord]:
        return self.get_person_versions_result(person_ids, language).value_or([])


def compare_movies(movie: Optional[MovieRecord], title: str, year: Optional[str] = None) -> bool:
    """
    Check whether a movie matches a title and, optionally, a release year.

    Titles are compared case-insensitively. When a valid year is given the
    movie must also have a release date starting with that year.
    """
    if movie is None or not is_valid_argument(title):
        return False

    if movie.title.lower() != title.strip().lower():
        return False
    if not is_valid_argument(year):
        return True
    return movie.release_year == year.strip()


def find_movie(movies: Iterable[MovieRecord], title: str, year: Optional[str] = None) -> Optional[MovieRecord]:
    """Return the first movie matching ``title`` (and ``year``), or None."""
    for movie in movies or []:
        if compare_movies(movie, title, year):
            return movie
    return None

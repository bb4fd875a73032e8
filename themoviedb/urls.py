"""
Query URL construction for the TheMovieDb.org v2.1 API.

URLs have the shape ``<base>/<operation>/<language>/xml/<api_key>/<argument>``,
except for ``Movie.browse`` whose argument is a query string appended after
``?`` instead of a path segment.
"""

import logging
from enum import Enum
from typing import Mapping, Optional
from urllib.parse import quote_plus

from .schema import UNKNOWN

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://api.themoviedb.org/2.1/"
DEFAULT_LANGUAGE = "en-US"

# Optional Movie.browse parameters, in the order they are emitted
BROWSE_PARAMETERS = (
    "per_page",
    "page",
    "query",
    "min_votes",
    "rating_min",
    "rating_max",
    "genres",
    "genres_selector",
    "release_min",
    "release_max",
    "year",
    "certifications",
    "companies",
    "countries",
)


class Operation(str, Enum):
    """API methods supported by the client."""

    MOVIE_SEARCH = "Movie.search"
    MOVIE_BROWSE = "Movie.browse"
    MOVIE_IMDB_LOOKUP = "Movie.imdbLookup"
    MOVIE_GET_INFO = "Movie.getInfo"
    MOVIE_GET_IMAGES = "Movie.getImages"
    PERSON_SEARCH = "Person.search"
    PERSON_GET_INFO = "Person.getInfo"
    PERSON_GET_VERSION = "Person.getVersion"


def is_valid_argument(value: Optional[str]) -> bool:
    """Return False for None, blank strings and the UNKNOWN sentinel."""
    if value is None:
        return False
    if value.strip().upper() == UNKNOWN:
        return False
    return bool(value.strip())


def encode_search_term(text: str) -> str:
    """Percent-encode free text for use as a path argument."""
    return quote_plus(text, encoding="utf-8")


def build_browse_query(order_by: str, order: str, parameters: Optional[Mapping[str, str]] = None) -> str:
    """
    Build the query string for Movie.browse.

    Args:
        order_by: Sort field, one of ``rating``, ``release`` or ``title``
        order: ``asc`` or ``desc``
        parameters: Optional filters; keys outside BROWSE_PARAMETERS are dropped

    Returns:
        Query string without the leading ``?``
    """
    parameters = parameters or {}

    dropped = sorted(key for key in parameters if key not in BROWSE_PARAMETERS)
    if dropped:
        logger.debug(f"Ignoring unsupported browse parameters: {', '.join(dropped)}")

    query = f"order_by={order_by or ''}&order={order or ''}"
    for key in BROWSE_PARAMETERS:
        if key in parameters:
            query += f"&{key}={parameters[key]}"
    return query


def build_url(
    operation: Operation,
    argument: str,
    language: str,
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """
    Build the full request URL for an API method.

    Free-text arguments must already be encoded with encode_search_term;
    identifiers and browse query strings are appended verbatim.
    """
    operation = Operation(operation)
    if not base_url.endswith("/"):
        base_url += "/"

    url = f"{base_url}{operation.value}/{language}/xml/{api_key}"
    separator = "?" if operation is Operation.MOVIE_BROWSE else "/"
    return f"{url}{separator}{argument}"

"""
TheMovieDb XML API Client Package

This package provides a client for the TheMovieDb.org v2.1 XML API: URL
construction, HTTP access and mapping of the XML responses onto movie and
person records.
"""

__version__ = "1.3.0"

from .client import LookupResult, LookupStatus, TheMovieDbClient, compare_movies, find_movie
from .config import ClientConfig, LoggingSettings, ProxySettings, load_config
from .errors import ConfigurationError, ResponseParseError, TheMovieDbError, TransportError
from .parser import parse_document, parse_movie, parse_movies, parse_person, parse_person_version, parse_person_versions
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
from .urls import Operation, build_browse_query, build_url, encode_search_term

__all__ = [
    "TheMovieDbClient",
    "LookupResult",
    "LookupStatus",
    "compare_movies",
    "find_movie",
    "ClientConfig",
    "LoggingSettings",
    "ProxySettings",
    "load_config",
    "TheMovieDbError",
    "ConfigurationError",
    "TransportError",
    "ResponseParseError",
    "parse_document",
    "parse_movie",
    "parse_movies",
    "parse_person",
    "parse_person_version",
    "parse_person_versions",
    "UNKNOWN",
    "Artwork",
    "CastEntry",
    "Category",
    "Country",
    "Filmography",
    "MovieRecord",
    "PersonRecord",
    "Operation",
    "build_browse_query",
    "build_url",
    "encode_search_term",
]

"""
Mock utilities for TMDb XML API testing.

Provides fixture loading and a fake requests session so the client can be
exercised without real API calls.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from requests.exceptions import ConnectionError, HTTPError

FIXTURES_PATH = Path(__file__).parent.parent / 'fixtures'

TEST_API_KEY = 'test-api-key-0123456789'

# Operation name -> fixture served by MockXMLSession
DEFAULT_ROUTES = {
    'Movie.search': 'movie_search.xml',
    'Movie.browse': 'movie_search.xml',
    'Movie.imdbLookup': 'movie_getinfo.xml',
    'Movie.getInfo': 'movie_getinfo.xml',
    'Movie.getImages': 'movie_getimages.xml',
    'Person.search': 'person_getinfo.xml',
    'Person.getInfo': 'person_getinfo.xml',
    'Person.getVersion': 'person_getversion.xml',
}


def load_fixture(name: str) -> bytes:
    """Read an XML fixture from tests/fixtures."""
    return (FIXTURES_PATH / name).read_bytes()


class MockXMLResponse:
    """Mock response object that mimics requests.Response."""

    def __init__(self, content: Union[bytes, str], status_code: int = 200):
        """Initialize mock response."""
        self.content = content.encode('utf-8') if isinstance(content, str) else content
        self.status_code = status_code
        self.headers = {'content-type': 'text/xml; charset=utf-8'}
        self.text = self.content.decode('utf-8', errors='replace')

    def raise_for_status(self):
        """Raise HTTPError for bad status codes."""
        if self.status_code >= 400:
            raise HTTPError(f'{self.status_code} Error', response=self)


class MockXMLSession:
    """Mock session that serves fixtures by API operation name."""

    def __init__(
        self,
        routes: Optional[Dict[str, Union[str, MockXMLResponse, Exception]]] = None,
        failing_languages: Optional[List[str]] = None,
    ):
        """
        Initialize mock session.

        Args:
            routes: Operation name -> fixture file name, response, or exception to raise
            failing_languages: Language codes whose requests fail with a connection error
        """
        self.routes = dict(DEFAULT_ROUTES)
        self.routes.update(routes or {})
        self.failing_languages = failing_languages or []
        self.requested_urls: List[str] = []
        self.request_kwargs: List[Dict] = []
        self.headers: Dict[str, str] = {}
        self.proxies: Dict[str, str] = {}
        self.closed = False

    def get(self, url: str, **kwargs) -> MockXMLResponse:
        """Mock GET request."""
        self.requested_urls.append(url)
        self.request_kwargs.append(kwargs)

        for language in self.failing_languages:
            if f'/{language}/xml/' in url:
                raise ConnectionError(f'Mock connection failure for {url}')

        for operation, route in self.routes.items():
            if f'/{operation}/' in url:
                if isinstance(route, Exception):
                    raise route
                if isinstance(route, MockXMLResponse):
                    return route
                return MockXMLResponse(load_fixture(route))

        return MockXMLResponse(load_fixture('nothing_found.xml'))

    def close(self):
        self.closed = True

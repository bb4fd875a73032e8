"""
Record definitions for TheMovieDb.org API responses.

Every record is a Pydantic model whose string fields default to the
``UNKNOWN`` sentinel and whose list fields default to empty lists, so a
record can always be constructed and every attribute access succeeds even
when the remote service returned nothing useful.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

UNKNOWN = "UNKNOWN"


def is_known(value: Optional[str]) -> bool:
    """Return True when ``value`` carries real data rather than the sentinel."""
    if value is None:
        return False
    value = value.strip()
    return bool(value) and value.upper() != UNKNOWN


def _to_float(value: str) -> Optional[float]:
    if not is_known(value):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _to_int(value: str) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


class Record(BaseModel):
    """Base model for all API records."""

    @field_validator("*", mode="before")
    @classmethod
    def replace_missing_strings(cls, v, info):
        # None or blank strings collapse to the sentinel for str fields
        field = cls.model_fields[info.field_name]
        if field.annotation is str and (v is None or (isinstance(v, str) and not v.strip())):
            return UNKNOWN
        return v


class Artwork(Record):
    """One image asset, e.g. the thumbnail variant of a poster."""

    type: str = Field(UNKNOWN, description="Artwork type (poster, backdrop, profile)")
    size: str = Field(UNKNOWN, description="Size variant (original, thumb, cover, mid)")
    url: str = Field(UNKNOWN, description="Image URL")
    id: str = Field(UNKNOWN, description="Identifier shared by all size variants of one image")


class Category(Record):
    """A genre or other classification attached to a movie."""

    type: str = Field(UNKNOWN, description="Category type, usually 'genre'")
    name: str = Field(UNKNOWN, description="Category name")
    url: str = Field(UNKNOWN, description="Canonical category URL")


class Country(Record):
    """Production country of a movie."""

    code: str = Field(UNKNOWN, description="ISO 3166-1 country code")
    name: str = Field(UNKNOWN, description="Country name")
    url: str = Field(UNKNOWN, description="Canonical country URL")


class CastEntry(Record):
    """A cast or crew member credited on a movie."""

    name: str = Field(UNKNOWN, description="Person name")
    job: str = Field(UNKNOWN, description="Job, e.g. Actor or Director")
    character: str = Field(UNKNOWN, description="Character name when acting")
    url: str = Field(UNKNOWN, description="Canonical person URL")
    id: str = Field(UNKNOWN, description="TMDb person id")


class Filmography(Record):
    """A movie a person is credited on."""

    id: str = Field(UNKNOWN, description="TMDb movie id")
    name: str = Field(UNKNOWN, description="Movie title")
    character: str = Field(UNKNOWN, description="Character name when acting")
    job: str = Field(UNKNOWN, description="Job on the movie")
    department: str = Field(UNKNOWN, description="Department of the job")
    url: str = Field(UNKNOWN, description="Canonical movie URL")


class MovieRecord(Record):
    """Movie details as returned by the Movie.* methods."""

    id: str = Field(UNKNOWN, description="TMDb movie id")
    title: str = Field(UNKNOWN, description="Movie title")
    type: str = Field(UNKNOWN, description="Record type, e.g. movie")
    imdb_id: str = Field(UNKNOWN, description="IMDb cross-reference id (tt...)")
    url: str = Field(UNKNOWN, description="Canonical TMDb URL")
    overview: str = Field(UNKNOWN, description="Synopsis")
    popularity: str = Field(UNKNOWN, description="Popularity score as sent by the API")
    rating: str = Field(UNKNOWN, description="Average rating as sent by the API")
    release_date: str = Field(UNKNOWN, description="Release date, usually YYYY-MM-DD")
    runtime: str = Field(UNKNOWN, description="Runtime in minutes")
    budget: str = Field(UNKNOWN, description="Production budget")
    revenue: str = Field(UNKNOWN, description="Box office revenue")
    homepage: str = Field(UNKNOWN, description="Official homepage URL")
    trailer: str = Field(UNKNOWN, description="Trailer URL")

    cast: List[CastEntry] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    countries: List[Country] = Field(default_factory=list)
    artwork: List[Artwork] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not is_known(self.id)

    @property
    def popularity_value(self) -> Optional[float]:
        return _to_float(self.popularity)

    @property
    def rating_value(self) -> Optional[float]:
        return _to_float(self.rating)

    @property
    def runtime_minutes(self) -> Optional[int]:
        return _to_int(self.runtime)

    @property
    def budget_amount(self) -> Optional[int]:
        return _to_int(self.budget)

    @property
    def revenue_amount(self) -> Optional[int]:
        return _to_int(self.revenue)

    @property
    def release_year(self) -> Optional[str]:
        """Four digit year from the release date, if there is one."""
        if not is_known(self.release_date) or len(self.release_date) < 4:
            return None
        year = self.release_date[:4]
        return year if year.isdigit() else None

    def artwork_of(self, artwork_type: str, size: Optional[str] = None) -> List[Artwork]:
        """
        Filter artwork by type and, optionally, size variant.

        Args:
            artwork_type: Artwork type such as ``poster`` or ``backdrop``
            size: Size variant such as ``original`` or ``thumb``

        Returns:
            Matching artwork in document order
        """
        return [
            art
            for art in self.artwork
            if art.type.lower() == artwork_type.lower() and (size is None or art.size.lower() == size.lower())
        ]


class PersonRecord(Record):
    """Person details as returned by the Person.* methods."""

    id: str = Field(UNKNOWN, description="TMDb person id")
    name: str = Field(UNKNOWN, description="Person name")
    biography: str = Field(UNKNOWN, description="Biography text")
    known_movies: int = Field(0, description="Number of movies the person is known for")
    birthday: str = Field(UNKNOWN, description="Birthday, usually YYYY-MM-DD")
    birthplace: str = Field(UNKNOWN, description="Place of birth")
    url: str = Field(UNKNOWN, description="Canonical TMDb URL")
    version: int = Field(0, description="Record version number")
    last_modified_at: str = Field(UNKNOWN, description="Last modification timestamp")

    artwork: List[Artwork] = Field(default_factory=list)
    filmography: List[Filmography] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not is_known(self.id)

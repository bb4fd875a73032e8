"""
Tests for the record models.
"""

from themoviedb.schema import (
    UNKNOWN,
    Artwork,
    CastEntry,
    Category,
    Country,
    Filmography,
    MovieRecord,
    PersonRecord,
    is_known,
)


class TestDefaults:
    """Every record can be built without arguments."""

    def test_movie_defaults(self):
        movie = MovieRecord()

        for field in ("id", "title", "type", "imdb_id", "url", "overview", "popularity", "rating",
                      "release_date", "runtime", "budget", "revenue", "homepage", "trailer"):
            assert getattr(movie, field) == UNKNOWN
        assert movie.cast == []
        assert movie.categories == []
        assert movie.countries == []
        assert movie.artwork == []

    def test_person_defaults(self):
        person = PersonRecord()

        assert person.name == UNKNOWN
        assert person.known_movies == 0
        assert person.version == 0
        assert person.artwork == []
        assert person.filmography == []
        assert person.is_empty

    def test_nested_defaults(self):
        for model in (Artwork, Category, Country, CastEntry, Filmography):
            record = model()
            assert all(value == UNKNOWN for value in record.model_dump().values())

    def test_lists_not_shared(self):
        """Default lists are independent per record."""
        first, second = MovieRecord(), MovieRecord()
        first.cast.append(CastEntry(name="Someone"))

        assert second.cast == []

    def test_none_and_blank_become_sentinel(self):
        art = Artwork(type=None, size="", url="   ", id="12")

        assert art.type == UNKNOWN
        assert art.size == UNKNOWN
        assert art.url == UNKNOWN
        assert art.id == "12"


class TestMovieHelpers:
    """Tests for typed accessors and filters."""

    def test_numeric_accessors(self):
        movie = MovieRecord(popularity="3", rating="8.8", runtime="139", budget="63000000", revenue="bad")

        assert movie.popularity_value == 3.0
        assert movie.rating_value == 8.8
        assert movie.runtime_minutes == 139
        assert movie.budget_amount == 63000000
        assert movie.revenue_amount is None

    def test_numeric_accessors_unknown(self):
        movie = MovieRecord()

        assert movie.rating_value is None
        assert movie.runtime_minutes is None

    def test_release_year(self):
        assert MovieRecord(release_date="1999-10-15").release_year == "1999"
        assert MovieRecord(release_date="soon").release_year is None
        assert MovieRecord().release_year is None

    def test_artwork_of(self):
        movie = MovieRecord(
            artwork=[
                Artwork(type="poster", size="original", url="a", id="1"),
                Artwork(type="poster", size="thumb", url="b", id="1"),
                Artwork(type="backdrop", size="thumb", url="c", id="2"),
            ]
        )

        assert [a.url for a in movie.artwork_of("poster")] == ["a", "b"]
        assert [a.url for a in movie.artwork_of("POSTER", "thumb")] == ["b"]
        assert movie.artwork_of("profile") == []

    def test_is_empty(self):
        assert MovieRecord().is_empty
        assert not MovieRecord(id="550").is_empty

    def test_is_known(self):
        assert is_known("550")
        assert not is_known(None)
        assert not is_known(" ")
        assert not is_known("unknown")

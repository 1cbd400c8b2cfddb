import pytest

from apps.movies.models import Movie
from apps.movies.services import catalog
from apps.movies.services.tmdb_client import TMDbError
from common.exceptions import UpstreamUnavailable
from tests.factories import FakeTMDbClient, tmdb_payload

pytestmark = pytest.mark.django_db


def test_hit_returns_stored_row_without_fetching(movie):
    client = FakeTMDbClient()
    assert catalog.resolve(550, client=client) == movie
    assert client.calls == []


def test_miss_fetches_and_stores():
    client = FakeTMDbClient(payloads={129: tmdb_payload(129, 'Spirited Away')})

    movie = catalog.resolve(129, client=client)

    assert movie.pk is not None
    assert movie.title == 'Spirited Away'
    assert movie.director == 'Hayao Miyazaki'
    assert movie.year == 2001
    assert Movie.objects.filter(tmdb_id=129).count() == 1

    # Second lookup is served from the table
    assert catalog.resolve(129, client=client) == movie
    assert client.calls == [129]


def test_provider_failure_stores_nothing():
    client = FakeTMDbClient(error=TMDbError('down'))
    assert catalog.resolve(7, client=client) is None
    assert not Movie.objects.filter(tmdb_id=7).exists()


def test_unknown_movie_returns_none():
    assert catalog.resolve(999999, client=FakeTMDbClient()) is None


def test_unusable_payload_stores_nothing():
    client = FakeTMDbClient(payloads={8: {'id': 8}})
    assert catalog.resolve(8, client=client) is None
    assert not Movie.objects.filter(tmdb_id=8).exists()


def test_resolve_or_raise():
    with pytest.raises(UpstreamUnavailable):
        catalog.resolve_or_raise(5, client=FakeTMDbClient(error=TMDbError('down')))

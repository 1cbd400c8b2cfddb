from unittest import mock

import pytest
import requests

from apps.movies.services.tmdb_client import (
    TMDbClient,
    TMDbError,
    TMDbNotFound,
    empty_page,
    extract_director,
    map_movie_details,
)
from tests.factories import tmdb_payload


def _response(status_code=200, payload=None):
    response = mock.Mock(status_code=status_code, ok=status_code < 400)
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return mock.Mock()


@pytest.fixture
def client(session):
    return TMDbClient(api_key='key', base_url='https://tmdb.test/3/', language='es-AR', session=session)


def test_extract_director_picks_first_director():
    credits = {'crew': [
        {'job': 'Writer', 'name': 'A'},
        {'job': 'Director', 'name': 'B'},
        {'job': 'Director', 'name': 'C'},
    ]}
    assert extract_director(credits) == 'B'
    assert extract_director({'crew': []}) is None
    assert extract_director(None) is None


def test_map_movie_details():
    fields = map_movie_details(tmdb_payload(129, 'Spirited Away', genres=('Animation', 'Family')))
    assert fields['tmdb_id'] == 129
    assert fields['title'] == 'Spirited Away'
    assert fields['year'] == 2001
    assert fields['runtime'] == 125
    assert fields['director'] == 'Hayao Miyazaki'
    assert fields['genres'] == ['Animation', 'Family']


def test_map_movie_details_blank_values():
    payload = tmdb_payload(1, 'Untitled', release_date='', runtime=0)
    payload['credits'] = {}
    fields = map_movie_details(payload)
    assert fields['year'] is None
    assert fields['runtime'] is None
    assert fields['director'] is None


def test_map_movie_details_rejects_payload_without_title():
    assert map_movie_details({'id': 1}) is None
    assert map_movie_details({'title': 'No id'}) is None
    assert map_movie_details(None) is None


def test_get_movie_details_requests_credits(client, session):
    session.get.return_value = _response(payload={'id': 550, 'title': 'Fight Club'})

    assert client.get_movie_details(550)['title'] == 'Fight Club'

    url = session.get.call_args.args[0]
    params = session.get.call_args.kwargs['params']
    assert url == 'https://tmdb.test/3/movie/550'
    assert params['append_to_response'] == 'credits,videos'
    assert params['api_key'] == 'key'
    assert params['language'] == 'es-AR'


def test_not_found(client, session):
    session.get.return_value = _response(status_code=404)
    with pytest.raises(TMDbNotFound):
        client.get_movie_details(1)


def test_http_error(client, session):
    session.get.return_value = _response(status_code=500)
    with pytest.raises(TMDbError):
        client.get_movie_details(1)


def test_network_error(client, session):
    session.get.side_effect = requests.ConnectionError('boom')
    with pytest.raises(TMDbError):
        client.get_movie_details(1)


def test_missing_api_key(session):
    client = TMDbClient(api_key='', session=session)
    with pytest.raises(TMDbError):
        client.get_popular_movies()
    session.get.assert_not_called()


def test_blank_search_skips_request(client, session):
    assert client.search_movies('   ') == empty_page()
    session.get.assert_not_called()


def test_search_results_are_cached(client, session):
    page = {'page': 1, 'results': [{'id': 1}], 'total_pages': 1, 'total_results': 1}
    session.get.return_value = _response(payload=page)

    assert client.search_movies('Alien') == page
    assert client.search_movies('alien') == page
    assert session.get.call_count == 1


def test_popular_pages_are_cached_separately(client, session):
    session.get.return_value = _response(payload={'page': 1, 'results': []})
    client.get_popular_movies(1)
    client.get_popular_movies(2)
    client.get_popular_movies(1)
    assert session.get.call_count == 2

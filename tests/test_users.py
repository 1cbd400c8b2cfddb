import uuid

import pytest
from django.contrib.auth import get_user_model

from apps.movies.services import ratings
from apps.users.services import firebase_auth
from apps.users.services.stats import top_genres, user_stats
from tests.factories import DEFAULT_PASSWORD

pytestmark = pytest.mark.django_db

User = get_user_model()


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

def test_register(api_client):
    response = api_client.post(
        '/api/v1/auth/register/',
        {'email': 'Ana@Example.com', 'password': DEFAULT_PASSWORD},
        format='json',
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert data['access']
    assert data['refresh']
    assert data['user']['email'] == 'ana@example.com'
    assert data['user']['display_name'] == 'ana'


def test_register_duplicate_email(api_client, member):
    response = api_client.post(
        '/api/v1/auth/register/',
        {'email': member.email, 'password': DEFAULT_PASSWORD},
        format='json',
    )

    assert response.status_code == 400
    assert 'email' in response.json()['error']['details']


def test_login(api_client, member):
    response = api_client.post(
        '/api/v1/auth/login/',
        {'email': member.email, 'password': DEFAULT_PASSWORD},
        format='json',
    )
    assert response.status_code == 200
    assert response.json()['data']['user']['id'] == str(member.pk)

    response = api_client.post(
        '/api/v1/auth/login/',
        {'email': member.email, 'password': 'wrong-password'},
        format='json',
    )
    assert response.status_code == 401
    assert response.json()['error']['code'] == 'authentication_failed'


def test_refresh_rotates_and_blacklists(api_client, member):
    login = api_client.post(
        '/api/v1/auth/login/',
        {'email': member.email, 'password': DEFAULT_PASSWORD},
        format='json',
    ).json()['data']

    response = api_client.post('/api/v1/auth/token/refresh/', {'refresh': login['refresh']}, format='json')
    assert response.status_code == 200
    assert response.json()['data']['refresh'] != login['refresh']

    response = api_client.post('/api/v1/auth/token/refresh/', {'refresh': login['refresh']}, format='json')
    assert response.status_code == 401


def test_logout(client_for, api_client, member):
    login = api_client.post(
        '/api/v1/auth/login/',
        {'email': member.email, 'password': DEFAULT_PASSWORD},
        format='json',
    ).json()['data']
    client = client_for(member)

    assert client.post('/api/v1/auth/logout/', {'refresh': login['refresh']}, format='json').status_code == 200
    assert client.post('/api/v1/auth/logout/', {'refresh': login['refresh']}, format='json').status_code == 400


def test_firebase_exchange(monkeypatch, api_client):
    claims = {'uid': 'fb-123', 'email': 'Nico@Example.com', 'name': 'Nico', 'picture': 'https://img.test/n.png'}
    monkeypatch.setattr(firebase_auth, 'verify_id_token', lambda token: claims)

    response = api_client.post('/api/v1/auth/firebase/', {'firebase_token': 'x'}, format='json')
    assert response.status_code == 201
    user = User.objects.get(firebase_uid='fb-123')
    assert user.email == 'nico@example.com'
    assert user.display_name == 'Nico'
    assert user.avatar == 'https://img.test/n.png'
    assert not user.has_usable_password()

    response = api_client.post('/api/v1/auth/firebase/', {'firebase_token': 'x'}, format='json')
    assert response.status_code == 200
    assert User.objects.filter(firebase_uid='fb-123').count() == 1


def test_firebase_links_existing_account(member):
    user, created = firebase_auth.get_or_create_user({'uid': 'fb-9', 'email': member.email.upper()})

    assert created is False
    assert user.pk == member.pk
    member.refresh_from_db()
    assert member.firebase_uid == 'fb-9'


def test_firebase_rejected_token(monkeypatch, api_client):
    def reject(token):
        raise firebase_auth.FirebaseVerificationError('expired')

    monkeypatch.setattr(firebase_auth, 'verify_id_token', reject)

    response = api_client.post('/api/v1/auth/firebase/', {'firebase_token': 'x'}, format='json')
    assert response.status_code == 401


# ---------------------------------------------------------------------------
# Profile and search
# ---------------------------------------------------------------------------

def test_profile_update(client_for, member):
    client = client_for(member)

    response = client.patch('/api/v1/users/me/', {'display_name': ' M '}, format='json')
    assert response.status_code == 400

    response = client.patch(
        '/api/v1/users/me/',
        {'display_name': '  Marco P  ', 'bio': ' Cinephile '},
        format='json',
    )
    assert response.status_code == 200
    assert response.json()['data']['display_name'] == 'Marco P'
    assert response.json()['data']['bio'] == 'Cinephile'


def test_search(client_for, member, owner, outsider):
    client = client_for(member)

    assert client.get('/api/v1/users/search/?q=o').json()['data'] == []

    results = client.get('/api/v1/users/search/?q=os').json()['data']
    assert [r['display_name'] for r in results] == ['Oscar']

    results = client.get('/api/v1/users/search/?q=marco').json()['data']
    assert results == []


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

@pytest.fixture
def rated(group, owner, member, make_movie, log_movie):
    movies = [
        make_movie(title='A', genres=['Drama', 'Crime']),
        make_movie(title='B', genres=['Drama']),
        make_movie(title='C', genres=['Drama', 'Comedy', 'Crime']),
    ]
    for m in movies:
        log_movie(group, owner, m)
    ratings.save_rating(group.pk, movies[0].pk, member, 8, 'Loved it')
    ratings.save_rating(group.pk, movies[1].pk, member, 6, '   ')
    ratings.save_rating(group.pk, movies[2].pk, member, 4)
    return movies


def test_user_stats(rated, member):
    assert user_stats(member) == {'movies_watched': 3, 'reviews_written': 1}


def test_top_genres(rated, member):
    assert top_genres(member) == [
        {'name': 'Drama', 'count': 3, 'percentage': 50},
        {'name': 'Crime', 'count': 2, 'percentage': 33},
        {'name': 'Comedy', 'count': 1, 'percentage': 17},
    ]
    assert top_genres(member, limit=1) == [{'name': 'Drama', 'count': 3, 'percentage': 50}]


def test_top_genres_empty(member):
    assert top_genres(member) == []


def test_stats_endpoint(client_for, rated, owner, member):
    response = client_for(owner).get(f'/api/v1/users/{member.pk}/stats/')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['user']['id'] == str(member.pk)
    assert data['movies_watched'] == 3
    assert data['reviews_written'] == 1
    assert data['top_genres'][0]['name'] == 'Drama'
    assert len(data['recent_ratings']) == 3


def test_stats_endpoint_unknown_user(client_for, member):
    response = client_for(member).get(f'/api/v1/users/{uuid.uuid4()}/stats/')
    assert response.status_code == 404


def test_stats_of_another_user_hide_groups_not_shared(client_for, group, member, outsider, movie, log_movie):
    log_movie(group, member, movie)
    ratings.save_rating(group.pk, movie.pk, member, 3, 'private remark')

    response = client_for(outsider).get(f'/api/v1/users/{member.pk}/stats/')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['movies_watched'] == 0
    assert data['reviews_written'] == 0
    assert data['top_genres'] == []
    assert data['recent_ratings'] == []


def test_stats_of_another_user_cover_shared_groups(client_for, group, owner, member, outsider, make_movie, log_movie):
    from apps.groups.services.groups import create_group

    shared_movie = make_movie(title='Shared')
    private_movie = make_movie(title='Private')
    log_movie(group, member, shared_movie)
    ratings.save_rating(group.pk, shared_movie.pk, member, 7)
    private = create_group(member, name='Just me')
    log_movie(private, member, private_movie)
    ratings.save_rating(private.pk, private_movie.pk, member, 2, 'secret')

    data = client_for(owner).get(f'/api/v1/users/{member.pk}/stats/').json()['data']
    assert data['movies_watched'] == 1
    assert [r['movie_title'] for r in data['recent_ratings']] == ['Shared']

    own = client_for(member).get('/api/v1/users/me/stats/').json()['data']
    assert own['movies_watched'] == 2
    assert own['reviews_written'] == 1


def test_updating_a_rating_with_a_comment_counts_as_a_review(group, owner, member, movie, log_movie):
    log_movie(group, owner, movie)
    ratings.save_rating(group.pk, movie.pk, member, 8)
    assert user_stats(member)['reviews_written'] == 0

    ratings.save_rating(group.pk, movie.pk, member, 6, 'meh')

    assert user_stats(member) == {'movies_watched': 1, 'reviews_written': 1}

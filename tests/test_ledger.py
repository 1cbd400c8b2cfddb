from decimal import Decimal

import pytest
from rest_framework.exceptions import NotFound, PermissionDenied

from apps.activity.models import ActivityFeedItem
from apps.movies.models import GroupMovie, Movie, ScreeningAttendee
from apps.movies.services import ledger, ratings
from apps.movies.services.tmdb_client import TMDbError
from common.exceptions import Conflict, UpstreamUnavailable
from tests.factories import FakeTMDbClient, tmdb_payload

pytestmark = pytest.mark.django_db


def test_add_movie_logs_entry(group, member, movie):
    entry = ledger.add_movie(group.pk, member, movie.tmdb_id)

    assert entry.group == group
    assert entry.movie == movie
    assert entry.added_by == member
    assert entry.screening_type == GroupMovie.ScreeningType.IN_PERSON
    assert ActivityFeedItem.objects.filter(
        group=group, activity_type=ActivityFeedItem.Type.MOVIE_ADDED, target_movie=movie,
    ).exists()


def test_add_movie_fetches_unknown_movie(group, member):
    client = FakeTMDbClient(payloads={129: tmdb_payload(129, 'Spirited Away')})

    entry = ledger.add_movie(group.pk, member, 129, client=client)

    assert entry.movie.title == 'Spirited Away'


def test_add_movie_twice_conflicts(group, owner, member, movie):
    ledger.add_movie(group.pk, owner, movie.tmdb_id)

    with pytest.raises(Conflict):
        ledger.add_movie(group.pk, member, movie.tmdb_id)
    assert GroupMovie.objects.filter(group=group, movie=movie).count() == 1


def test_add_movie_keeps_only_member_attendees(group, owner, member, outsider, movie):
    entry = ledger.add_movie(
        group.pk, owner, movie.tmdb_id, attendees=[owner.pk, member.pk, outsider.pk],
    )

    attendee_ids = set(ScreeningAttendee.objects.filter(group_movie=entry).values_list('user_id', flat=True))
    assert attendee_ids == {owner.pk, member.pk}


def test_add_movie_without_metadata(group, member):
    client = FakeTMDbClient(error=TMDbError('down'))

    with pytest.raises(UpstreamUnavailable):
        ledger.add_movie(group.pk, member, 4242, client=client)
    assert not Movie.objects.filter(tmdb_id=4242).exists()
    assert not GroupMovie.objects.filter(group=group).exists()


def test_add_movie_requires_membership(group, outsider, movie):
    with pytest.raises(PermissionDenied):
        ledger.add_movie(group.pk, outsider, movie.tmdb_id)


def test_list_movies_sorting(group, owner, member, make_movie, log_movie):
    old_hit = make_movie(title='Old hit')
    new_flop = make_movie(title='New flop')
    unrated = make_movie(title='Unrated')
    log_movie(group, owner, old_hit, minutes_ago=30)
    log_movie(group, owner, unrated, minutes_ago=20)
    log_movie(group, owner, new_flop, minutes_ago=10)

    ratings.save_rating(group.pk, old_hit.pk, owner, 9)
    ratings.save_rating(group.pk, old_hit.pk, member, 8)
    ratings.save_rating(group.pk, new_flop.pk, owner, 3)

    recent = ledger.list_movies(group.pk, member, ledger.SORT_RECENT)
    assert [e.movie.title for e in recent] == ['New flop', 'Unrated', 'Old hit']

    top = ledger.list_movies(group.pk, member, ledger.SORT_TOP)
    assert [e.movie.title for e in top] == ['Old hit', 'New flop', 'Unrated']
    assert top[0].average_rating == Decimal('8.5')
    assert top[0].rating_count == 2
    assert top[0].user_rating.score == 8
    assert top[2].average_rating == Decimal('0')
    assert top[2].user_rating is None


def test_top_sort_keeps_recent_order_among_ties(group, owner, make_movie, log_movie):
    first = make_movie(title='First')
    second = make_movie(title='Second')
    log_movie(group, owner, first, minutes_ago=10)
    log_movie(group, owner, second, minutes_ago=5)
    ratings.save_rating(group.pk, first.pk, owner, 6)
    ratings.save_rating(group.pk, second.pk, owner, 6)

    top = ledger.list_movies(group.pk, owner, ledger.SORT_TOP)
    assert [e.movie.title for e in top] == ['Second', 'First']


def test_get_movie_detail(group, owner, member, movie):
    ledger.add_movie(group.pk, owner, movie.tmdb_id, attendees=[member.pk])
    ratings.save_rating(group.pk, movie.pk, owner, 7)
    ratings.save_rating(group.pk, movie.pk, member, 10)

    entry = ledger.get_movie_detail(group.pk, movie.pk, member)

    assert entry.average_rating == Decimal('8.5')
    assert entry.rating_count == 2
    assert entry.user_rating.score == 10
    assert {r.user for r in entry.ratings_list} == {owner, member}
    assert entry.attendee_users == [member]


def test_get_movie_detail_missing(group, member, movie):
    with pytest.raises(NotFound):
        ledger.get_movie_detail(group.pk, movie.pk, member)


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def test_add_movie_endpoint(client_for, group, member, movie):
    url = f'/api/v1/groups/{group.pk}/movies/'

    response = client_for(member).post(
        url,
        {'tmdb_id': movie.tmdb_id, 'watched_at': '2024-03-01', 'screening_type': 'remota'},
        format='json',
    )
    assert response.status_code == 201
    data = response.json()['data']
    assert data['movie']['title'] == 'Fight Club'
    assert data['screening_type'] == 'remota'
    assert data['average_rating'] == 0
    assert data['ratings'] == []

    response = client_for(member).post(url, {'tmdb_id': movie.tmdb_id}, format='json')
    assert response.status_code == 409
    assert response.json()['error']['code'] == 'conflict'


def test_add_movie_endpoint_upstream_failure(client_for, group, member, fake_tmdb):
    fake_tmdb.error = TMDbError('down')

    response = client_for(member).post(f'/api/v1/groups/{group.pk}/movies/', {'tmdb_id': 77}, format='json')

    assert response.status_code == 502
    assert response.json()['error'] == {
        'code': 'upstream_unavailable',
        'message': 'Could not find movie information.',
    }


def test_list_movies_endpoint(client_for, group, owner, movie, log_movie):
    log_movie(group, owner, movie)
    ratings.save_rating(group.pk, movie.pk, owner, 9)

    response = client_for(owner).get(f'/api/v1/groups/{group.pk}/movies/?sort=top')

    assert response.status_code == 200
    [entry] = response.json()['data']
    assert entry['average_rating'] == 9.0
    assert entry['rating_count'] == 1
    assert entry['user_rating']['score'] == 9


def test_movie_endpoints_forbidden_for_outsider(client_for, group, outsider):
    response = client_for(outsider).get(f'/api/v1/groups/{group.pk}/movies/')
    assert response.status_code == 403

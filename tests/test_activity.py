import pytest
from django.db import DatabaseError

from apps.activity.models import ActivityFeedItem
from apps.activity.services import describe, group_feed, record_activity, user_feed
from apps.groups.services.groups import create_group
from apps.movies.services import ratings, watchlist

pytestmark = pytest.mark.django_db


def test_user_feed_only_covers_own_groups(group, member, outsider):
    create_group(outsider, name='Private circle')

    items, has_more = user_feed(member)

    assert {item.group_id for item in items} == {group.pk}
    assert has_more is False


def test_feed_filters(group, owner, member, movie, make_movie, log_movie):
    log_movie(group, owner, movie)
    ratings.save_rating(group.pk, movie.pk, member, 8)
    watchlist.add(group.pk, member, make_movie().tmdb_id)

    items, _ = user_feed(member, activity_filter='ratings')
    assert [i.activity_type for i in items] == [ActivityFeedItem.Type.MOVIE_RATED]

    items, _ = group_feed(group, activity_filter='watchlist')
    assert [i.activity_type for i in items] == [ActivityFeedItem.Type.WATCHLIST_ADDED]

    items, _ = group_feed(group, activity_filter='comments')
    assert items == []


def test_feed_pagination(group, owner):
    for _ in range(3):
        record_activity(group, owner, ActivityFeedItem.Type.COMMENT_ADDED)

    items, has_more = group_feed(group, limit=2)
    assert len(items) == 2
    assert has_more is True

    # 3 comments plus the group creation entry
    items, has_more = group_feed(group, limit=2, offset=2)
    assert len(items) == 2
    assert has_more is False


def test_record_activity_swallows_database_errors(monkeypatch, group, owner):
    def boom(**kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(ActivityFeedItem.objects, 'create', boom)

    assert record_activity(group, owner, ActivityFeedItem.Type.MEMBER_JOINED) is None


def test_describe(group, member, movie, log_movie):
    log_movie(group, member, movie)
    ratings.save_rating(group.pk, movie.pk, member, 9)
    item = ActivityFeedItem.objects.get(activity_type=ActivityFeedItem.Type.MOVIE_RATED)

    assert describe(item) == 'Marco rated "Fight Club" 9/10 in Cineclub'


def test_activity_endpoint(client_for, group, member):
    response = client_for(member).get('/api/v1/activities/?limit=1000')

    assert response.status_code == 200
    body = response.json()
    assert body['has_more'] is False
    [item] = body['data']
    assert item['activity_type'] == 'group_created'
    assert item['group_name'] == 'Cineclub'
    assert item['message'] == 'Olivia created the circle Cineclub'


@pytest.mark.parametrize('query', ['limit=0', 'limit=abc', 'offset=-1'])
def test_activity_endpoint_rejects_bad_paging(client_for, member, query):
    response = client_for(member).get(f'/api/v1/activities/?{query}')

    assert response.status_code == 400
    assert response.json()['error']['code'] == 'validation_error'


def test_group_activity_endpoint_requires_membership(client_for, group, outsider):
    response = client_for(outsider).get(f'/api/v1/groups/{group.pk}/activities/')
    assert response.status_code == 403

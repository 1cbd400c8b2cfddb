"""
Recording and reading the group activity feed.
"""
import logging

from django.db import DatabaseError, transaction

from apps.activity.models import ActivityFeedItem

logger = logging.getLogger(__name__)

Type = ActivityFeedItem.Type

FILTER_TYPES = {
    'all': None,
    'ratings': [Type.MOVIE_RATED, Type.RATING_UPDATED],
    'watchlist': [Type.WATCHLIST_ADDED, Type.MOVIE_ADDED],
    'comments': [Type.COMMENT_ADDED],
}


def record_activity(group, user, activity_type, target_movie=None, target_user=None, metadata=None):
    """
    Append an entry to the group's feed.

    Never raises: the action being logged has already happened, so a
    failure here is logged and ``None`` is returned instead.
    """
    try:
        # Savepoint so a failed insert does not poison an outer transaction
        with transaction.atomic():
            return ActivityFeedItem.objects.create(
                group=group,
                user=user,
                activity_type=activity_type,
                target_movie=target_movie,
                target_user=target_user,
                metadata=metadata or None,
            )
    except DatabaseError:
        logger.exception(
            'Error recording %s activity for group %s',
            activity_type,
            getattr(group, 'pk', group),
        )
        return None


def _paginate(queryset, activity_filter, limit, offset):
    types = FILTER_TYPES.get(activity_filter)
    if types:
        queryset = queryset.filter(activity_type__in=types)

    queryset = queryset.select_related('user', 'group', 'target_movie', 'target_user')
    # Fetch one extra row to know whether another page exists
    rows = list(queryset[offset:offset + limit + 1])
    return rows[:limit], len(rows) > limit


def user_feed(user, activity_filter='all', limit=20, offset=0):
    """Activity across every group *user* belongs to, newest first."""
    queryset = ActivityFeedItem.objects.visible_to(user).order_by('-created_at')
    return _paginate(queryset, activity_filter, limit, offset)


def group_feed(group, activity_filter='all', limit=20, offset=0):
    queryset = ActivityFeedItem.objects.filter(group=group).order_by('-created_at')
    return _paginate(queryset, activity_filter, limit, offset)


def describe(item):
    """One-line, human-readable description of a feed entry."""
    metadata = item.metadata or {}
    actor = metadata.get('user_name') or item.user.public_name
    movie = item.target_movie.title if item.target_movie else 'a movie'
    group = item.group.name

    if item.activity_type == Type.GROUP_CREATED:
        return f'{actor} created the circle {group}'
    if item.activity_type == Type.MOVIE_RATED:
        return f'{actor} rated "{movie}" {metadata.get("score")}/10 in {group}'
    if item.activity_type == Type.RATING_UPDATED:
        return f'{actor} changed their rating of "{movie}" to {metadata.get("score")}/10 in {group}'
    if item.activity_type == Type.MOVIE_ADDED:
        return f'{actor} logged "{movie}" as watched in {group}'
    if item.activity_type == Type.WATCHLIST_ADDED:
        return f'{actor} added "{movie}" to the {group} watchlist'
    if item.activity_type == Type.COMMENT_ADDED:
        return f'{actor} commented on "{movie}" in {group}'
    if item.activity_type == Type.MEMBER_JOINED:
        return f'{actor} joined {group}'
    if item.activity_type == Type.MEMBER_LEFT:
        return f'{actor} left {group}'
    return f'{actor} did something in {group}'

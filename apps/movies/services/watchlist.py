"""
Shared group watchlists.
"""
import logging

from django.conf import settings
from rest_framework.exceptions import NotFound, PermissionDenied

from apps.activity.models import ActivityFeedItem
from apps.activity.services import record_activity
from apps.groups.models import Membership
from apps.groups.services.membership import require_member
from apps.movies.models import GroupMovie, Movie, WatchlistItem
from apps.movies.services import catalog
from common.exceptions import Conflict

logger = logging.getLogger(__name__)


def _allow_duplicates():
    return getattr(settings, 'MOVIENIGHT_WATCHLIST_ALLOW_DUPLICATES', True)


def add(group_id, user, tmdb_id, reason=None, priority=0, client=None):
    """
    Propose a movie for the group to watch.

    Raises
    ------
    Conflict
        If the group already watched the movie, or if duplicates are
        disabled and the movie is already on the watchlist.
    """
    membership = require_member(group_id, user)
    group = membership.group
    movie = catalog.resolve_or_raise(tmdb_id, client=client)

    if GroupMovie.objects.filter(group=group, movie=movie).exists():
        raise Conflict('This group has already watched this movie.')
    if not _allow_duplicates() and WatchlistItem.objects.filter(group=group, movie=movie).exists():
        raise Conflict("This movie is already on the group's watchlist.")

    item = WatchlistItem.objects.create(
        group=group,
        movie=movie,
        added_by=user,
        reason=(reason or '').strip() or None,
        priority=priority or 0,
    )
    record_activity(group, user, ActivityFeedItem.Type.WATCHLIST_ADDED, target_movie=movie)
    logger.info('Movie %s proposed in group %s by %s', movie.tmdb_id, group.pk, user.pk)
    return item


def list_items(group_id, user):
    """Watchlist of the group, highest priority first, then newest first."""
    require_member(group_id, user)
    return list(
        WatchlistItem.objects.visible_to(user)
        .filter(group_id=group_id)
        .select_related('movie', 'added_by')
        .order_by('-priority', '-created_at')
    )


def remove(item_id, user):
    """Delete a watchlist item. Allowed to whoever added it and to the group owner."""
    item = WatchlistItem.objects.filter(pk=item_id).first()
    if item is None:
        raise NotFound('Watchlist item not found.')

    membership = require_member(item.group_id, user)
    if not membership.is_owner and item.added_by_id != user.pk:
        raise PermissionDenied('Only the group owner or whoever added the movie can remove it.')

    item.delete()
    logger.info('Watchlist item %s removed by %s', item_id, user.pk)


def groups_with_movie(user, tmdb_id):
    """Ids of the caller's groups whose watchlist contains *tmdb_id*."""
    movie = Movie.objects.filter(tmdb_id=tmdb_id).first()
    if movie is None:
        return []
    group_ids = Membership.objects.filter(user=user).values_list('group_id', flat=True)
    return list(
        WatchlistItem.objects.filter(movie=movie, group_id__in=group_ids)
        .values_list('group_id', flat=True)
        .distinct()
    )

"""
The group's movie ledger: which films a group has watched together.
"""
import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from apps.activity.models import ActivityFeedItem
from apps.activity.services import record_activity
from apps.groups.models import Membership
from apps.groups.services.membership import require_member
from apps.movies.models import GroupMovie, Rating, ScreeningAttendee
from apps.movies.services import catalog
from apps.movies.services.ratings import aggregate_many, round_average
from common.exceptions import Conflict

logger = logging.getLogger(__name__)

SORT_RECENT = 'recent'
SORT_TOP = 'top'
ALREADY_IN_GROUP_MESSAGE = 'This movie is already in this group.'


def add_movie(group_id, user, tmdb_id, watched_at=None, attendees=None,
              screening_type=GroupMovie.ScreeningType.IN_PERSON, client=None):
    """
    Log a watched movie for the group.

    Parameters
    ----------
    group_id : UUID
        Group to add the movie to. The caller must be a member.
    tmdb_id : int
        TMDb id of the movie; resolved through the catalog cache.
    attendees : list, optional
        User ids who attended. Ids that are not current members are dropped.

    Returns
    -------
    GroupMovie

    Raises
    ------
    UpstreamUnavailable
        If the movie metadata cannot be obtained.
    Conflict
        If the movie is already on the group's ledger.
    """
    membership = require_member(group_id, user)
    group = membership.group
    movie = catalog.resolve_or_raise(tmdb_id, client=client)

    if GroupMovie.objects.filter(group=group, movie=movie).exists():
        raise Conflict(ALREADY_IN_GROUP_MESSAGE)

    try:
        with transaction.atomic():
            entry = GroupMovie.objects.create(
                group=group,
                movie=movie,
                added_by=user,
                watched_at=watched_at or None,
                screening_type=screening_type or GroupMovie.ScreeningType.IN_PERSON,
            )
            if attendees:
                member_ids = Membership.objects.filter(
                    group=group, user_id__in=list(attendees),
                ).values_list('user_id', flat=True)
                ScreeningAttendee.objects.bulk_create(
                    [ScreeningAttendee(group_movie=entry, user_id=uid) for uid in set(member_ids)],
                    ignore_conflicts=True,
                )
    except IntegrityError:
        # Lost a race against another request adding the same movie
        raise Conflict(ALREADY_IN_GROUP_MESSAGE)

    record_activity(group, user, ActivityFeedItem.Type.MOVIE_ADDED, target_movie=movie)
    logger.info('Movie %s added to group %s by %s', movie.tmdb_id, group.pk, user.pk)
    return entry


def list_movies(group_id, user, sort_by=SORT_RECENT):
    """
    Ledger entries for the group, each carrying ``average_rating``,
    ``rating_count`` and ``user_rating``.

    ``recent`` orders by when the movie was logged, newest first. ``top``
    orders by average rating, keeping the recent order among ties.
    """
    require_member(group_id, user)
    entries = list(
        GroupMovie.objects.visible_to(user)
        .filter(group_id=group_id)
        .select_related('movie', 'added_by')
        .order_by('-created_at')
    )
    summaries = aggregate_many(group_id, [e.movie_id for e in entries], user)
    for entry in entries:
        summary = summaries[entry.movie_id]
        entry.average_rating = summary['average']
        entry.rating_count = summary['count']
        entry.user_rating = summary['mine']

    if sort_by == SORT_TOP:
        # sort() is stable, so ties keep the recent order
        entries.sort(key=lambda e: e.average_rating, reverse=True)
    return entries


def get_movie_detail(group_id, movie_id, user):
    """The ledger entry with its ratings (newest first), aggregate and attendees."""
    require_member(group_id, user)
    entry = (
        GroupMovie.objects.visible_to(user)
        .filter(group_id=group_id, movie_id=movie_id)
        .select_related('movie', 'added_by')
        .first()
    )
    if entry is None:
        raise NotFound('Movie not found in this group.')

    ratings = list(
        Rating.objects.filter(group_id=group_id, movie_id=movie_id)
        .select_related('user')
        .order_by('-created_at')
    )
    entry.ratings_list = ratings
    entry.average_rating = round_average(sum(r.score for r in ratings), len(ratings))
    entry.rating_count = len(ratings)
    entry.user_rating = next((r for r in ratings if r.user_id == user.pk), None)
    entry.attendee_users = [a.user for a in entry.attendees.select_related('user')]
    return entry

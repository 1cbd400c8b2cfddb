"""
Rating aggregation and the rating upsert.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from apps.activity.models import ActivityFeedItem
from apps.activity.services import record_activity
from apps.groups.services.membership import require_member
from apps.movies.models import GroupMovie, Rating

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10
MAX_COMMENT_LENGTH = 1000


def round_average(total, count):
    """Mean of *count* scores summing to *total*, half-up to one decimal."""
    if not count:
        return Decimal('0')
    return (Decimal(total) / Decimal(count)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)


def _summarize(ratings, user=None):
    scores = [r.score for r in ratings]
    mine = None
    if user is not None:
        mine = next((r for r in ratings if r.user_id == user.pk), None)
    return {
        'average': round_average(sum(scores), len(scores)),
        'count': len(scores),
        'mine': mine,
    }


def aggregate(group_id, movie_id, user=None):
    """
    Summarize the ratings for one movie within one group.

    Returns
    -------
    dict
        ``average`` (Decimal, ``0`` when there are no ratings), ``count``
        and ``mine`` (the caller's Rating or ``None``).
    """
    ratings = list(Rating.objects.filter(group_id=group_id, movie_id=movie_id))
    return _summarize(ratings, user)


def aggregate_many(group_id, movie_ids, user=None):
    """Same as :func:`aggregate` for several movies, using one query."""
    by_movie = {movie_id: [] for movie_id in movie_ids}
    for rating in Rating.objects.filter(group_id=group_id, movie_id__in=list(by_movie)):
        by_movie.setdefault(rating.movie_id, []).append(rating)
    return {movie_id: _summarize(ratings, user) for movie_id, ratings in by_movie.items()}


def clean_score(score):
    # bool is an int subclass; reject it explicitly
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError({'score': ['The score must be a whole number between 1 and 10.']})
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError({'score': ['The score must be a whole number between 1 and 10.']})
    return score


def clean_comment(comment):
    if comment is None:
        return None
    if not isinstance(comment, str):
        raise ValidationError({'comment': ['The comment must be text.']})
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValidationError({'comment': [f'The comment cannot exceed {MAX_COMMENT_LENGTH} characters.']})
    return comment.strip() or None


def _ledger_entry(group_id, movie_id):
    entry = GroupMovie.objects.filter(group_id=group_id, movie_id=movie_id).select_related('movie').first()
    if entry is None:
        raise NotFound('Movie not found in this group.')
    return entry


def list_ratings(group_id, movie_id, user):
    """Every rating for the movie in the group, newest first, plus the aggregate."""
    require_member(group_id, user)
    ratings = list(
        Rating.objects.visible_to(user)
        .filter(group_id=group_id, movie_id=movie_id)
        .select_related('user')
        .order_by('-created_at')
    )
    summary = _summarize(ratings, user)
    summary['ratings'] = ratings
    return summary


def save_rating(group_id, movie_id, user, score, comment=None):
    """
    Create or update the caller's rating for a movie on the group's ledger.

    Returns
    -------
    tuple
        ``(rating, created)``.

    Raises
    ------
    ValidationError
        If the score or comment is out of bounds.
    NotFound
        If the movie is not on the group's ledger.
    """
    membership = require_member(group_id, user)
    score = clean_score(score)
    comment = clean_comment(comment)
    entry = _ledger_entry(group_id, movie_id)

    with transaction.atomic():
        rating, created = Rating.objects.update_or_create(
            group_id=group_id,
            movie_id=movie_id,
            user=user,
            defaults={'score': score, 'comment': comment},
        )

    record_activity(
        membership.group,
        user,
        ActivityFeedItem.Type.MOVIE_RATED if created else ActivityFeedItem.Type.RATING_UPDATED,
        target_movie=entry.movie,
        metadata={'score': score, 'comment': comment},
    )
    return rating, created


def delete_rating(group_id, movie_id, user):
    """Delete the caller's own rating. Other members' rows are never touched."""
    require_member(group_id, user)
    deleted, _ = Rating.objects.filter(group_id=group_id, movie_id=movie_id, user=user).delete()
    if not deleted:
        raise NotFound('You have not rated this movie.')
    logger.info('User %s deleted their rating of %s in group %s', user.pk, movie_id, group_id)

"""
Profile statistics derived from a user's ratings.
"""
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal

from apps.movies.models import Rating


def _ratings_for(user, viewer=None):
    """
    Ratings by *user*, narrowed to groups *viewer* belongs to when someone
    else is looking at the profile.
    """
    qs = Rating.objects.filter(user=user)
    if viewer is not None and viewer.pk != user.pk:
        qs = qs.visible_to(viewer)
    return qs


def user_stats(user, viewer=None):
    """
    Counts shown on a profile.

    ``movies_watched`` counts distinct movies the user rated in any group
    visible to *viewer*;
    ``reviews_written`` counts ratings whose comment is not blank.
    """
    ratings = _ratings_for(user, viewer).values_list('movie_id', 'comment')
    movie_ids = set()
    reviews = 0
    for movie_id, comment in ratings:
        movie_ids.add(movie_id)
        if comment and comment.strip():
            reviews += 1
    return {'movies_watched': len(movie_ids), 'reviews_written': reviews}


def top_genres(user, limit=5, viewer=None):
    """
    Most frequent genres across every movie the user rated.

    Each rating contributes one tally per genre of its movie. Returns a
    list of ``{'name', 'count', 'percentage'}`` sorted by count, where
    ``percentage`` is the share of all tallies rounded half-up.
    """
    counts = Counter()
    for genres in _ratings_for(user, viewer).values_list('movie__genres', flat=True):
        for genre in genres or []:
            counts[genre] += 1

    total = sum(counts.values())
    if total == 0:
        return []

    # Counter keeps first-seen order, so ties stay in that order
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)[:limit]
    return [
        {
            'name': name,
            'count': count,
            'percentage': int(
                (Decimal(count) * 100 / Decimal(total)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
            ),
        }
        for name, count in ranked
    ]


def recent_ratings(user, limit=5, viewer=None):
    return list(
        _ratings_for(user, viewer)
        .select_related('movie', 'group')
        .order_by('-created_at')[:limit]
    )

"""
Personal favorite movies.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from rest_framework.exceptions import NotFound

from apps.movies.models import FavoriteMovie
from apps.movies.services import catalog
from common.exceptions import Conflict

logger = logging.getLogger(__name__)

SORT_ORDERINGS = {
    'recent': ['-created_at'],
    'year': [F('movie__year').desc(nulls_last=True), '-created_at'],
    'title': ['movie__title', '-created_at'],
}


def add_favorite(user, tmdb_id, client=None):
    movie = catalog.resolve_or_raise(tmdb_id, client=client)
    try:
        with transaction.atomic():
            return FavoriteMovie.objects.create(user=user, movie=movie)
    except IntegrityError:
        raise Conflict('This movie is already in your favorites.')


def remove_favorite(user, movie_id):
    deleted, _ = FavoriteMovie.objects.filter(user=user, movie_id=movie_id).delete()
    if not deleted:
        raise NotFound('This movie is not in your favorites.')


def list_favorites(user, sort_by='recent', limit=20, offset=0):
    """
    Page through the user's favorites.

    Returns
    -------
    tuple
        ``(items, total, has_more)``.
    """
    queryset = FavoriteMovie.objects.filter(user=user).select_related('movie')
    total = queryset.count()
    ordering = SORT_ORDERINGS.get(sort_by, SORT_ORDERINGS['recent'])
    items = list(queryset.order_by(*ordering)[offset:offset + limit])
    return items, total, offset + limit < total


def is_favorite(user, tmdb_id):
    return FavoriteMovie.objects.filter(user=user, movie__tmdb_id=tmdb_id).exists()

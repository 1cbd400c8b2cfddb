"""
Catalog cache-aside: return the local ``Movie`` row for a TMDb id,
fetching and storing it on first use.
"""
import logging

from django.db import IntegrityError, transaction

from apps.movies.models import Movie
from apps.movies.services.tmdb_client import TMDbClient, TMDbError, map_movie_details
from common.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)

MOVIE_UNAVAILABLE_MESSAGE = 'Could not find movie information.'


def resolve(tmdb_id, client=None):
    """
    Return the stored Movie for *tmdb_id*, or ``None`` if it cannot be had.

    A hit returns the stored row unchanged. A miss fetches details from
    TMDb and persists them; a provider failure persists nothing.
    """
    movie = Movie.objects.filter(tmdb_id=tmdb_id).first()
    if movie is not None:
        return movie

    logger.info('Catalog miss for TMDb id %s', tmdb_id)
    client = client or TMDbClient()
    try:
        payload = client.get_movie_details(tmdb_id)
    except TMDbError as exc:
        logger.warning('Could not fetch TMDb movie %s: %s', tmdb_id, exc)
        return None

    fields = map_movie_details(payload)
    if fields is None:
        logger.warning('TMDb returned an unusable payload for movie %s', tmdb_id)
        return None

    fields['tmdb_id'] = int(tmdb_id)
    try:
        with transaction.atomic():
            movie, _ = Movie.objects.get_or_create(tmdb_id=fields.pop('tmdb_id'), defaults=fields)
    except IntegrityError:
        # A concurrent request stored the same movie first
        movie = Movie.objects.get(tmdb_id=tmdb_id)
    return movie


def resolve_or_raise(tmdb_id, client=None):
    movie = resolve(tmdb_id, client=client)
    if movie is None:
        raise UpstreamUnavailable(MOVIE_UNAVAILABLE_MESSAGE)
    return movie

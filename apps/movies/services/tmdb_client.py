"""
Client for The Movie Database (TMDb) v3 REST API.

Search and popular listings are cached with the Django cache framework.
Movie details are not: the ``Movie`` table is their cache.
"""
import logging

import requests
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.themoviedb.org/3'
LIST_CACHE_PREFIX = 'tmdb'


class TMDbError(Exception):
    """The provider could not be reached or answered with an error."""


class TMDbNotFound(TMDbError):
    """The provider has no movie with the requested id."""


def empty_page():
    return {'page': 1, 'results': [], 'total_pages': 0, 'total_results': 0}


class TMDbClient:
    """
    Thin wrapper around the TMDb endpoints the app consumes.

    Configuration comes from ``TMDB_API_KEY``, ``TMDB_BASE_URL``,
    ``TMDB_LANGUAGE``, ``TMDB_TIMEOUT`` and ``TMDB_CACHE_TTL``.
    """

    def __init__(self, api_key=None, base_url=None, language=None, timeout=None, session=None):
        self.api_key = api_key if api_key is not None else getattr(settings, 'TMDB_API_KEY', '')
        self.base_url = (base_url or getattr(settings, 'TMDB_BASE_URL', DEFAULT_BASE_URL)).rstrip('/')
        self.language = language or getattr(settings, 'TMDB_LANGUAGE', 'es-AR')
        self.timeout = timeout or getattr(settings, 'TMDB_TIMEOUT', 10)
        self.cache_ttl = getattr(settings, 'TMDB_CACHE_TTL', 3600)
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_movie_details(self, tmdb_id):
        """
        Fetch full details for one movie, including credits and videos.

        Raises
        ------
        TMDbNotFound
            If TMDb has no movie with this id.
        TMDbError
            On any other transport or HTTP failure.
        """
        return self._get(f'/movie/{int(tmdb_id)}', {'append_to_response': 'credits,videos'})

    def search_movies(self, query, page=1):
        query = (query or '').strip()
        if not query:
            return empty_page()

        params = {'query': query, 'page': str(page), 'include_adult': 'false'}
        return self._cached('search', f'{query.lower()}:{page}', '/search/movie', params)

    def get_popular_movies(self, page=1):
        return self._cached('popular', str(page), '/movie/popular', {'page': str(page)})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _cached(self, kind, key, endpoint, params):
        cache_key = f'{LIST_CACHE_PREFIX}:{kind}:{self.language}:{key}'
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        data = self._get(endpoint, params)
        cache.set(cache_key, data, self.cache_ttl)
        return data

    def _get(self, endpoint, params=None):
        if not self.api_key:
            raise TMDbError('TMDB_API_KEY is not configured.')

        query = {'api_key': self.api_key, 'language': self.language}
        query.update(params or {})
        url = f'{self.base_url}{endpoint}'

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error('TMDb request to %s failed: %s', endpoint, exc)
            raise TMDbError(f'Unable to reach TMDb: {exc}') from exc

        if response.status_code == 404:
            raise TMDbNotFound(f'TMDb has no resource at {endpoint}.')
        if not response.ok:
            logger.error('TMDb API error for %s: %s', endpoint, response.status_code)
            raise TMDbError(f'TMDb API error: {response.status_code}')

        try:
            return response.json()
        except ValueError as exc:
            raise TMDbError('TMDb returned a non-JSON response.') from exc


def extract_director(credits):
    """Name of the first crew member credited as Director, or ``None``."""
    for member in (credits or {}).get('crew') or []:
        if member.get('job') == 'Director':
            return member.get('name') or None
    return None


def map_movie_details(payload):
    """
    Turn a TMDb details payload into ``Movie`` field values.

    Returns ``None`` when the payload lacks an id or a title.
    """
    if not isinstance(payload, dict) or not payload.get('id') or not payload.get('title'):
        return None

    release_date = payload.get('release_date') or ''
    year = int(release_date[:4]) if release_date[:4].isdigit() else None

    return {
        'tmdb_id': int(payload['id']),
        'title': payload['title'],
        'year': year,
        'poster_path': payload.get('poster_path'),
        'backdrop_path': payload.get('backdrop_path'),
        'runtime': payload.get('runtime') or None,
        'overview': payload.get('overview') or None,
        'director': extract_director(payload.get('credits')),
        'genres': [g['name'] for g in payload.get('genres') or [] if g.get('name')],
        'metadata': payload,
    }

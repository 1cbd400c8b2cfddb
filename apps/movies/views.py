"""
Views for the Movies app.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.groups.permissions import IsGroupMember
from apps.movies.serializers import (
    AddFavoriteSerializer,
    AddGroupMovieSerializer,
    AddWatchlistItemSerializer,
    FavoriteMovieSerializer,
    GroupMovieDetailSerializer,
    GroupMovieSerializer,
    RatingSerializer,
    RatingWriteSerializer,
    SpinSerializer,
    WatchlistItemSerializer,
)
from apps.movies.services import favorites, ledger, ratings, roulette, watchlist
from apps.movies.services.tmdb_client import TMDbClient, TMDbError
from common.exceptions import UpstreamUnavailable
from common.query_params import choice_param, int_param

logger = logging.getLogger(__name__)

MAX_TMDB_PAGE = 500


def _tmdb_id_param(request):
    tmdb_id = int_param(request, 'tmdb_id', None, minimum=1)
    if tmdb_id is None:
        raise ValidationError({'tmdb_id': ['This parameter is required.']})
    return tmdb_id


# ---------------------------------------------------------------------------
# Catalog browsing
# ---------------------------------------------------------------------------

class MovieSearchView(APIView):
    """
    Search TMDb by title.

    GET /api/v1/movies/search/?q=<query>&page=<n>
    """
    permission_classes = [IsAuthenticated]
    throttle_scope = 'tmdb'

    def get(self, request):
        query = request.query_params.get('q', '')
        page = int_param(request, 'page', 1, minimum=1, maximum=MAX_TMDB_PAGE)
        try:
            data = TMDbClient().search_movies(query, page)
        except TMDbError:
            raise UpstreamUnavailable('Could not search movies right now.')
        return Response({'success': True, 'data': data})


class PopularMoviesView(APIView):
    """
    Popular movies from TMDb.

    GET /api/v1/movies/popular/?page=<n>
    """
    permission_classes = [IsAuthenticated]
    throttle_scope = 'tmdb'

    def get(self, request):
        page = int_param(request, 'page', 1, minimum=1, maximum=MAX_TMDB_PAGE)
        try:
            data = TMDbClient().get_popular_movies(page)
        except TMDbError:
            raise UpstreamUnavailable('Could not load popular movies right now.')
        return Response({'success': True, 'data': data})


# ---------------------------------------------------------------------------
# Group ledger and ratings
# ---------------------------------------------------------------------------

class GroupMovieListView(APIView):
    """
    GET  /api/v1/groups/{group_pk}/movies/?sort=recent|top
    POST /api/v1/groups/{group_pk}/movies/
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def get(self, request, group_pk):
        sort_by = choice_param(request, 'sort', (ledger.SORT_RECENT, ledger.SORT_TOP), ledger.SORT_RECENT)
        entries = ledger.list_movies(group_pk, request.user, sort_by)
        return Response({'success': True, 'data': GroupMovieSerializer(entries, many=True).data})

    def post(self, request, group_pk):
        serializer = AddGroupMovieSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = ledger.add_movie(group_pk, request.user, **serializer.validated_data)
        entry = ledger.get_movie_detail(group_pk, entry.movie_id, request.user)
        return Response(
            {'success': True, 'data': GroupMovieDetailSerializer(entry).data},
            status=status.HTTP_201_CREATED,
        )


class GroupMovieDetailView(APIView):
    """
    GET /api/v1/groups/{group_pk}/movies/{movie_id}/
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def get(self, request, group_pk, movie_id):
        entry = ledger.get_movie_detail(group_pk, movie_id, request.user)
        return Response({'success': True, 'data': GroupMovieDetailSerializer(entry).data})


class MovieRatingView(APIView):
    """
    GET    /api/v1/groups/{group_pk}/movies/{movie_id}/ratings/
    POST   /api/v1/groups/{group_pk}/movies/{movie_id}/ratings/
    DELETE /api/v1/groups/{group_pk}/movies/{movie_id}/ratings/
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def get(self, request, group_pk, movie_id):
        summary = ratings.list_ratings(group_pk, movie_id, request.user)
        return Response({
            'success': True,
            'data': {
                'ratings': RatingSerializer(summary['ratings'], many=True).data,
                'average': float(summary['average']),
                'count': summary['count'],
                'user_rating': RatingSerializer(summary['mine']).data if summary['mine'] else None,
            },
        })

    def post(self, request, group_pk, movie_id):
        serializer = RatingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rating, created = ratings.save_rating(
            group_pk,
            movie_id,
            request.user,
            serializer.validated_data['score'],
            serializer.validated_data.get('comment'),
        )
        return Response(
            {
                'success': True,
                'data': RatingSerializer(rating).data,
                'is_update': not created,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def delete(self, request, group_pk, movie_id):
        ratings.delete_rating(group_pk, movie_id, request.user)
        return Response({'success': True, 'message': 'Rating deleted.'})


# ---------------------------------------------------------------------------
# Watchlist
# ---------------------------------------------------------------------------

class WatchlistView(APIView):
    """
    GET  /api/v1/groups/{group_pk}/watchlist/
    POST /api/v1/groups/{group_pk}/watchlist/
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def get(self, request, group_pk):
        items = watchlist.list_items(group_pk, request.user)
        return Response({'success': True, 'data': WatchlistItemSerializer(items, many=True).data})

    def post(self, request, group_pk):
        serializer = AddWatchlistItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = watchlist.add(group_pk, request.user, **serializer.validated_data)
        return Response(
            {'success': True, 'data': WatchlistItemSerializer(item).data},
            status=status.HTTP_201_CREATED,
        )


class WatchlistSpinView(APIView):
    """
    Pick a random movie from the group's watchlist.

    POST /api/v1/groups/{group_pk}/watchlist/spin/
    Body: {"seed": 42, "exclude_item_id": "..."}  (both optional)
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def post(self, request, group_pk):
        serializer = SpinSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = watchlist.list_items(group_pk, request.user)
        if not items:
            raise ValidationError({'watchlist': ['The watchlist is empty.']})

        exclude = None
        exclude_id = serializer.validated_data.get('exclude_item_id')
        if exclude_id is not None:
            exclude = next((i for i, item in enumerate(items) if item.pk == exclude_id), None)

        item = roulette.spin(items, seed=serializer.validated_data.get('seed'), exclude=exclude)
        return Response({'success': True, 'data': WatchlistItemSerializer(item).data})


class WatchlistItemView(APIView):
    """
    DELETE /api/v1/watchlist/{item_id}/
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, item_id):
        watchlist.remove(item_id, request.user)
        return Response({'success': True, 'message': 'Removed from the watchlist.'})


class WatchlistCheckView(APIView):
    """
    Which of the caller's groups have a movie on their watchlist.

    GET /api/v1/watchlist/check/?tmdb_id=<id>
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        group_ids = watchlist.groups_with_movie(request.user, _tmdb_id_param(request))
        return Response({'success': True, 'data': {'group_ids': group_ids}})


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

class FavoriteListView(APIView):
    """
    GET  /api/v1/favorites/?sort=recent|year|title&limit=&offset=
    POST /api/v1/favorites/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        sort_by = choice_param(request, 'sort', tuple(favorites.SORT_ORDERINGS), 'recent')
        limit = int_param(request, 'limit', 20, minimum=1, maximum=100)
        offset = int_param(request, 'offset', 0, minimum=0)
        items, total, has_more = favorites.list_favorites(request.user, sort_by, limit, offset)
        return Response({
            'success': True,
            'data': FavoriteMovieSerializer(items, many=True).data,
            'total': total,
            'has_more': has_more,
        })

    def post(self, request):
        serializer = AddFavoriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        favorite = favorites.add_favorite(request.user, serializer.validated_data['tmdb_id'])
        return Response(
            {'success': True, 'data': FavoriteMovieSerializer(favorite).data},
            status=status.HTTP_201_CREATED,
        )


class FavoriteDetailView(APIView):
    """
    DELETE /api/v1/favorites/{movie_id}/
    """
    permission_classes = [IsAuthenticated]

    def delete(self, request, movie_id):
        favorites.remove_favorite(request.user, movie_id)
        return Response({'success': True, 'message': 'Removed from favorites.'})


class FavoriteCheckView(APIView):
    """
    GET /api/v1/favorites/check/?tmdb_id=<id>
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        is_favorite = favorites.is_favorite(request.user, _tmdb_id_param(request))
        return Response({'success': True, 'data': {'is_favorite': is_favorite}})

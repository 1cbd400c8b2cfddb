"""
URL configuration for the Movies app.
"""
from django.urls import path

from apps.movies.views import (
    FavoriteCheckView,
    FavoriteDetailView,
    FavoriteListView,
    GroupMovieDetailView,
    GroupMovieListView,
    MovieRatingView,
    MovieSearchView,
    PopularMoviesView,
    WatchlistCheckView,
    WatchlistItemView,
    WatchlistSpinView,
    WatchlistView,
)

app_name = 'movies'

urlpatterns = [
    # Catalog
    path('movies/search/', MovieSearchView.as_view(), name='movie-search'),
    path('movies/popular/', PopularMoviesView.as_view(), name='movie-popular'),

    # Group ledger
    path(
        'groups/<uuid:group_pk>/movies/',
        GroupMovieListView.as_view(),
        name='group-movie-list',
    ),
    path(
        'groups/<uuid:group_pk>/movies/<uuid:movie_id>/',
        GroupMovieDetailView.as_view(),
        name='group-movie-detail',
    ),
    path(
        'groups/<uuid:group_pk>/movies/<uuid:movie_id>/ratings/',
        MovieRatingView.as_view(),
        name='group-movie-ratings',
    ),

    # Watchlist
    path(
        'groups/<uuid:group_pk>/watchlist/',
        WatchlistView.as_view(),
        name='group-watchlist',
    ),
    path(
        'groups/<uuid:group_pk>/watchlist/spin/',
        WatchlistSpinView.as_view(),
        name='group-watchlist-spin',
    ),
    path('watchlist/check/', WatchlistCheckView.as_view(), name='watchlist-check'),
    path('watchlist/<uuid:item_id>/', WatchlistItemView.as_view(), name='watchlist-item'),

    # Favorites
    path('favorites/', FavoriteListView.as_view(), name='favorite-list'),
    path('favorites/check/', FavoriteCheckView.as_view(), name='favorite-check'),
    path('favorites/<uuid:movie_id>/', FavoriteDetailView.as_view(), name='favorite-detail'),
]

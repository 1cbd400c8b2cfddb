"""
Admin configuration for the Movies app.
"""
from django.contrib import admin

from apps.movies.models import FavoriteMovie, GroupMovie, Movie, Rating, ScreeningAttendee, WatchlistItem


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ['title', 'year', 'tmdb_id', 'director', 'created_at']
    search_fields = ['title', 'director', 'tmdb_id']
    readonly_fields = ['metadata', 'created_at', 'updated_at']


class ScreeningAttendeeInline(admin.TabularInline):
    model = ScreeningAttendee
    extra = 0


@admin.register(GroupMovie)
class GroupMovieAdmin(admin.ModelAdmin):
    list_display = ['movie', 'group', 'added_by', 'watched_at', 'screening_type', 'created_at']
    list_filter = ['screening_type', 'created_at']
    search_fields = ['movie__title', 'group__name']
    inlines = [ScreeningAttendeeInline]


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['user', 'movie', 'group', 'score', 'created_at']
    list_filter = ['score', 'created_at']
    search_fields = ['user__email', 'movie__title', 'group__name']


@admin.register(WatchlistItem)
class WatchlistItemAdmin(admin.ModelAdmin):
    list_display = ['movie', 'group', 'added_by', 'priority', 'created_at']
    search_fields = ['movie__title', 'group__name']


@admin.register(FavoriteMovie)
class FavoriteMovieAdmin(admin.ModelAdmin):
    list_display = ['user', 'movie', 'created_at']
    search_fields = ['user__email', 'movie__title']

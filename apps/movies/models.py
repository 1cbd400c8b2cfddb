"""
Models for the Movies app.
"""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from common.models import GroupScopedQuerySet, TimestampedModel


class Movie(TimestampedModel):
    """
    Local copy of a film's metadata, keyed by its TMDb id.

    Rows are written once by the catalog cache and never expire.
    """
    tmdb_id = models.PositiveIntegerField(unique=True)
    title = models.CharField(max_length=255)
    year = models.PositiveSmallIntegerField(null=True, blank=True)
    poster_path = models.CharField(max_length=255, blank=True, null=True)
    backdrop_path = models.CharField(max_length=255, blank=True, null=True)
    runtime = models.PositiveSmallIntegerField(null=True, blank=True)
    overview = models.TextField(blank=True, null=True)
    director = models.CharField(max_length=255, blank=True, null=True)
    genres = models.JSONField(default=list, blank=True)
    metadata = models.JSONField(
        null=True,
        blank=True,
        help_text='Raw provider payload.',
    )

    class Meta:
        db_table = 'movies'
        ordering = ['title']

    def __str__(self):
        return f'{self.title} ({self.year})' if self.year else self.title


class GroupMovie(TimestampedModel):
    """
    A movie a group has watched (one row per group and movie).
    """
    class ScreeningType(models.TextChoices):
        IN_PERSON = 'presencial', 'In person'
        REMOTE = 'remota', 'Remote'

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='group_movies',
    )
    movie = models.ForeignKey(
        Movie,
        on_delete=models.CASCADE,
        related_name='group_movies',
    )
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='added_group_movies',
    )
    watched_at = models.DateField(null=True, blank=True)
    screening_type = models.CharField(
        max_length=12,
        choices=ScreeningType.choices,
        default=ScreeningType.IN_PERSON,
    )

    objects = GroupScopedQuerySet.as_manager()

    class Meta:
        db_table = 'group_movies'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'movie'],
                name='unique_group_movie',
            ),
        ]

    def __str__(self):
        return f'{self.movie} in {self.group}'


class ScreeningAttendeeQuerySet(GroupScopedQuerySet):
    group_lookup = 'group_movie__group'


class ScreeningAttendee(TimestampedModel):
    """
    A user who attended a group's screening of a movie.
    """
    group_movie = models.ForeignKey(
        GroupMovie,
        on_delete=models.CASCADE,
        related_name='attendees',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='screenings',
    )

    objects = ScreeningAttendeeQuerySet.as_manager()

    class Meta:
        db_table = 'screening_attendees'
        constraints = [
            models.UniqueConstraint(
                fields=['group_movie', 'user'],
                name='unique_attendee_per_screening',
            ),
        ]

    def __str__(self):
        return f'{self.user} at {self.group_movie}'


class Rating(TimestampedModel):
    """
    One user's score (and optional comment) for a movie within a group.
    """
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='ratings',
    )
    movie = models.ForeignKey(
        Movie,
        on_delete=models.CASCADE,
        related_name='ratings',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ratings',
    )
    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(10)],
    )
    comment = models.TextField(max_length=1000, blank=True, null=True)

    objects = GroupScopedQuerySet.as_manager()

    class Meta:
        db_table = 'ratings'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'movie', 'user'],
                name='unique_rating_per_group_movie_user',
            ),
            models.CheckConstraint(
                condition=Q(score__gte=1) & Q(score__lte=10),
                name='rating_score_between_1_and_10',
            ),
        ]

    def __str__(self):
        return f'{self.user} rated {self.movie} {self.score}/10'


class WatchlistItem(TimestampedModel):
    """
    A movie proposed for the group to watch next.
    """
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='watchlist_items',
    )
    movie = models.ForeignKey(
        Movie,
        on_delete=models.CASCADE,
        related_name='watchlist_items',
    )
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='watchlist_items',
    )
    reason = models.TextField(max_length=500, blank=True, null=True)
    priority = models.IntegerField(default=0)

    objects = GroupScopedQuerySet.as_manager()

    class Meta:
        db_table = 'watchlist'
        ordering = ['-priority', '-created_at']

    def __str__(self):
        return f'{self.movie} on {self.group} watchlist'


class FavoriteMovie(TimestampedModel):
    """
    A movie bookmarked by a user, outside of any group.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='favorite_movies',
    )
    movie = models.ForeignKey(
        Movie,
        on_delete=models.CASCADE,
        related_name='favorited_by',
    )

    class Meta:
        db_table = 'favorite_movies'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'movie'],
                name='unique_favorite_per_user_movie',
            ),
        ]

    def __str__(self):
        return f'{self.user} likes {self.movie}'

"""
Models for the Activity app.
"""
from django.conf import settings
from django.db import models

from common.models import GroupScopedQuerySet, TimestampedModel


class ActivityFeedItem(TimestampedModel):
    """
    Append-only log entry describing something that happened in a group.
    """
    class Type(models.TextChoices):
        GROUP_CREATED = 'group_created', 'Group created'
        MOVIE_ADDED = 'movie_added', 'Movie added'
        MOVIE_RATED = 'movie_rated', 'Movie rated'
        RATING_UPDATED = 'rating_updated', 'Rating updated'
        WATCHLIST_ADDED = 'watchlist_added', 'Watchlist addition'
        COMMENT_ADDED = 'comment_added', 'Comment added'
        MEMBER_JOINED = 'member_joined', 'Member joined'
        MEMBER_LEFT = 'member_left', 'Member left'

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='activities',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='activities',
        help_text='The user who performed the action.',
    )
    activity_type = models.CharField(
        max_length=20,
        choices=Type.choices,
        db_index=True,
    )
    target_movie = models.ForeignKey(
        'movies.Movie',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities',
    )
    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='targeted_activities',
    )
    metadata = models.JSONField(null=True, blank=True)

    objects = GroupScopedQuerySet.as_manager()

    class Meta:
        db_table = 'activity_feed'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.user} {self.activity_type} in {self.group}'

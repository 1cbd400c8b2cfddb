"""
Common abstract base models for the MovieNight project.
"""
import uuid

from django.db import models


class TimestampedModel(models.Model):
    """
    Abstract base model that provides self-updating
    ``created_at`` and ``updated_at`` fields.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']


class GroupScopedQuerySet(models.QuerySet):
    """
    QuerySet for rows that belong to a group.

    ``visible_to`` restates the membership predicate at the data layer so a
    view that forgets the permission check still cannot leak another
    group's rows.
    """
    group_lookup = 'group'

    def visible_to(self, user):
        if user is None or not user.is_authenticated:
            return self.none()
        return self.filter(**{f'{self.group_lookup}__memberships__user': user})

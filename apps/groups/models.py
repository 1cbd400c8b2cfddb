"""
Models for the Groups app.
"""
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from common.models import GroupScopedQuerySet, TimestampedModel


class GroupQuerySet(models.QuerySet):

    def visible_to(self, user):
        if user is None or not user.is_authenticated:
            return self.none()
        return self.filter(memberships__user=user)


class Group(TimestampedModel):
    """
    A private circle of users who watch movies together.
    """
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=500, blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='owned_groups',
    )

    objects = GroupQuerySet.as_manager()

    class Meta:
        db_table = 'groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def member_count(self):
        return self.memberships.count()


class Membership(TimestampedModel):
    """
    Membership record linking a user to a group with a role.
    """
    class Role(models.TextChoices):
        OWNER = 'owner', 'Owner'
        MEMBER = 'member', 'Member'

    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name='memberships',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='memberships',
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.MEMBER,
    )

    objects = GroupScopedQuerySet.as_manager()

    class Meta:
        db_table = 'memberships'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['group', 'user'],
                name='unique_membership_per_group_user',
            ),
            models.UniqueConstraint(
                fields=['group'],
                condition=Q(role='owner'),
                name='unique_owner_per_group',
            ),
        ]

    def __str__(self):
        return f'{self.user} in {self.group} ({self.role})'

    @property
    def is_owner(self):
        return self.role == self.Role.OWNER


class InviteCodeQuerySet(GroupScopedQuerySet):

    def usable(self, now=None):
        """Active codes that have neither expired nor run out of uses."""
        now = now or timezone.now()
        return self.filter(is_active=True).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=now),
        ).filter(
            Q(max_uses__isnull=True) | Q(use_count__lt=models.F('max_uses')),
        )


class InviteCode(TimestampedModel):
    """
    Short human-typeable code that grants membership to a group.
    """
    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name='invite_codes',
    )
    code = models.CharField(
        max_length=6,
        unique=True,
        db_index=True,
        help_text='Unique 6-character uppercase code used to join the group.',
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_invite_codes',
    )
    is_active = models.BooleanField(default=True)
    use_count = models.PositiveIntegerField(default=0)
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)

    objects = InviteCodeQuerySet.as_manager()

    class Meta:
        db_table = 'invite_codes'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.code} ({self.group})'

    def is_usable(self, now=None):
        now = now or timezone.now()
        if not self.is_active:
            return False
        if self.expires_at is not None and self.expires_at <= now:
            return False
        if self.max_uses is not None and self.use_count >= self.max_uses:
            return False
        return True

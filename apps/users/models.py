"""
Custom User model for the MovieNight application.
"""
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Extended User model carrying the public profile.

    Uses email as the primary login identifier instead of username.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        unique=True,
        db_index=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )
    display_name = models.CharField(
        max_length=50,
        blank=True,
        default='',
        help_text='Name shown to other members.',
    )
    avatar = models.URLField(
        max_length=500,
        blank=True,
        default='',
        help_text='URL to the user avatar image.',
    )
    bio = models.TextField(max_length=500, blank=True, default='')
    banner = models.URLField(
        max_length=500,
        blank=True,
        default='',
        help_text='URL to the profile banner image.',
    )
    firebase_uid = models.CharField(
        max_length=128,
        unique=True,
        blank=True,
        null=True,
        db_index=True,
        help_text='Firebase Authentication UID.',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.public_name} ({self.email})'

    @property
    def public_name(self):
        """Display name, falling back to the local part of the email."""
        if self.display_name:
            return self.display_name
        return self.email.split('@')[0] if self.email else str(self.id)

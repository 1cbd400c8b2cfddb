"""
Signals for the Users app.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender='users.User')
def user_post_save(sender, instance, created, **kwargs):
    """
    Fill in a display name for new accounts that arrived without one.
    """
    if not created:
        return

    if not instance.display_name and instance.email:
        sender.objects.filter(pk=instance.pk).update(
            display_name=instance.email.split('@')[0][:50],
        )
        instance.display_name = instance.email.split('@')[0][:50]

    logger.info('New user registered: %s (id=%s)', instance.email, instance.id)

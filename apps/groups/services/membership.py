"""
Membership guard: who may act inside a group, and with which role.

Every group-scoped mutation calls one of the ``require_*`` helpers before
touching any other table. The same predicate is restated at the data layer
through ``visible_to(user)`` on the group-scoped querysets.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied

from apps.groups.models import Group, Membership


def role_of(group_id, user_id):
    """Return ``'owner'``, ``'member'`` or ``None``."""
    if group_id is None or user_id is None:
        return None
    return (
        Membership.objects.filter(group_id=group_id, user_id=user_id)
        .values_list('role', flat=True)
        .first()
    )


def is_member(group_id, user_id):
    return role_of(group_id, user_id) is not None


def get_group_or_404(group_id):
    try:
        return Group.objects.get(pk=group_id)
    except (Group.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFound('Group not found.')


def require_member(group_id, user):
    """
    Return the caller's Membership for *group_id*.

    Raises
    ------
    NotAuthenticated
        If there is no signed-in user.
    NotFound
        If the group does not exist.
    PermissionDenied
        If the user does not belong to the group.
    """
    if user is None or not user.is_authenticated:
        raise NotAuthenticated('You must sign in to continue.')

    group = get_group_or_404(group_id)
    membership = (
        Membership.objects.filter(group=group, user=user)
        .select_related('group')
        .first()
    )
    if membership is None:
        raise PermissionDenied('You are not a member of this group.')
    return membership


def require_owner(group_id, user, message='Only the group owner can do this.'):
    """Like :func:`require_member`, but the role must be ``owner``."""
    membership = require_member(group_id, user)
    if not membership.is_owner:
        raise PermissionDenied(message)
    return membership

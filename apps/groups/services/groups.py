"""
Group lifecycle: create, list, edit, leave, remove members, delete.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count
from rest_framework.exceptions import NotFound

from apps.activity.models import ActivityFeedItem
from apps.activity.services import record_activity
from apps.groups.models import Group, InviteCode, Membership
from apps.groups.services.membership import require_member, require_owner
from apps.groups.utils import generate_invite_code
from common.exceptions import DomainError, UpstreamUnavailable

logger = logging.getLogger(__name__)
User = get_user_model()


@transaction.atomic
def create_group(owner, name, description=None, image_url=None, member_ids=None):
    """
    Create a group owned by *owner* together with its first invite code.

    ``member_ids`` are added as plain members; ids that do not match a user
    are ignored.
    """
    group = Group.objects.create(
        name=name,
        description=description or None,
        image_url=image_url or None,
        owner=owner,
    )
    Membership.objects.create(group=group, user=owner, role=Membership.Role.OWNER)

    code = generate_invite_code()
    if code is None:
        raise UpstreamUnavailable('Could not generate an invite code. Please try again.')
    InviteCode.objects.create(group=group, code=code, created_by=owner)

    if member_ids:
        extra_users = User.objects.filter(pk__in=member_ids).exclude(pk=owner.pk)
        Membership.objects.bulk_create(
            [Membership(group=group, user=u, role=Membership.Role.MEMBER) for u in extra_users],
            ignore_conflicts=True,
        )

    record_activity(group, owner, ActivityFeedItem.Type.GROUP_CREATED)
    logger.info('Group %s created by %s', group.pk, owner.pk)
    return group


def list_user_groups(user):
    """
    Groups *user* belongs to, most recently joined first.

    Each group carries ``role``, ``member_total`` and ``last_movie`` (the
    latest ledger entry with its rating aggregate, or ``None``).
    """
    from apps.movies.models import GroupMovie
    from apps.movies.services.ratings import aggregate

    memberships = (
        Membership.objects.filter(user=user)
        .select_related('group')
        .annotate(member_total=Count('group__memberships', distinct=True))
        .order_by('-created_at')
    )

    groups = []
    for membership in memberships:
        group = membership.group
        group.role = membership.role
        group.member_total = membership.member_total

        last = (
            GroupMovie.objects.filter(group=group)
            .select_related('movie')
            .order_by('-created_at')
            .first()
        )
        if last is not None:
            last.aggregate = aggregate(group.pk, last.movie_id)
        group.last_movie = last
        groups.append(group)
    return groups


def update_group(group_id, user, **changes):
    membership = require_owner(group_id, user, 'You do not have permission to edit this group.')
    group = membership.group
    if 'name' in changes:
        group.name = changes['name']
    for field in ('description', 'image_url'):
        if field in changes:
            # Blank optional fields are stored as NULL
            setattr(group, field, changes[field] or None)
    group.save()
    return group


def delete_group(group_id, user):
    """Hard-delete the group; every dependent row goes with it."""
    membership = require_owner(group_id, user, 'You do not have permission to delete this group.')
    group_pk = membership.group.pk
    membership.group.delete()
    logger.info('Group %s deleted by %s', group_pk, user.pk)


@transaction.atomic
def leave_group(group_id, user):
    membership = require_member(group_id, user)
    if membership.is_owner:
        raise DomainError(
            'The owner cannot leave the group. Delete it instead.',
            code='owner_cannot_leave',
        )

    group = membership.group
    membership.delete()
    record_activity(
        group,
        user,
        ActivityFeedItem.Type.MEMBER_LEFT,
        metadata={'user_name': user.public_name},
    )
    logger.info('User %s left group %s', user.pk, group.pk)


def remove_member(group_id, user, member_id):
    require_owner(group_id, user, 'You do not have permission to remove members.')

    target = Membership.objects.filter(group_id=group_id, user_id=member_id).first()
    if target is None:
        raise NotFound('That user is not a member of this group.')
    if target.is_owner:
        raise DomainError('The group owner cannot be removed.', code='cannot_remove_owner')
    if target.user_id == user.pk:
        raise DomainError('You cannot remove yourself.', code='cannot_remove_self')

    target.delete()
    logger.info('User %s removed from group %s by %s', member_id, group_id, user.pk)


def group_members(group):
    """Memberships of *group*, owner first, then by join date."""
    return sorted(
        Membership.objects.filter(group=group).select_related('user'),
        key=lambda m: (not m.is_owner, m.created_at),
    )

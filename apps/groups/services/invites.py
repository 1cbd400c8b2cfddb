"""
Invite codes: minting them for a group and redeeming them to join.
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction
from django.db.models import F
from rest_framework.exceptions import NotAuthenticated, ValidationError

from apps.activity.models import ActivityFeedItem
from apps.activity.services import record_activity
from apps.groups.models import Group, InviteCode, Membership
from apps.groups.services.membership import require_owner
from apps.groups.utils import INVITE_CODE_LENGTH, generate_invite_code, normalize_invite_code
from common.exceptions import DomainError, UpstreamUnavailable

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = 'Invalid or expired invite code.'


@dataclass
class JoinResult:
    group: Group
    already_member: bool
    membership: Membership


def _enforce_limits():
    return getattr(settings, 'MOVIENIGHT_ENFORCE_INVITE_LIMITS', True)


def _current_code(group):
    codes = InviteCode.objects.filter(group=group)
    codes = codes.usable() if _enforce_limits() else codes.filter(is_active=True)
    return codes.order_by('-created_at').first()


def generate_code(group_id, user, max_uses=None, expires_at=None):
    """
    Return the group's current invite code, minting one if none is usable.

    Only the owner may hand out codes.
    """
    membership = require_owner(group_id, user, 'Only the group owner can share invite codes.')
    group = membership.group

    existing = _current_code(group)
    if existing is not None:
        return existing

    code = generate_invite_code()
    if code is None:
        logger.error('Could not generate a unique invite code for group %s', group.pk)
        raise UpstreamUnavailable('Could not generate an invite code. Please try again.')

    invite = InviteCode.objects.create(
        group=group,
        code=code,
        created_by=user,
        max_uses=max_uses,
        expires_at=expires_at,
    )
    logger.info('Invite code minted for group %s', group.pk)
    return invite


def deactivate_codes(group_id, user):
    """Switch off every active code of the group. Returns how many changed."""
    membership = require_owner(group_id, user, 'Only the group owner can manage invite codes.')
    return InviteCode.objects.filter(group=membership.group, is_active=True).update(is_active=False)


def redeem(raw_code, user):
    """
    Join the group behind *raw_code*.

    Returns a :class:`JoinResult`. Being a member already is a successful
    outcome (``already_member=True``), not an error.
    """
    if user is None or not user.is_authenticated:
        raise NotAuthenticated('You must sign in to continue.')

    code = normalize_invite_code(raw_code)
    if len(code) != INVITE_CODE_LENGTH:
        raise ValidationError({'code': [f'The code must have {INVITE_CODE_LENGTH} characters.']})

    with transaction.atomic():
        invite = (
            InviteCode.objects.select_for_update()
            .select_related('group')
            .filter(code=code, is_active=True)
            .first()
        )
        if invite is None or (_enforce_limits() and not invite.is_usable()):
            raise DomainError(INVALID_CODE_MESSAGE, code='invalid_code')

        membership, created = Membership.objects.get_or_create(
            group=invite.group,
            user=user,
            defaults={'role': Membership.Role.MEMBER},
        )
        if not created:
            return JoinResult(group=invite.group, already_member=True, membership=membership)

        InviteCode.objects.filter(pk=invite.pk).update(use_count=F('use_count') + 1)

    record_activity(invite.group, user, ActivityFeedItem.Type.MEMBER_JOINED)
    logger.info('User %s joined group %s with an invite code', user.pk, invite.group.pk)
    return JoinResult(group=invite.group, already_member=False, membership=membership)

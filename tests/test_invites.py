from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from apps.activity.models import ActivityFeedItem
from apps.groups.models import InviteCode, Membership
from apps.groups.services import invites
from apps.groups.utils import normalize_invite_code
from common.exceptions import DomainError

pytestmark = pytest.mark.django_db


@pytest.fixture
def invite(group, owner):
    return InviteCode.objects.create(group=group, code='ABC123', created_by=owner)


def test_normalize_invite_code():
    assert normalize_invite_code(' abc-123 ') == 'ABC123'
    assert normalize_invite_code(None) == ''


def test_generate_code_reuses_current_code(group, owner):
    first = invites.generate_code(group.pk, owner)
    second = invites.generate_code(group.pk, owner)

    assert first.pk == second.pk
    assert len(first.code) == 6
    assert first.code == first.code.upper()


def test_generate_code_mints_after_deactivation(group, owner):
    old = invites.generate_code(group.pk, owner)
    assert invites.deactivate_codes(group.pk, owner) == 1

    new = invites.generate_code(group.pk, owner, max_uses=3)

    assert new.pk != old.pk
    assert new.max_uses == 3


def test_only_owner_generates_codes(group, member):
    with pytest.raises(PermissionDenied):
        invites.generate_code(group.pk, member)


def test_redeem_normalizes_and_joins(invite, outsider):
    result = invites.redeem(' abc-123 ', outsider)

    assert result.already_member is False
    assert result.group == invite.group
    assert Membership.objects.get(group=invite.group, user=outsider).role == Membership.Role.MEMBER
    invite.refresh_from_db()
    assert invite.use_count == 1
    assert ActivityFeedItem.objects.filter(
        group=invite.group, user=outsider, activity_type=ActivityFeedItem.Type.MEMBER_JOINED,
    ).exists()


def test_redeem_as_existing_member(invite, member):
    result = invites.redeem('ABC123', member)

    assert result.already_member is True
    invite.refresh_from_db()
    assert invite.use_count == 0


def test_redeem_wrong_length(outsider):
    with pytest.raises(ValidationError):
        invites.redeem('ABC12', outsider)


def test_redeem_unknown_code(group, outsider):
    with pytest.raises(DomainError) as excinfo:
        invites.redeem('ZZZZZZ', outsider)
    assert excinfo.value.error_code == 'invalid_code'


def test_redeem_inactive_code(invite, outsider):
    invite.is_active = False
    invite.save()

    with pytest.raises(DomainError):
        invites.redeem('ABC123', outsider)


def test_redeem_expired_code(invite, outsider):
    invite.expires_at = timezone.now() - timedelta(minutes=1)
    invite.save()

    with pytest.raises(DomainError):
        invites.redeem('ABC123', outsider)


def test_redeem_exhausted_code(invite, outsider):
    invite.max_uses = 1
    invite.use_count = 1
    invite.save()

    with pytest.raises(DomainError):
        invites.redeem('ABC123', outsider)


def test_limits_can_be_switched_off(settings, invite, outsider):
    settings.MOVIENIGHT_ENFORCE_INVITE_LIMITS = False
    invite.expires_at = timezone.now() - timedelta(days=1)
    invite.save()

    assert invites.redeem('ABC123', outsider).already_member is False


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

def test_join_endpoint(client_for, invite, outsider):
    client = client_for(outsider)

    response = client.post('/api/v1/groups/join/', {'code': 'abc123'}, format='json')
    assert response.status_code == 201
    assert response.json()['data']['already_member'] is False
    assert response.json()['data']['group']['id'] == str(invite.group.pk)

    response = client.post('/api/v1/groups/join/', {'code': 'abc123'}, format='json')
    assert response.status_code == 200
    assert response.json()['data']['already_member'] is True


def test_join_endpoint_invalid_code(client_for, group, outsider):
    response = client_for(outsider).post('/api/v1/groups/join/', {'code': 'ZZZZZZ'}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == {
        'code': 'invalid_code',
        'message': 'Invalid or expired invite code.',
    }


def test_invite_code_endpoint(client_for, group, owner, member):
    url = f'/api/v1/groups/{group.pk}/invite-code/'

    response = client_for(owner).post(url, {}, format='json')
    assert response.status_code == 200
    assert len(response.json()['data']['code']) == 6

    assert client_for(member).post(url, {}, format='json').status_code == 403

    response = client_for(owner).delete(url)
    assert response.status_code == 200
    assert response.json()['data']['deactivated'] == 1

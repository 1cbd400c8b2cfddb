"""
Custom permissions for the Groups app.
"""
from rest_framework.exceptions import NotFound
from rest_framework.permissions import BasePermission

from apps.groups.models import Group, Membership


class IsGroupMember(BasePermission):
    """
    Allows access only to members (any role) of the group in the URL.

    A missing group is reported as a 404 rather than a 403.
    """
    message = 'You are not a member of this group.'

    def has_permission(self, request, view):
        group_pk = view.kwargs.get('group_pk')
        if group_pk is None:
            return True

        if Membership.objects.filter(group_id=group_pk, user=request.user).exists():
            return True
        if not Group.objects.filter(pk=group_pk).exists():
            raise NotFound('Group not found.')
        return False

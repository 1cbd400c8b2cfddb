"""
Views for the Groups app.
"""
import logging

from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.groups.models import Group
from apps.groups.permissions import IsGroupMember
from apps.groups.serializers import (
    GroupCreateSerializer,
    GroupDetailSerializer,
    GroupListSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    InviteCodeCreateSerializer,
    InviteCodeSerializer,
    JoinGroupSerializer,
    MembershipSerializer,
)
from apps.groups.services import groups as group_service
from apps.groups.services import invites
from apps.groups.services.membership import require_member

logger = logging.getLogger(__name__)

UUID_REGEX = '[0-9a-fA-F-]{36}'


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Group CRUD operations.

    list:   GET    /api/v1/groups/
    create: POST   /api/v1/groups/
    read:   GET    /api/v1/groups/{id}/
    update: PATCH  /api/v1/groups/{id}/
    delete: DELETE /api/v1/groups/{id}/
    """
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_REGEX
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return Group.objects.visible_to(self.request.user)

    def get_serializer_class(self):
        if self.action == 'create':
            return GroupCreateSerializer
        if self.action == 'partial_update':
            return GroupUpdateSerializer
        if self.action == 'invite_code':
            return InviteCodeCreateSerializer
        return GroupSerializer

    def get_object(self):
        # Non-members of an existing group get a 403, not a 404
        return require_member(self.kwargs['pk'], self.request.user).group

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = group_service.create_group(request.user, **serializer.validated_data)
        return Response(
            {
                'success': True,
                'data': GroupDetailSerializer(group, context={'request': request}).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = GroupDetailSerializer(instance, context={'request': request})
        return Response({'success': True, 'data': serializer.data})

    def list(self, request, *args, **kwargs):
        groups = group_service.list_user_groups(request.user)
        serializer = GroupListSerializer(groups, many=True)
        return Response({'success': True, 'data': serializer.data})

    def partial_update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        group = group_service.update_group(kwargs['pk'], request.user, **serializer.validated_data)
        return Response({'success': True, 'data': GroupSerializer(group).data})

    def destroy(self, request, *args, **kwargs):
        group_service.delete_group(kwargs['pk'], request.user)
        return Response(
            {'success': True, 'message': 'Group deleted.'},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group. The owner cannot leave."""
        group_service.leave_group(pk, request.user)
        return Response(
            {'success': True, 'message': 'Successfully left the group.'},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=['post', 'delete'], url_path='invite-code')
    def invite_code(self, request, pk=None):
        """
        POST returns the current invite code, minting one if needed.
        DELETE deactivates every active code of the group.
        """
        if request.method == 'DELETE':
            count = invites.deactivate_codes(pk, request.user)
            return Response({'success': True, 'data': {'deactivated': count}})

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invite = invites.generate_code(pk, request.user, **serializer.validated_data)
        return Response({'success': True, 'data': InviteCodeSerializer(invite).data})


class GroupMemberViewSet(viewsets.GenericViewSet):
    """
    ViewSet for managing group members.

    list:    GET    /api/v1/groups/{group_pk}/members/
    destroy: DELETE /api/v1/groups/{group_pk}/members/{user_id}/
    """
    serializer_class = MembershipSerializer
    permission_classes = [IsAuthenticated, IsGroupMember]

    def list(self, request, group_pk=None):
        group = require_member(group_pk, request.user).group
        serializer = self.get_serializer(group_service.group_members(group), many=True)
        return Response({'success': True, 'data': serializer.data})

    def destroy(self, request, group_pk=None, user_id=None):
        group_service.remove_member(group_pk, request.user, user_id)
        return Response(
            {'success': True, 'message': 'Member removed.'},
            status=status.HTTP_200_OK,
        )


class JoinGroupView(generics.CreateAPIView):
    """
    Join a group using an invite code.

    POST /api/v1/groups/join/
    """
    serializer_class = JoinGroupSerializer
    permission_classes = [IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = invites.redeem(serializer.validated_data['code'], request.user)
        if result.already_member:
            message = f'You are already a member of {result.group.name}.'
        else:
            message = f'Successfully joined {result.group.name}.'

        return Response(
            {
                'success': True,
                'data': {
                    'group': GroupSerializer(result.group).data,
                    'already_member': result.already_member,
                },
                'message': message,
            },
            status=status.HTTP_200_OK if result.already_member else status.HTTP_201_CREATED,
        )

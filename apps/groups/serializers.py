"""
Serializers for the Groups app.
"""
from rest_framework import serializers

from apps.groups.models import Group, InviteCode, Membership
from apps.movies.serializers import LastMovieSerializer
from apps.users.serializers import PublicUserSerializer


class MembershipSerializer(serializers.ModelSerializer):
    user = PublicUserSerializer(read_only=True)
    joined_at = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Membership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    owner_id = serializers.UUIDField(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id', 'name', 'description', 'image_url',
            'owner_id', 'member_count', 'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        annotated = getattr(obj, 'member_total', None)
        return annotated if annotated is not None else obj.member_count


class GroupListSerializer(GroupSerializer):
    """
    A group as listed for the caller, with their role and the last movie logged.
    """
    role = serializers.CharField(read_only=True)
    last_movie = LastMovieSerializer(read_only=True, allow_null=True)

    class Meta(GroupSerializer.Meta):
        fields = GroupSerializer.Meta.fields + ['role', 'last_movie']
        read_only_fields = fields


class GroupDetailSerializer(GroupSerializer):
    members = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()

    class Meta(GroupSerializer.Meta):
        fields = GroupSerializer.Meta.fields + ['role', 'members']
        read_only_fields = fields

    def get_members(self, obj):
        from apps.groups.services.groups import group_members
        return MembershipSerializer(group_members(obj), many=True).data

    def get_role(self, obj):
        from apps.groups.services.membership import role_of
        request = self.context.get('request')
        return role_of(obj.pk, request.user.pk) if request else None


class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)
    member_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError('The name must have at least 2 characters.')
        return value


class GroupUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError('The name must have at least 2 characters.')
        return value


class InviteCodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = InviteCode
        fields = ['code', 'group_id', 'is_active', 'use_count', 'max_uses', 'expires_at', 'created_at']
        read_only_fields = fields


class InviteCodeCreateSerializer(serializers.Serializer):
    max_uses = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class JoinGroupSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=32)

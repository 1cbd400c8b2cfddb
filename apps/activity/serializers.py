"""
Serializers for the Activity app.
"""
from rest_framework import serializers

from apps.activity.models import ActivityFeedItem
from apps.activity.services import describe
from apps.movies.serializers import MovieSummarySerializer
from apps.users.serializers import PublicUserSerializer


class ActivityFeedItemSerializer(serializers.ModelSerializer):
    user = PublicUserSerializer(read_only=True)
    target_user = PublicUserSerializer(read_only=True, allow_null=True)
    target_movie = MovieSummarySerializer(read_only=True, allow_null=True)
    group_name = serializers.CharField(source='group.name', read_only=True)
    message = serializers.SerializerMethodField()

    class Meta:
        model = ActivityFeedItem
        fields = [
            'id',
            'group_id',
            'group_name',
            'activity_type',
            'user',
            'target_movie',
            'target_user',
            'metadata',
            'message',
            'created_at',
        ]
        read_only_fields = fields

    def get_message(self, obj):
        return describe(obj)

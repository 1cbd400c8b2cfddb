"""
Admin configuration for the Activity app.
"""
from django.contrib import admin

from apps.activity.models import ActivityFeedItem


@admin.register(ActivityFeedItem)
class ActivityFeedItemAdmin(admin.ModelAdmin):
    list_display = ['activity_type', 'user', 'group', 'target_movie', 'created_at']
    list_filter = ['activity_type', 'created_at']
    search_fields = ['user__email', 'group__name', 'target_movie__title']
    readonly_fields = ['metadata', 'created_at', 'updated_at']

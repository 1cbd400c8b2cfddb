"""
URL configuration for the Activity app.
"""
from django.urls import path

from apps.activity.views import ActivityFeedView, GroupActivityFeedView

app_name = 'activity'

urlpatterns = [
    path('activities/', ActivityFeedView.as_view(), name='activity-feed'),
    path(
        'groups/<uuid:group_pk>/activities/',
        GroupActivityFeedView.as_view(),
        name='group-activity-feed',
    ),
]

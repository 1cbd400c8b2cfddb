"""
URL configuration for the Groups app.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from apps.groups.views import (
    GroupMemberViewSet,
    GroupViewSet,
    JoinGroupView,
)

app_name = 'groups'

router = DefaultRouter()
router.include_root_view = False
router.register(r'groups', GroupViewSet, basename='group')

member_list = GroupMemberViewSet.as_view({
    'get': 'list',
})
member_detail = GroupMemberViewSet.as_view({
    'delete': 'destroy',
})

urlpatterns = [
    path('groups/join/', JoinGroupView.as_view(), name='group-join'),
    path(
        'groups/<uuid:group_pk>/members/',
        member_list,
        name='group-member-list',
    ),
    path(
        'groups/<uuid:group_pk>/members/<uuid:user_id>/',
        member_detail,
        name='group-member-detail',
    ),
    path('', include(router.urls)),
]

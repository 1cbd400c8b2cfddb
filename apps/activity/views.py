"""
Views for the Activity app.
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.activity.serializers import ActivityFeedItemSerializer
from apps.activity.services import FILTER_TYPES, group_feed, user_feed
from apps.groups.permissions import IsGroupMember
from apps.groups.services.membership import require_member
from common.query_params import choice_param, int_param

MAX_PAGE_SIZE = 100


def _page_params(request):
    return {
        'activity_filter': choice_param(request, 'filter', tuple(FILTER_TYPES), 'all'),
        'limit': int_param(request, 'limit', 20, minimum=1, maximum=MAX_PAGE_SIZE),
        'offset': int_param(request, 'offset', 0, minimum=0),
    }


def _feed_response(items, has_more):
    return Response({
        'success': True,
        'data': ActivityFeedItemSerializer(items, many=True).data,
        'has_more': has_more,
    })


class ActivityFeedView(APIView):
    """
    Activity across every group the caller belongs to.

    GET /api/v1/activities/?filter=all|ratings|watchlist|comments&limit=&offset=
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        items, has_more = user_feed(request.user, **_page_params(request))
        return _feed_response(items, has_more)


class GroupActivityFeedView(APIView):
    """
    GET /api/v1/groups/{group_pk}/activities/
    """
    permission_classes = [IsAuthenticated, IsGroupMember]

    def get(self, request, group_pk):
        group = require_member(group_pk, request.user).group
        items, has_more = group_feed(group, **_page_params(request))
        return _feed_response(items, has_more)

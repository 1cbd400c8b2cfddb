"""
URL configuration for the Users app.
"""
from django.urls import path

from apps.users.views import (
    FirebaseTokenExchangeView,
    LoginView,
    LogoutView,
    RegisterView,
    TokenRefreshView,
    UserProfileView,
    UserSearchView,
    UserStatsView,
)

app_name = 'users'

urlpatterns = [
    # Authentication
    path('auth/register/', RegisterView.as_view(), name='register'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),
    path('auth/firebase/', FirebaseTokenExchangeView.as_view(), name='firebase-auth'),

    # User profile
    path('users/me/', UserProfileView.as_view(), name='user-profile'),
    path('users/me/stats/', UserStatsView.as_view(), name='my-stats'),
    path('users/search/', UserSearchView.as_view(), name='user-search'),
    path('users/<uuid:user_id>/stats/', UserStatsView.as_view(), name='user-stats'),
]

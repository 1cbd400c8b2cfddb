"""
Views for the Users app.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import generics, status
from rest_framework.exceptions import AuthenticationFailed, NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.serializers import (
    FirebaseTokenSerializer,
    LoginSerializer,
    PublicUserSerializer,
    RecentRatingSerializer,
    RefreshTokenSerializer,
    TopGenreSerializer,
    UserRegistrationSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from apps.users.services import firebase_auth
from apps.users.services.stats import recent_ratings, top_genres, user_stats

logger = logging.getLogger(__name__)
User = get_user_model()

SEARCH_MIN_LENGTH = 2
SEARCH_MAX_RESULTS = 20


def _build_auth_response(user, refresh_token, http_status=status.HTTP_200_OK):
    """Helper to build a consistent auth response."""
    return Response(
        {
            'success': True,
            'data': {
                'user': UserSerializer(user).data,
                'access': str(refresh_token.access_token),
                'refresh': str(refresh_token),
            },
        },
        status=http_status,
    )


class RegisterView(APIView):
    """
    Register a new user account.

    POST /api/v1/auth/register/
    Body: {"email": "...", "password": "...", "display_name": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Login with email and password to obtain JWT tokens.

    POST /api/v1/auth/login/
    Body: {"email": "...", "password": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects.filter(email__iexact=serializer.validated_data['email']).first()
        if user is None or not user.check_password(serializer.validated_data['password']):
            raise AuthenticationFailed('Invalid email or password.')
        if not user.is_active:
            raise AuthenticationFailed('This account has been disabled.')

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_200_OK)


class TokenRefreshView(APIView):
    """
    Exchange a refresh token for a new access token.

    POST /api/v1/auth/token/refresh/
    Body: {"refresh": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            old_refresh = RefreshToken(serializer.validated_data['refresh'])
            user = User.objects.get(id=old_refresh.payload.get('user_id'))
        except TokenError:
            raise AuthenticationFailed('Token is invalid or expired.')
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found.')

        refresh = old_refresh
        if settings.SIMPLE_JWT.get('ROTATE_REFRESH_TOKENS', False):
            old_refresh.blacklist()
            refresh = RefreshToken.for_user(user)

        return Response(
            {
                'success': True,
                'data': {
                    'access': str(refresh.access_token),
                    'refresh': str(refresh),
                },
            },
            status=status.HTTP_200_OK,
        )


class LogoutView(APIView):
    """
    Logout by blacklisting the refresh token.

    POST /api/v1/auth/logout/
    Body: {"refresh": "<refresh_token>"}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            RefreshToken(serializer.validated_data['refresh']).blacklist()
        except TokenError:
            raise ValidationError({'refresh': ['Token is invalid or expired.']})

        return Response(
            {
                'success': True,
                'message': 'Successfully logged out.',
            },
            status=status.HTTP_200_OK,
        )


class FirebaseTokenExchangeView(APIView):
    """
    Exchange a Firebase ID token for JWT tokens.

    POST /api/v1/auth/firebase/
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = FirebaseTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            claims = firebase_auth.verify_id_token(serializer.validated_data['firebase_token'])
        except firebase_auth.FirebaseVerificationError:
            raise AuthenticationFailed('Invalid Firebase token.')

        user, created = firebase_auth.get_or_create_user(claims)
        refresh = RefreshToken.for_user(user)
        http_status = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return _build_auth_response(user, refresh, http_status)


class UserProfileView(APIView):
    """
    Retrieve or update the authenticated user's profile.

    GET   /api/v1/users/me/
    PATCH /api/v1/users/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user)
        return Response({'success': True, 'data': serializer.data})

    def patch(self, request):
        serializer = UserUpdateSerializer(
            request.user,
            data=request.data,
            partial=True,
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {
                'success': True,
                'data': UserSerializer(request.user).data,
            }
        )


class UserStatsView(APIView):
    """
    Profile statistics for the caller or for another user.

    Another user's statistics only cover the groups both users share.

    GET /api/v1/users/me/stats/
    GET /api/v1/users/<user_id>/stats/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id=None):
        user = request.user
        if user_id is not None:
            user = User.objects.filter(pk=user_id, is_active=True).first()
            if user is None:
                raise NotFound('User not found.')

        data = {
            'user': PublicUserSerializer(user).data,
            **user_stats(user, viewer=request.user),
            'top_genres': TopGenreSerializer(top_genres(user, viewer=request.user), many=True).data,
            'recent_ratings': RecentRatingSerializer(
                recent_ratings(user, viewer=request.user), many=True
            ).data,
        }
        return Response({'success': True, 'data': data})


class UserSearchView(generics.ListAPIView):
    """
    Search for users by email or display name.

    GET /api/v1/users/search/?q=<query>
    """
    serializer_class = PublicUserSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        query = self.request.query_params.get('q', '').strip()
        if len(query) < SEARCH_MIN_LENGTH:
            return User.objects.none()
        return User.objects.filter(
            Q(email__icontains=query) | Q(display_name__icontains=query),
            is_active=True,
        ).exclude(id=self.request.user.id)[:SEARCH_MAX_RESULTS]

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'data': serializer.data})

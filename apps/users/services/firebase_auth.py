"""
Firebase Authentication: verify ID tokens and map them to local users.

Federated sign-in (Google) happens on the client; the backend only sees the
resulting Firebase ID token.
"""
import logging

import firebase_admin
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions

logger = logging.getLogger(__name__)
User = get_user_model()


class FirebaseVerificationError(Exception):
    """The ID token was rejected by Firebase."""


def _ensure_app():
    """
    Initialise the default Firebase app if it hasn't been initialised yet.
    """
    if not firebase_admin._apps:
        cred_path = getattr(settings, 'FIREBASE_CREDENTIALS_PATH', '')
        if cred_path:
            firebase_admin.initialize_app(credentials.Certificate(cred_path))
        else:
            firebase_admin.initialize_app()


def verify_id_token(token):
    """
    Return the decoded claims of a Firebase ID token.

    Raises
    ------
    FirebaseVerificationError
        If the token is malformed, expired, revoked, or Firebase cannot be
        initialised.
    """
    try:
        _ensure_app()
        return firebase_auth.verify_id_token(token)
    except (ValueError, firebase_exceptions.FirebaseError) as exc:
        logger.warning('Firebase token verification failed: %s', exc)
        raise FirebaseVerificationError(str(exc)) from exc


@transaction.atomic
def get_or_create_user(claims):
    """
    Find the local user for decoded Firebase *claims*, creating it on first
    sign-in.

    An existing account with the same email is linked rather than
    duplicated. The provider picture fills the avatar when none is set.

    Returns
    -------
    tuple
        ``(user, created)``.
    """
    from apps.users.serializers import unique_username

    firebase_uid = claims['uid']
    email = (claims.get('email') or '').lower()
    name = (claims.get('name') or '').strip()
    picture = claims.get('picture') or ''

    user = User.objects.filter(firebase_uid=firebase_uid).first()
    created = False
    if user is None and email:
        user = User.objects.filter(email__iexact=email).first()
        if user is not None:
            user.firebase_uid = firebase_uid

    if user is None:
        user = User(
            firebase_uid=firebase_uid,
            email=email or f'{firebase_uid}@firebase.invalid',
            username=unique_username(email.split('@')[0] if email else firebase_uid),
            display_name=name[:50],
        )
        user.set_unusable_password()
        created = True

    if picture and not user.avatar:
        user.avatar = picture
    user.save()

    if created:
        logger.info('User %s created from Firebase sign-in', user.pk)
    return user, created

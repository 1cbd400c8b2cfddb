import itertools
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from apps.groups.models import Membership
from apps.groups.services.groups import create_group
from apps.movies.models import GroupMovie, Movie
from tests.factories import DEFAULT_PASSWORD, FakeTMDbClient

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(email=None, password=DEFAULT_PASSWORD, **extra):
        n = next(counter)
        return User.objects.create_user(
            username=f'user{n}',
            email=email or f'user{n}@example.com',
            password=password,
            **extra,
        )
    return _make


@pytest.fixture
def owner(make_user):
    return make_user(email='owner@example.com', display_name='Olivia')


@pytest.fixture
def member(make_user):
    return make_user(email='member@example.com', display_name='Marco')


@pytest.fixture
def outsider(make_user):
    return make_user(email='outsider@example.com', display_name='Oscar')


@pytest.fixture
def group(owner, member):
    group = create_group(owner, name='Cineclub')
    Membership.objects.create(group=group, user=member, role=Membership.Role.MEMBER)
    return group


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def make_movie(db):
    counter = itertools.count(1000)

    def _make(title=None, tmdb_id=None, year=2000, genres=None, **extra):
        tmdb_id = tmdb_id or next(counter)
        return Movie.objects.create(
            tmdb_id=tmdb_id,
            title=title or f'Movie {tmdb_id}',
            year=year,
            genres=genres if genres is not None else ['Drama'],
            **extra,
        )
    return _make


@pytest.fixture
def movie(make_movie):
    return make_movie(title='Fight Club', tmdb_id=550, year=1999, genres=['Drama', 'Thriller'])


@pytest.fixture
def log_movie():
    """Put a movie on a group's ledger, optionally backdating it."""
    def _log(group, user, movie, minutes_ago=None):
        entry = GroupMovie.objects.create(group=group, movie=movie, added_by=user)
        if minutes_ago is not None:
            created_at = timezone.now() - timedelta(minutes=minutes_ago)
            GroupMovie.objects.filter(pk=entry.pk).update(created_at=created_at)
            entry.refresh_from_db()
        return entry
    return _log


@pytest.fixture
def fake_tmdb(monkeypatch):
    """Route catalog lookups made without an explicit client to a fake."""
    fake = FakeTMDbClient()
    monkeypatch.setattr('apps.movies.services.catalog.TMDbClient', lambda: fake)
    return fake

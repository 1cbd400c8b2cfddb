"""
Management command to seed realistic demo data for MovieNight.

Creates users, groups, movies, screenings, ratings and watchlist entries so
the app and the admin both show meaningful data when logged in. Movies are
written straight into the local catalog, so no TMDb key is needed.

Usage:
    python manage.py seed_demo_data
    python manage.py seed_demo_data --reset  # wipe existing demo data first
"""
from datetime import date

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.activity.models import ActivityFeedItem
from apps.groups.models import Group, InviteCode, Membership
from apps.groups.utils import generate_invite_code
from apps.movies.models import (
    FavoriteMovie,
    GroupMovie,
    Movie,
    Rating,
    ScreeningAttendee,
    WatchlistItem,
)

User = get_user_model()

DEMO_PASSWORD = 'MovieNight2024Demo'

DEMO_USERS = [
    {'email': 'admin@movienight.app', 'username': 'admin', 'display_name': 'Admin', 'is_staff': True, 'is_superuser': True},
    {'email': 'lucia@movienight.app', 'username': 'lucia', 'display_name': 'Lucía', 'is_staff': False, 'is_superuser': False},
    {'email': 'mateo@movienight.app', 'username': 'mateo', 'display_name': 'Mateo', 'is_staff': False, 'is_superuser': False},
    {'email': 'sofia@movienight.app', 'username': 'sofia', 'display_name': 'Sofía', 'is_staff': False, 'is_superuser': False},
]

DEMO_MOVIES = [
    # tmdb_id, title, year, runtime, director, genres
    (550, 'Fight Club', 1999, 139, 'David Fincher', ['Drama', 'Thriller']),
    (680, 'Pulp Fiction', 1994, 154, 'Quentin Tarantino', ['Thriller', 'Crime']),
    (13, 'Forrest Gump', 1994, 142, 'Robert Zemeckis', ['Comedy', 'Drama', 'Romance']),
    (155, 'The Dark Knight', 2008, 152, 'Christopher Nolan', ['Drama', 'Action', 'Crime']),
    (129, 'Spirited Away', 2001, 125, 'Hayao Miyazaki', ['Animation', 'Family', 'Fantasy']),
    (496243, 'Parasite', 2019, 133, 'Bong Joon-ho', ['Comedy', 'Thriller', 'Drama']),
]


class Command(BaseCommand):
    help = 'Seed realistic demo data (users, groups, movies, ratings) for MovieNight'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete all existing demo data before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['reset']:
            self._reset()

        users = self._seed_users()
        movies = self._seed_movies()
        groups = self._seed_groups(users)
        self._seed_screenings(groups, movies, users)
        self._seed_watchlist(groups, movies, users)
        self._seed_favorites(movies, users)

        self.stdout.write(self.style.SUCCESS('\nDemo data seeded successfully!\n'))
        self.stdout.write(f'Users:   {len(users)}')
        self.stdout.write(f'Movies:  {len(movies)}')
        self.stdout.write(f'Groups:  {len(groups)}')
        for group in groups.values():
            code = InviteCode.objects.filter(group=group).usable().first()
            if code:
                self.stdout.write(f'  {group.name}: invite code {code.code}')
        self.stdout.write('\nDemo login credentials:')
        for u in DEMO_USERS:
            self.stdout.write(f'  {u["email"]} / {DEMO_PASSWORD}')

    # -----------------------------------------------------------------------

    def _reset(self):
        self.stdout.write('Resetting demo data...')
        emails = [u['email'] for u in DEMO_USERS]
        demo_users = User.objects.filter(email__in=emails)
        Group.objects.filter(owner__in=demo_users).delete()
        demo_users.delete()
        self.stdout.write('  Reset complete.')

    def _seed_users(self):
        self.stdout.write('\nSeeding users...')
        users = {}
        for data in DEMO_USERS:
            email = data['email']
            user, created = User.objects.get_or_create(
                email=email,
                defaults={
                    'username': data['username'],
                    'display_name': data['display_name'],
                    'is_staff': data['is_staff'],
                    'is_superuser': data['is_superuser'],
                    'is_active': True,
                },
            )
            user.set_password(DEMO_PASSWORD)
            if not created:
                user.display_name = data['display_name']
                user.is_staff = data['is_staff']
                user.is_superuser = data['is_superuser']
            user.save()
            users[data['username']] = user
            status = 'created' if created else 'updated'
            self.stdout.write(f'  {status}: {email}')
        return users

    def _seed_movies(self):
        self.stdout.write('\nSeeding movies...')
        movies = {}
        for tmdb_id, title, year, runtime, director, genres in DEMO_MOVIES:
            movie, created = Movie.objects.get_or_create(
                tmdb_id=tmdb_id,
                defaults={
                    'title': title,
                    'year': year,
                    'runtime': runtime,
                    'director': director,
                    'genres': genres,
                },
            )
            movies[tmdb_id] = movie
            self.stdout.write(f'  {"created" if created else "exists"}: {movie}')
        return movies

    def _seed_groups(self, users):
        self.stdout.write('\nSeeding groups...')
        groups = {}

        cineclub = self._group(
            'Cineclub de los viernes',
            owner=users['lucia'],
            members=[users['mateo'], users['sofia'], users['admin']],
            description='Friday nights, one movie, endless arguments.',
        )
        groups['cineclub'] = cineclub

        anime = self._group(
            'Ghibli & friends',
            owner=users['sofia'],
            members=[users['lucia']],
            description='Animation marathons.',
        )
        groups['anime'] = anime
        return groups

    def _group(self, name, owner, members, description=''):
        group, created = Group.objects.get_or_create(
            name=name,
            owner=owner,
            defaults={'description': description},
        )
        Membership.objects.get_or_create(
            group=group, user=owner, defaults={'role': Membership.Role.OWNER},
        )
        for user in members:
            Membership.objects.get_or_create(
                group=group, user=user, defaults={'role': Membership.Role.MEMBER},
            )
        if not InviteCode.objects.filter(group=group).usable().exists():
            InviteCode.objects.create(
                group=group,
                code=generate_invite_code(),
                created_by=owner,
            )
        if created:
            ActivityFeedItem.objects.create(
                group=group,
                user=owner,
                activity_type=ActivityFeedItem.Type.GROUP_CREATED,
                metadata={'group_name': group.name},
            )
        self.stdout.write(f'  {"created" if created else "exists"}: {group.name}')
        return group

    def _seed_screenings(self, groups, movies, users):
        self.stdout.write('\nSeeding screenings and ratings...')
        cineclub = groups['cineclub']
        anime = groups['anime']
        lucia, mateo, sofia = users['lucia'], users['mateo'], users['sofia']

        screenings = [
            # group, tmdb_id, added_by, watched_at, ratings
            (cineclub, 550, lucia, date(2024, 3, 1), {lucia: 9, mateo: 7, sofia: 8}),
            (cineclub, 680, mateo, date(2024, 3, 8), {lucia: 8, mateo: 10}),
            (cineclub, 496243, sofia, date(2024, 3, 15), {sofia: 10, lucia: 9, mateo: 9}),
            (anime, 129, sofia, date(2024, 4, 2), {sofia: 10, lucia: 9}),
        ]

        for group, tmdb_id, added_by, watched_at, scores in screenings:
            movie = movies[tmdb_id]
            group_movie, created = GroupMovie.objects.get_or_create(
                group=group,
                movie=movie,
                defaults={'added_by': added_by, 'watched_at': watched_at},
            )
            for user, score in scores.items():
                ScreeningAttendee.objects.get_or_create(group_movie=group_movie, user=user)
                Rating.objects.update_or_create(
                    group=group,
                    movie=movie,
                    user=user,
                    defaults={'score': score},
                )
            if created:
                ActivityFeedItem.objects.create(
                    group=group,
                    user=added_by,
                    activity_type=ActivityFeedItem.Type.MOVIE_ADDED,
                    target_movie=movie,
                    metadata={'movie_title': movie.title},
                )
            self.stdout.write(f'  {"created" if created else "exists"}: {movie.title} in {group.name}')

    def _seed_watchlist(self, groups, movies, users):
        self.stdout.write('\nSeeding watchlists...')
        entries = [
            (groups['cineclub'], 155, users['mateo'], 'Nolan night!', 2),
            (groups['cineclub'], 13, users['lucia'], None, 0),
        ]
        for group, tmdb_id, added_by, reason, priority in entries:
            _, created = WatchlistItem.objects.get_or_create(
                group=group,
                movie=movies[tmdb_id],
                added_by=added_by,
                defaults={'reason': reason, 'priority': priority},
            )
            self.stdout.write(f'  {"created" if created else "exists"}: {movies[tmdb_id].title}')

    def _seed_favorites(self, movies, users):
        self.stdout.write('\nSeeding favorites...')
        for username, tmdb_id in [('lucia', 550), ('lucia', 496243), ('sofia', 129)]:
            FavoriteMovie.objects.get_or_create(user=users[username], movie=movies[tmdb_id])
        self.stdout.write('  done.')

"""
Serializers for the Movies app.
"""
from rest_framework import serializers

from apps.movies.models import FavoriteMovie, GroupMovie, Movie, Rating, WatchlistItem
from apps.movies.services.ratings import MAX_COMMENT_LENGTH, MAX_SCORE, MIN_SCORE
from apps.users.serializers import PublicUserSerializer


def _average_field(**kwargs):
    return serializers.DecimalField(max_digits=3, decimal_places=1, coerce_to_string=False, **kwargs)


class MovieSerializer(serializers.ModelSerializer):
    class Meta:
        model = Movie
        fields = [
            'id',
            'tmdb_id',
            'title',
            'year',
            'poster_path',
            'backdrop_path',
            'runtime',
            'overview',
            'director',
            'genres',
        ]
        read_only_fields = fields


class MovieSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Movie
        fields = ['id', 'tmdb_id', 'title', 'year', 'poster_path']
        read_only_fields = fields


class RatingSerializer(serializers.ModelSerializer):
    user = PublicUserSerializer(read_only=True)

    class Meta:
        model = Rating
        fields = ['id', 'movie_id', 'group_id', 'user', 'score', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class RatingWriteSerializer(serializers.Serializer):
    score = serializers.IntegerField(min_value=MIN_SCORE, max_value=MAX_SCORE)
    comment = serializers.CharField(
        max_length=MAX_COMMENT_LENGTH,
        required=False,
        allow_blank=True,
        allow_null=True,
        trim_whitespace=False,
    )


class GroupMovieSerializer(serializers.ModelSerializer):
    """
    Ledger entry as listed on the group page.

    The rating fields are attached by the ledger service.
    """
    movie = MovieSerializer(read_only=True)
    added_by = PublicUserSerializer(read_only=True)
    average_rating = _average_field(read_only=True)
    rating_count = serializers.IntegerField(read_only=True)
    user_rating = RatingSerializer(read_only=True, allow_null=True)

    class Meta:
        model = GroupMovie
        fields = [
            'id',
            'group_id',
            'movie',
            'added_by',
            'watched_at',
            'screening_type',
            'created_at',
            'average_rating',
            'rating_count',
            'user_rating',
        ]
        read_only_fields = fields


class GroupMovieDetailSerializer(GroupMovieSerializer):
    ratings = RatingSerializer(source='ratings_list', many=True, read_only=True)
    attendees = PublicUserSerializer(source='attendee_users', many=True, read_only=True)

    class Meta(GroupMovieSerializer.Meta):
        fields = GroupMovieSerializer.Meta.fields + ['ratings', 'attendees']
        read_only_fields = fields


class LastMovieSerializer(serializers.ModelSerializer):
    movie = MovieSummarySerializer(read_only=True)
    average_rating = serializers.SerializerMethodField()

    class Meta:
        model = GroupMovie
        fields = ['movie', 'created_at', 'average_rating']
        read_only_fields = fields

    def get_average_rating(self, obj):
        summary = getattr(obj, 'aggregate', None)
        return float(summary['average']) if summary else 0


class AddGroupMovieSerializer(serializers.Serializer):
    tmdb_id = serializers.IntegerField(min_value=1)
    watched_at = serializers.DateField(required=False, allow_null=True)
    attendees = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    screening_type = serializers.ChoiceField(
        choices=GroupMovie.ScreeningType.choices,
        default=GroupMovie.ScreeningType.IN_PERSON,
    )


class WatchlistItemSerializer(serializers.ModelSerializer):
    movie = MovieSerializer(read_only=True)
    added_by = PublicUserSerializer(read_only=True)

    class Meta:
        model = WatchlistItem
        fields = ['id', 'group_id', 'movie', 'added_by', 'reason', 'priority', 'created_at']
        read_only_fields = fields


class AddWatchlistItemSerializer(serializers.Serializer):
    tmdb_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    priority = serializers.IntegerField(required=False, default=0)


class SpinSerializer(serializers.Serializer):
    seed = serializers.IntegerField(required=False, allow_null=True)
    exclude_item_id = serializers.UUIDField(required=False, allow_null=True)


class FavoriteMovieSerializer(serializers.ModelSerializer):
    movie = MovieSerializer(read_only=True)

    class Meta:
        model = FavoriteMovie
        fields = ['id', 'movie', 'created_at']
        read_only_fields = fields


class AddFavoriteSerializer(serializers.Serializer):
    tmdb_id = serializers.IntegerField(min_value=1)

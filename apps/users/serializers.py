"""
Serializers for the Users app.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Read-only serializer for User objects.
    """
    display_name = serializers.CharField(source='public_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'avatar',
            'bio',
            'banner',
            'created_at',
        ]
        read_only_fields = fields


class PublicUserSerializer(serializers.ModelSerializer):
    """
    Compact profile shown next to ratings, members and feed entries.
    """
    display_name = serializers.CharField(source='public_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'display_name', 'avatar']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """
    Serializer for user registration. The username is derived from the email.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'},
    )
    display_name = serializers.CharField(min_length=2, max_length=50, required=False, allow_blank=True)

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('A user with this email already exists.')
        return value

    def create(self, validated_data):
        email = validated_data['email']
        user = User(
            email=email,
            username=unique_username(email.split('@')[0]),
            display_name=(validated_data.get('display_name') or '').strip(),
        )
        user.set_password(validated_data['password'])
        user.save()
        return user


def unique_username(base):
    base = (base or 'user')[:30]
    username = base
    counter = 1
    while User.objects.filter(username=username).exists():
        username = f'{base}{counter}'
        counter += 1
    return username


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class UserUpdateSerializer(serializers.Serializer):
    """
    Serializer for updating the caller's profile.
    """
    display_name = serializers.CharField(min_length=2, max_length=50, required=False)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True)
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True)
    banner = serializers.URLField(max_length=500, required=False, allow_blank=True)

    def validate_display_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError('The name must have at least 2 characters.')
        return value

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value.strip() if field == 'bio' else value)
        instance.save()
        return instance


class FirebaseTokenSerializer(serializers.Serializer):
    """
    Serializer for Firebase token exchange.
    """
    firebase_token = serializers.CharField(
        required=True,
        help_text='Firebase ID token to exchange for JWT.',
    )


class RefreshTokenSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class TopGenreSerializer(serializers.Serializer):
    name = serializers.CharField()
    count = serializers.IntegerField()
    percentage = serializers.IntegerField()


class RecentRatingSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    score = serializers.IntegerField()
    comment = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    movie_id = serializers.UUIDField()
    movie_title = serializers.CharField(source='movie.title')
    movie_year = serializers.IntegerField(source='movie.year', allow_null=True)
    poster_path = serializers.CharField(source='movie.poster_path', allow_null=True)
    group_id = serializers.UUIDField()
    group_name = serializers.CharField(source='group.name')

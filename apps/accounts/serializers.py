from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """User profile as returned by the API."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'email_verified',
            'created_at',
            'updated_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Payload for user registration."""

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate_email(self, value):
        return User.objects.normalize_email(value)


class UserLoginSerializer(serializers.Serializer):
    """Payload for user login."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class VerificationRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return User.objects.normalize_email(value)


class UpdateProfileSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100, allow_blank=True)
    last_name = serializers.CharField(max_length=100, allow_blank=True)


class UpdateEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_email(self, value):
        return User.objects.normalize_email(value)


class UpdatePasswordSerializer(serializers.Serializer):
    """Payload for changing the password of the signed-in user."""

    old_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_password = serializers.CharField(
        write_only=True,
        min_length=6,
        max_length=128,
        style={'input_type': 'password'}
    )


class DeleteProfileSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class PasswordResetRequestSerializer(serializers.Serializer):
    """Payload for password reset request."""

    email = serializers.EmailField()


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Payload for password reset confirmation."""

    access_token = serializers.CharField()
    new_password = serializers.CharField(
        write_only=True,
        min_length=6,
        max_length=128,
        style={'input_type': 'password'}
    )


class AccessTokenSerializer(serializers.Serializer):
    access_token = serializers.CharField()


class AuthDataSerializer(serializers.Serializer):
    user = UserSerializer()
    access_token = serializers.CharField()

from rest_framework import serializers

from authentication.domain.services import MIN_PASSWORD_LENGTH


class LoginRequestSerializer(serializers.Serializer):
    """Request body for sign-in"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(write_only=True, style={"input_type": "password"}, help_text="User's password")


class SignupRequestSerializer(serializers.Serializer):
    """Request body for sign-up"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
        help_text=f"Password (at least {MIN_PASSWORD_LENGTH} characters)",
    )


class UserSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class SessionResponseSerializer(serializers.Serializer):
    """Response for sign-in and sign-up"""

    message = serializers.CharField()
    user = UserSerializer()
    access = serializers.CharField(required=False, allow_null=True, help_text="Hosted backend access token")
    refresh = serializers.CharField(required=False, allow_null=True, help_text="Hosted backend refresh token")
    requires_confirmation = serializers.BooleanField(default=False)


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    errors = serializers.DictField(child=serializers.CharField(), required=False)

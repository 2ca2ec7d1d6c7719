from .auth_serializers import (
    ErrorResponseSerializer,
    LoginRequestSerializer,
    SessionResponseSerializer,
    SignupRequestSerializer,
    UserSerializer,
)

__all__ = [
    "LoginRequestSerializer",
    "SignupRequestSerializer",
    "UserSerializer",
    "SessionResponseSerializer",
    "ErrorResponseSerializer",
]

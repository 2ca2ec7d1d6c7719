from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    ErrorResponseSerializer,
    LoginRequestSerializer,
    SessionResponseSerializer,
    SignupRequestSerializer,
    UserSerializer,
)
from authentication.session import login_session, logout_session
from infrastructure.container import container
from storefront.services.base import ErrorCodes


def get_auth_service():
    """Get AuthService from the DI container."""
    return container.auth_service()


def _failure_status(result, default):
    if result.error_code == ErrorCodes.BACKEND_ERROR:
        return status.HTTP_502_BAD_GATEWAY
    return default


def _session_payload(user, message, requires_confirmation=False):
    return {
        "message": message,
        "user": UserSerializer(user).data,
        "access": user.access_token,
        "refresh": user.refresh_token,
        "requires_confirmation": requires_confirmation,
    }


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Sign in with email and password",
        description="""
        Authenticate against the hosted auth service.

        Returns the hosted backend's access and refresh tokens and also
        starts a storefront session (cookie) for the HTML pages.
        """,
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=SessionResponseSerializer,
                description="Signed in",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "message": "Successfully logged in!",
                            "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "email": "user@example.com"},
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "v1.MmI2ZTM0...",
                            "requires_confirmation": False,
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid request body"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Auth service unavailable"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().sign_in(serializer.validated_data["email"], serializer.validated_data["password"])
        if not result.success:
            return Response({"detail": result.error}, status=_failure_status(result, status.HTTP_401_UNAUTHORIZED))

        login_session(request, result.user)
        return Response(_session_payload(result.user, result.message), status=status.HTTP_200_OK)


class SignupAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_signup",
        summary="Create an account",
        description="""
        Register with the hosted auth service and record the account in the
        `users` table.

        When the project requires email confirmation the response has
        `requires_confirmation: true` and no tokens.
        """,
        request=SignupRequestSerializer,
        responses={
            201: OpenApiResponse(response=SessionResponseSerializer, description="Account created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data or email taken"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Hosted backend unavailable"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignupRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().sign_up(serializer.validated_data["email"], serializer.validated_data["password"])
        if not result.success:
            body = {"detail": result.error}
            if result.errors:
                body["errors"] = result.errors
            return Response(body, status=_failure_status(result, status.HTTP_400_BAD_REQUEST))

        if not result.requires_confirmation:
            login_session(request, result.user)

        return Response(
            _session_payload(result.user, result.message, result.requires_confirmation),
            status=status.HTTP_201_CREATED,
        )


class LogoutAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_logout",
        summary="Sign out",
        responses={204: OpenApiResponse(description="Signed out")},
        tags=["Authentication"],
    )
    def post(self, request):
        get_auth_service().sign_out(request.user)
        logout_session(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user",
        responses={200: UserSerializer, 401: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)

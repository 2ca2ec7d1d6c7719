from .auth_views import LoginAPIView, LogoutAPIView, MeAPIView, SignupAPIView

__all__ = ["LoginAPIView", "SignupAPIView", "LogoutAPIView", "MeAPIView"]

from django.urls import path

from authentication.api.views import LoginAPIView, LogoutAPIView, MeAPIView, SignupAPIView

app_name = "auth_api"

urlpatterns = [
    path("login/", LoginAPIView.as_view(), name="login"),
    path("signup/", SignupAPIView.as_view(), name="signup"),
    path("logout/", LogoutAPIView.as_view(), name="logout"),
    path("me/", MeAPIView.as_view(), name="me"),
]

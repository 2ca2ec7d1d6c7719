from django.urls import path

from . import views

app_name = "authentication"

urlpatterns = [
    path("", views.AuthPageView.as_view(), name="auth"),
    path("logout/", views.logout_view, name="logout"),
]

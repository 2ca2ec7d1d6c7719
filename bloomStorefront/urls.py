"""
URL configuration for bloomStorefront project.

HTML pages are served at the root; the JSON API lives under /api/.
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

urlpatterns = [
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/auth/", include("authentication.api.urls.auth_urls")),
    path("api/", include("storefront.api.urls")),
    # Pages
    path("auth/", include("authentication.urls")),
    path("", include("storefront.urls")),
]

"""
URL configuration for core_backend project.

All API routes live under /api/. Order and kitchen routes come from the
orders app, which registers its own `orders` and `kitchen` prefixes.
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/auth/token", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/", include("orders.urls")),
    path("api/payments/", include("payments.urls")),
    path("api/ordering-window/", include("ordering_window.urls")),
]

# repo-root/config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.common.views import health_check

urlpatterns = [
    path("", lambda request: redirect("/api/docs/")),

    path("admin/", admin.site.urls),

    path("health/", health_check, name="health-check"),

    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),

    path("api/auth/login", TokenObtainPairView.as_view(), name="jwt-login"),
    path("api/auth/refresh", TokenRefreshView.as_view(), name="jwt-refresh"),

    # unauthenticated embed endpoints must resolve before the tenant-slug routes
    path("api/", include("core.public.urls")),

    path("api/", include("core.leads.urls")),
    path("api/", include("core.analytics.urls")),
    path("api/", include("core.catalog.urls")),
    path("api/", include("core.messaging.urls")),
    path("api/", include("core.audit.urls")),
    path("api/", include("core.iam.urls")),
    path("api/", include("core.tenants.urls")),
]

handler404 = "core.common.views.not_found"
handler500 = "core.common.views.server_error"

"""
URL configuration for the logistics coordination service.

Every API route lives under /api/; the OpenAPI document is served at /swagger/.
"""
from django.contrib import admin
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from logistics_core.views import health_check

schema_view = get_schema_view(
    openapi.Info(
        title="Yard Logistics API",
        default_version='v1',
        description="Truck requests, fleet, yard coordination and notifications",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
    authentication_classes=[],
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', health_check, name='health_check'),
    path('api/', include('accounts.urls')),
    path('api/', include('fleet.urls')),
    path('api/truck-requests/', include('truck_requests.urls')),
    path('api/yard/', include('yard.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api/dashboard/', include('dashboards.urls')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('swagger.json', schema_view.without_ui(cache_timeout=0), name='schema-json'),
]

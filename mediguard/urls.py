"""
URL configuration for the MediGuard backend.

API routes come from ``care.routers``.  OpenAPI documentation is exposed
at ``/swagger/`` and ``/redoc/``.  Anything left over falls through to
the single-page app.
"""
from django.urls import path, include, re_path

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from care.views.spa import spa_index

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="MediGuard API",
    default_version='v1',
    description="Accounts, appointments and medications for the MediGuard app.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('', include('care.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
    # Client-side routes of the SPA
    re_path(r'^(?!api/|metrics|healthz|swagger/|redoc/).*$', spa_index, name='spa_index'),
]

"""
URL mappings for the MediGuard API.

Paths mirror the ones the front-end fetches.  Trailing slashes are
deliberately omitted.
"""
from django.urls import path, include

from .auth_views import login_view, register_view
from .views import health
from .views.admin import admin_stats
from .views.records import appointments, medications


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    # Owner-scoped records
    path('api/appointments', appointments, name='appointments'),
    path('api/medications', medications, name='medications'),
    # Admin
    path('api/admin/stats', admin_stats, name='admin_stats'),
]

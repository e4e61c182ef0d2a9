"""
Liveness check for load balancers and the smoke script.

Healthy means the database answers and every MediGuard table
(``users``, ``appointments``, ``medications``, ``health_logs``) exists.
"""
from __future__ import annotations

import logging

from django.apps import apps
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def required_tables() -> list[str]:
    return sorted(m._meta.db_table for m in apps.get_app_config('care').get_models())


def healthz(request):
    try:
        present = set(connection.introspection.table_names())
    except DatabaseError:
        logger.exception('health check could not reach the database')
        return JsonResponse({'ok': False, 'error': 'Database unavailable'}, status=503)

    tables = {name: name in present for name in required_tables()}
    missing = [name for name, found in tables.items() if not found]
    if missing:
        logger.warning('health check: missing tables %s', ', '.join(missing))
        return JsonResponse({'ok': False, 'error': 'Schema incomplete', 'missing': missing}, status=503)
    return JsonResponse({'ok': True, 'tables': tables})

"""
WSGI config for the MediGuard project.

It exposes the WSGI callable as a module-level variable named
``application``.  When ``AUTO_MIGRATE`` is on the schema is brought up to
date before the first request is served.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mediguard.settings')

application = get_wsgi_application()

from care.bootstrap import ensure_schema  # noqa: E402

ensure_schema()

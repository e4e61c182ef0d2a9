"""
ASGI config for the MediGuard project.

Only HTTP is served; configure Django before importing anything that
touches models.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mediguard.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()

from care.bootstrap import ensure_schema  # noqa: E402

ensure_schema()

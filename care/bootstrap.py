"""
Startup schema creation.

The database file is created and migrated the first time the application
is loaded.  ``migrate`` is idempotent, so an up-to-date store is left as
is.
"""
import logging

from django.conf import settings
from django.core.management import call_command

logger = logging.getLogger(__name__)


def ensure_schema() -> bool:
    """Apply pending migrations when ``AUTO_MIGRATE`` is enabled."""
    if not getattr(settings, "AUTO_MIGRATE", False):
        return False
    logger.info("Applying database migrations")
    call_command("migrate", interactive=False, verbosity=0)
    return True

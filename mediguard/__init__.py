"""Django project package for the MediGuard backend."""

"""Core application for the MediGuard backend.

This package holds the account, appointment and medication models, the
bearer-token authentication layer and the JSON API consumed by the SPA.
"""

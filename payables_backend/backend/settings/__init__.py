# backend/settings/__init__.py
"""
Settings package. Nothing is loaded from here on purpose.

DJANGO_SETTINGS_MODULE picks one of:
- backend.settings.dev   local development + tests
- backend.settings.prod  production (PostgreSQL, fail-closed)
"""

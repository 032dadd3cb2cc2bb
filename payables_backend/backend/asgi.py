# backend/asgi.py
"""
ASGI entrypoint for the vendor payables API.

Ledger writes are synchronous ORM calls; run under an ASGI server only with
Django's sync-to-async view adapter (the default for DRF views).
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_asgi_application()

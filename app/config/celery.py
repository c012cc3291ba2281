"""
Celery application.

Runs work that must not block a request or a socket handler, most
notably the AI auto-responder (``ai.tasks.generate_auto_reply``).
Redis is both broker and result backend; tasks are discovered from every
installed app's ``tasks.py``.

Usage:
    celery -A config worker -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()

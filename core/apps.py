"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Sign-in, platform data access and the profile dashboard."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "XP dashboard"

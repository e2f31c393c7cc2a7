"""Django app configuration for kindo_blog."""
from django.apps import AppConfig


class KindoBlogConfig(AppConfig):
    """Configuration for the Kindo blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "kindo_blog"
    verbose_name = "Kindo Blog"

    def ready(self):
        """Connect signal handlers."""
        from . import signals  # noqa: F401

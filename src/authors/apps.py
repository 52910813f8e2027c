"""Authors Django App Configuration."""

from django.apps import AppConfig


class AuthorsConfig(AppConfig):
    """Configuration for the authors app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authors"
    verbose_name = "Authors"

from django.apps import AppConfig


class BlogConfig(AppConfig):
    """Configuration for the blog Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'blog'

    def ready(self) -> None:
        from . import signals  # noqa: F401

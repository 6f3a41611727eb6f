"""Django app configuration for django-cms-accounts."""

from django.apps import AppConfig


class DjangoCMSAccountsConfig(AppConfig):
    """App config for django-cms-accounts."""

    name = "django_cms_accounts"
    verbose_name = "CMS Accounts"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from . import conf, signals  # noqa: F401

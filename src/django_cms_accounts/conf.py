"""Configuration for django-cms-accounts."""

import logging
from collections.abc import Iterable
from dataclasses import fields
from datetime import timedelta
from functools import lru_cache

from django.conf import settings
from django.contrib.auth import password_validation
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from .exceptions import AccountsConfigError, PluginRegistryError
from .plugins import PluginDescriptor, PluginRegistry, Plugins

logger = logging.getLogger(__name__)

DEFAULT_AUTHENTICATION_KEYS = ("username", "email")
DEFAULT_RESET_PASSWORD_WITHIN = timedelta(hours=6)
DEFAULT_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
        "OPTIONS": {"min_length": 6},
    },
    {
        "NAME": "django_cms_accounts.validators.MaximumLengthValidator",
        "OPTIONS": {"max_length": 128},
    },
]

_DESCRIPTOR_FIELDS = {f.name for f in fields(PluginDescriptor)}


def get_setting(name: str, default=None):
    """Get a setting with CMS_ACCOUNTS_ prefix."""
    return getattr(settings, f"CMS_ACCOUNTS_{name}", default)


def _build_descriptor(entry) -> PluginDescriptor:
    if isinstance(entry, PluginDescriptor):
        return entry
    if isinstance(entry, str):
        return PluginDescriptor(name=entry)
    if isinstance(entry, dict):
        unknown = set(entry) - _DESCRIPTOR_FIELDS
        if unknown:
            raise AccountsConfigError(
                f"CMS_ACCOUNTS_PLUGINS entry has unknown keys: {sorted(unknown)}"
            )
        name = entry.get("name")
        if not name:
            raise AccountsConfigError("CMS_ACCOUNTS_PLUGINS entries require a 'name'")
        if not isinstance(name, str):
            raise AccountsConfigError(
                f"CMS_ACCOUNTS_PLUGINS entry name must be a string, got {type(name).__name__}"
            )
        return PluginDescriptor(**entry)
    raise AccountsConfigError(
        f"CMS_ACCOUNTS_PLUGINS entries must be names, mappings or "
        f"PluginDescriptor instances, got {type(entry).__name__}"
    )


@lru_cache(maxsize=1)
def get_plugin_catalog() -> Plugins:
    """Build the process-wide plugin catalog from settings.

    CMS_ACCOUNTS_PLUGINS may be a list of entries, or a dotted path to
    such a list or to a callable returning one. Each entry is a plugin
    name, a mapping of PluginDescriptor fields, or a PluginDescriptor.

    Raises:
        AccountsConfigError: If the setting cannot be turned into a catalog
    """
    definition = get_setting("PLUGINS", [])

    if isinstance(definition, str):
        try:
            definition = import_string(definition)
        except ImportError as e:
            raise AccountsConfigError(f"Cannot import CMS_ACCOUNTS_PLUGINS: {e}")
        if callable(definition):
            definition = definition()

    if isinstance(definition, (str, bytes)) or not isinstance(definition, Iterable):
        raise AccountsConfigError(
            f"CMS_ACCOUNTS_PLUGINS must be a list of plugins, got {type(definition).__name__}"
        )

    registry = PluginRegistry()
    try:
        for entry in definition:
            registry.register(_build_descriptor(entry))
    except PluginRegistryError as e:
        raise AccountsConfigError(f"Invalid CMS_ACCOUNTS_PLUGINS: {e}")

    catalog = registry.freeze()
    logger.debug("Plugin catalog loaded: %s", catalog.names)
    return catalog


def clear_plugin_catalog_cache():
    """Drop the cached catalog. Useful for testing."""
    get_plugin_catalog.cache_clear()


@receiver(setting_changed)
def _reset_catalog_on_setting_change(sender, setting, **kwargs):
    if setting == "CMS_ACCOUNTS_PLUGINS":
        clear_plugin_catalog_cache()


def get_authentication_keys() -> tuple[str, ...]:
    """User fields a login identifier is matched against."""
    keys = tuple(get_setting("AUTHENTICATION_KEYS", DEFAULT_AUTHENTICATION_KEYS))
    allowed = set(DEFAULT_AUTHENTICATION_KEYS)
    if not keys or not set(keys) <= allowed:
        raise AccountsConfigError(
            f"CMS_ACCOUNTS_AUTHENTICATION_KEYS must be a non-empty subset of {sorted(allowed)}"
        )
    return keys


def get_reset_password_within() -> timedelta:
    """How long a password reset token stays valid."""
    within = get_setting("RESET_PASSWORD_WITHIN", DEFAULT_RESET_PASSWORD_WITHIN)
    if not isinstance(within, timedelta) or within <= timedelta(0):
        raise AccountsConfigError(
            "CMS_ACCOUNTS_RESET_PASSWORD_WITHIN must be a positive timedelta"
        )
    return within


def get_password_validators() -> list:
    """Password validators applied when a user is validated.

    CMS_ACCOUNTS_PASSWORD_VALIDATORS (same format as
    AUTH_PASSWORD_VALIDATORS, default 6 to 128 characters) followed by the
    project's AUTH_PASSWORD_VALIDATORS.
    """
    configured = get_setting("PASSWORD_VALIDATORS", DEFAULT_PASSWORD_VALIDATORS)
    return (
        password_validation.get_password_validators(configured)
        + password_validation.get_default_password_validators()
    )

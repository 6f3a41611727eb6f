"""Django CMS Accounts - back-office users, roles and plugin access."""

__version__ = "0.1.0"

_LAZY = {
    "Role": "django_cms_accounts.models",
    "RoleMembership": "django_cms_accounts.models",
    "User": "django_cms_accounts.models",
    "UserPlugin": "django_cms_accounts.models",
    "PluginAccess": "django_cms_accounts.access",
    "PluginDescriptor": "django_cms_accounts.plugins",
    "PluginRegistry": "django_cms_accounts.plugins",
    "Plugins": "django_cms_accounts.plugins",
    "SystemRole": "django_cms_accounts.roles",
    "require_plugin": "django_cms_accounts.decorators",
    "PluginRequiredMixin": "django_cms_accounts.views",
}


def __getattr__(name):
    """Lazy imports to avoid AppRegistryNotReady errors."""
    if name in _LAZY:
        from importlib import import_module

        return getattr(import_module(_LAZY[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = sorted(_LAZY)

# tests/conftest.py
"""
Pytest fixtures for django-cms-accounts.
"""
import pytest

from django_cms_accounts.conf import clear_plugin_catalog_cache
from django_cms_accounts.plugins import PluginDescriptor, PluginRegistry


@pytest.fixture(autouse=True)
def fresh_catalog():
    """Rebuild the configured catalog for every test."""
    clear_plugin_catalog_cache()
    yield
    clear_plugin_catalog_cache()


@pytest.fixture
def catalog():
    """A small catalog independent of settings.

    Registration order: dashboard, pages, images, core, hidden_tool.
    """
    registry = PluginRegistry()
    registry.register(PluginDescriptor(name="dashboard", url="/admin/dashboard/"))
    registry.register(PluginDescriptor(name="pages", url="/admin/pages/"))
    registry.register(PluginDescriptor(name="images", url="/admin/images/"))
    registry.register(
        PluginDescriptor(name="core", show_in_menu=False, always_allow_access=True)
    )
    registry.register(
        PluginDescriptor(name="hidden_tool", url="/admin/hidden/", show_in_menu=False)
    )
    return registry.freeze()


@pytest.fixture
def make_user(db):
    """Factory creating saved users with no roles or plugins."""
    from django_cms_accounts.models import User

    def _make_user(username="user", email=None, password="s3cret-pass", **extra):
        return User.objects.create_user(
            username=username,
            email=email or f"{username.strip().replace(' ', '.').lower()}@example.com",
            password=password,
            **extra,
        )

    return _make_user


@pytest.fixture
def new_user():
    """Factory building unsaved users with a password set."""
    from django_cms_accounts.models import User

    def _new_user(username="user", email=None, password="s3cret-pass", **extra):
        user = User(
            username=username,
            email=email or f"{username.strip().replace(' ', '.').lower()}@example.com",
            **extra,
        )
        user.set_password(password)
        return user

    return _new_user


@pytest.fixture
def refinery_user(make_user):
    """A saved user holding only the Refinery role."""
    user = make_user("editor")
    user.add_role("refinery")
    return user


@pytest.fixture
def superuser(make_user):
    """A saved user holding Refinery and Superuser."""
    user = make_user("admin")
    user.add_role("refinery")
    user.add_role("superuser")
    return user

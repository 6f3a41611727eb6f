"""Plugin access for back-office users.

A user may open a plugin when:
1. They hold the Superuser role (every registered plugin), or
2. They have an explicit grant for it, or
3. The catalog marks it as always allowed

The functions here read roles and grants on every call. PluginAccess
holds one computed result for the duration of a request.
"""

from dataclasses import dataclass, field

from .conf import get_plugin_catalog
from .models import RoleMembership
from .plugins import Plugins
from .roles import SystemRole
from .services import has_role, is_persisted


def _catalog(catalog: Plugins | None) -> Plugins:
    return get_plugin_catalog() if catalog is None else catalog


def authorized_plugins(user, catalog: Plugins | None = None) -> set[str]:
    """Names the user may access through grants or the always-allowed list.

    Grants for plugins missing from the catalog are included; they simply
    never match a registered plugin.
    """
    catalog = _catalog(catalog)
    names = set(catalog.always_allowed().names)
    if is_persisted(user):
        names.update(user.plugins.values_list("name", flat=True))
    return names


def active_plugins(user, catalog: Plugins | None = None) -> Plugins:
    """Registered plugins the user can open, in catalog order."""
    catalog = _catalog(catalog)
    if has_role(user, SystemRole.SUPERUSER):
        return catalog

    authorized = authorized_plugins(user, catalog)
    return catalog.filter(lambda plugin: plugin.name in authorized)


def has_plugin(user, name: str, catalog: Plugins | None = None) -> bool:
    return name in active_plugins(user, catalog).names


def landing_url(user, catalog: Plugins | None = None) -> str | None:
    """URL of the first menu plugin the user can open, or None."""
    return active_plugins(user, catalog).in_menu().first_url_in_menu()


def can_delete(acting_user, target_user=None) -> bool:
    """Check if acting_user may delete target_user.

    Deletion is refused for unsaved users, superusers, before any user
    holds the Refinery role, and for the acting user themselves.
    target_user defaults to acting_user, which is therefore always refused.
    """
    if target_user is None:
        target_user = acting_user

    return (
        is_persisted(target_user)
        and not has_role(target_user, SystemRole.SUPERUSER)
        and RoleMembership.objects.filter(role__title=SystemRole.REFINERY).exists()
        and acting_user.pk != target_user.pk
    )


def can_edit(acting_user, target_user=None) -> bool:
    """Check if acting_user may edit target_user.

    Users may edit themselves; superusers may edit any saved user.
    """
    if target_user is None:
        target_user = acting_user

    return is_persisted(target_user) and (
        target_user == acting_user or has_role(acting_user, SystemRole.SUPERUSER)
    )


@dataclass(frozen=True)
class PluginAccess:
    """Snapshot of one user's plugin access.

    Built once per request by PluginAccessMiddleware. Changes to roles or
    grants made during the request are not reflected; build a new
    snapshot with for_user() if needed.

    Anonymous and unsaved users get an empty snapshot, without the
    always-allowed plugins that active_plugins() would return for them.
    """

    user_id: object
    plugins: Plugins = field(default_factory=Plugins)
    is_superuser: bool = False

    @classmethod
    def for_user(cls, user, catalog: Plugins | None = None) -> "PluginAccess":
        if user is None or not getattr(user, "is_authenticated", False) or not is_persisted(user):
            return cls.anonymous()
        return cls(
            user_id=user.pk,
            plugins=active_plugins(user, catalog),
            is_superuser=has_role(user, SystemRole.SUPERUSER),
        )

    @classmethod
    def anonymous(cls) -> "PluginAccess":
        return cls(user_id=None)

    @property
    def names(self) -> list[str]:
        return self.plugins.names

    def has_plugin(self, name: str) -> bool:
        return name in self.plugins

    @property
    def landing_url(self) -> str | None:
        return self.plugins.in_menu().first_url_in_menu()

"""
Accounts User Mixin - role and plugin methods on the User model.

The methods delegate to django_cms_accounts.services and
django_cms_accounts.access, so views and templates can write
``user.has_plugin("pages")`` instead of importing the service layer.

Nothing here caches: every call reads the current roles and grants.
For a per-request snapshot use ``request.plugin_access`` (see
PluginAccessMiddleware).
"""


class AccountsUserMixin:
    """Mixin that adds role and plugin methods to the User model.

    This enables:
    - user.add_role(title) / user.has_role(title)
    - user.set_plugins(names)
    - user.authorized_plugins() -> set[str]
    - user.active_plugins() -> Plugins
    - user.has_plugin(name) -> bool
    - user.landing_url() -> str | None
    - user.can_delete(other) / user.can_edit(other) -> bool
    - user.create_first() -> bool
    """

    def add_role(self, title):
        from django_cms_accounts.services import add_role

        return add_role(self, title)

    def has_role(self, title) -> bool:
        from django_cms_accounts.services import has_role

        return has_role(self, title)

    def set_plugins(self, plugin_names):
        """Replace this user's grants; see services.set_plugins()."""
        from django_cms_accounts.services import set_plugins

        return set_plugins(self, plugin_names)

    def authorized_plugins(self, catalog=None) -> set:
        from django_cms_accounts.access import authorized_plugins

        return authorized_plugins(self, catalog)

    def active_plugins(self, catalog=None):
        from django_cms_accounts.access import active_plugins

        return active_plugins(self, catalog)

    def has_plugin(self, name: str, catalog=None) -> bool:
        from django_cms_accounts.access import has_plugin

        return has_plugin(self, name, catalog)

    def landing_url(self, catalog=None):
        """URL of the first menu plugin this user can open.

        Used as the user's back-office root.
        """
        from django_cms_accounts.access import landing_url

        return landing_url(self, catalog)

    def can_delete(self, user_to_delete=None) -> bool:
        from django_cms_accounts.access import can_delete

        return can_delete(self, user_to_delete)

    def can_edit(self, user_to_edit=None) -> bool:
        from django_cms_accounts.access import can_edit

        return can_edit(self, user_to_edit)

    def create_first(self, catalog=None) -> bool:
        from django_cms_accounts.services import create_first

        return create_first(self, catalog)
